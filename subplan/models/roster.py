"""Roster parsing for the Soccer Substitution Planner."""
from typing import Iterable, List, Union


def parse_roster(source: Union[str, Iterable[str], None]) -> List[str]:
    """
    Turn free-text roster input into the canonical player list.

    Lines (or items) are trimmed, blanks dropped, duplicates removed and the
    result sorted lexicographically.

    Args:
        source: Newline-separated text or an iterable of names

    Returns:
        Sorted list of unique player names

    Example:
        >>> parse_roster(" Zoe\\n\\nAda \\nZoe\\n")
        ['Ada', 'Zoe']
    """
    if source is None:
        return []
    if isinstance(source, str):
        source = source.split("\n")
    return sorted({name.strip() for name in source if name and name.strip()})
