"""
Assignment grid model for the Soccer Substitution Planner.

The grid is the single mutable source of truth of a plan: one player name
per ``(position, half, slot_time)`` cell, with ``""`` meaning unassigned.
"""
from typing import Dict, Iterator, List, Optional, Tuple

from .config import GridKey, PlanConfig


class AssignmentGrid:
    """
    Mapping of grid cells to player names.

    Every key implied by the configuration the grid was built for is always
    present, so reading a cell never needs a default.
    """

    def __init__(self, cells: Optional[Dict[GridKey, str]] = None):
        self._cells: Dict[GridKey, str] = dict(cells or {})

    @classmethod
    def for_config(cls, config: PlanConfig) -> "AssignmentGrid":
        """Create a grid with every cell implied by ``config`` unassigned."""
        return cls({key: "" for key in config.keys()})

    def get(self, position: str, half: int, slot_time: float) -> str:
        return self._cells[(position, half, slot_time)]

    def set(self, position: str, half: int, slot_time: float, player: str) -> None:
        """
        Assign a player to a cell.

        Raises:
            KeyError: If the cell is not part of the grid
        """
        key = (position, half, slot_time)
        if key not in self._cells:
            raise KeyError(key)
        self._cells[key] = (player or "").strip()

    def has(self, position: str, half: int, slot_time: float) -> bool:
        return (position, half, slot_time) in self._cells

    def series(self, position: str, half: int) -> List[float]:
        """Sorted slot times of one position/half series."""
        return sorted(
            slot_time for (pos, h, slot_time) in self._cells
            if pos == position and h == half
        )

    def keys(self) -> List[GridKey]:
        return list(self._cells.keys())

    def items(self) -> Iterator[Tuple[GridKey, str]]:
        return iter(self._cells.items())

    def players(self) -> List[str]:
        """Distinct non-empty player names found in the grid, sorted."""
        return sorted({player for player in self._cells.values() if player})

    def copy(self) -> "AssignmentGrid":
        return AssignmentGrid(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, key) -> bool:
        return key in self._cells

    def __eq__(self, other) -> bool:
        if not isinstance(other, AssignmentGrid):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        assigned = sum(1 for player in self._cells.values() if player)
        return f"AssignmentGrid(cells={len(self._cells)}, assigned={assigned})"
