"""
Grid mutation operations: cascade-fill, single assignment and reshape.

These are the only operations that write to an :class:`AssignmentGrid`
besides direct edits. Callers re-run :func:`evaluate` and
:func:`build_timeline` afterwards.
"""
from __future__ import annotations

import logging
from enum import Enum

from ..models import AssignmentGrid, PlanConfig

logger = logging.getLogger(__name__)


class CascadeMode(Enum):
    """How an assignment propagates to later slots of the same position/half."""
    NONE = "none"
    FILL = "fill"  # fill empty later slots only
    OVERWRITE = "overwrite"  # replace every later slot

    @classmethod
    def from_value(cls, value) -> "CascadeMode":
        """Parse a mode from its string value, a bool overwrite flag or None."""
        if isinstance(value, CascadeMode):
            return value
        if value is None or value == "":
            return cls.NONE
        if isinstance(value, bool):
            return cls.OVERWRITE if value else cls.FILL
        return cls(str(value).lower())


def cascade(grid: AssignmentGrid, position: str, half: int, from_time: float,
            player: str, overwrite: bool) -> AssignmentGrid:
    """
    Propagate ``player`` to every slot after ``from_time`` for one position/half.

    Empty cells are always filled; occupied cells are replaced only when
    ``overwrite`` is true. ``from_time`` itself, earlier slots and other
    positions are left alone.

    Args:
        grid: Grid to mutate in place
        position: Position id of the series
        half: 1 or 2
        from_time: Slot the assignment was made at
        player: Player name to propagate (``""`` clears when overwriting)
        overwrite: Replace occupied cells too

    Returns:
        The same grid, for chaining
    """
    changed = 0
    for slot_time in grid.series(position, half):
        if slot_time <= from_time:
            continue
        current = grid.get(position, half, slot_time)
        if not current or overwrite:
            if current != player:
                changed += 1
            grid.set(position, half, slot_time, player)

    logger.debug(
        "Cascaded %r at %s half %s from %s (overwrite=%s): %d cells changed",
        player, position, half, from_time, overwrite, changed,
    )
    return grid


def assign(grid: AssignmentGrid, position: str, half: int, slot_time: float,
           player: str, mode: CascadeMode = CascadeMode.NONE) -> AssignmentGrid:
    """
    Set one cell and optionally cascade the choice forward.

    Raises:
        KeyError: If the cell is not part of the grid
    """
    grid.set(position, half, slot_time, player)
    if mode is not CascadeMode.NONE:
        cascade(grid, position, half, slot_time, player,
                overwrite=mode is CascadeMode.OVERWRITE)
    return grid


def reshape(grid: AssignmentGrid, old_config: PlanConfig,
            new_config: PlanConfig) -> AssignmentGrid:
    """
    Build a grid for ``new_config`` that keeps every surviving assignment.

    Keys implied by both configurations keep their value; keys new to
    ``new_config`` start empty; keys it no longer implies are dropped. A
    formation switch therefore discards positions the new formation lacks.

    Returns:
        New grid (``grid`` itself is not modified)
    """
    old_keys = set(old_config.keys())
    reshaped = AssignmentGrid.for_config(new_config)
    kept = 0
    for key in reshaped.keys():
        if key in old_keys and key in grid:
            reshaped.set(*key, grid.get(*key))
            kept += 1

    logger.debug(
        "Reshaped grid from %d to %d cells (%d carried over)",
        len(grid), len(reshaped), kept,
    )
    return reshaped
