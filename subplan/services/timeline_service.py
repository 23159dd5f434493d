"""
Substitution timeline synthesis.

Turns the grid plus the validator's change flags into the narrative a coach
reads on the sideline: who starts each half and, slot by slot, who comes on,
who moves and who goes off.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Tuple, Union

from ..models import AssignmentGrid, CellFlags, Evaluation, PlanConfig, TimelineEvent
from ..models.config import GridKey
from ..utils.constants import HALVES

logger = logging.getLogger(__name__)

CellFlagSource = Union[Evaluation, Mapping[GridKey, CellFlags]]


def _occupancy(grid: AssignmentGrid, config: PlanConfig, half: int,
               slot_time: float) -> Dict[str, str]:
    """Map each player on the field at one slot to their position."""
    on_field: Dict[str, str] = {}
    for position in config.position_order:
        player = grid.get(position, half, slot_time)
        if player:
            # A double-booked player resolves to the later position.
            on_field[player] = position
    return on_field


def build_timeline(grid: AssignmentGrid, config: PlanConfig,
                   cell_flags: CellFlagSource) -> List[TimelineEvent]:
    """
    Build the ordered substitution narrative for both halves.

    Events are ordered by half, then slot time, then formation position
    order. Each half opens with a start event and closes with a separator.

    Args:
        grid: Current assignments
        config: Active configuration
        cell_flags: Output of :func:`evaluate` (or its ``cell_flags``)

    Returns:
        List of timeline events
    """
    if isinstance(cell_flags, Evaluation):
        cell_flags = cell_flags.cell_flags

    times = config.slot_times()
    events: List[TimelineEvent] = []

    for half in HALVES:
        starters: Tuple[Tuple[str, str], ...] = tuple(
            (position, grid.get(position, half, times[0]))
            for position in config.position_order
        )
        events.append(TimelineEvent(kind="start", half=half, time=times[0], starters=starters))

        previous_on_field = _occupancy(grid, config, half, times[0])
        for previous_time, slot_time in zip(times, times[1:]):
            on_field = _occupancy(grid, config, half, slot_time)

            for position in config.position_order:
                if not cell_flags[(position, half, slot_time)].is_change:
                    continue

                player = grid.get(position, half, slot_time)
                previous_player = grid.get(position, half, previous_time)
                player_out = ""
                if previous_player and previous_player not in on_field:
                    player_out = previous_player

                # An emptied cell is reported as "in" with no player.
                if player in previous_on_field:
                    kind, from_position = "move", previous_on_field[player]
                else:
                    kind, from_position = "in", ""

                events.append(
                    TimelineEvent(
                        kind=kind,
                        half=half,
                        time=slot_time,
                        player=player,
                        position=position,
                        from_position=from_position,
                        player_out=player_out,
                    )
                )

            previous_on_field = on_field

        events.append(TimelineEvent(kind="separator", half=half))

    logger.debug("Built timeline with %d events", len(events))
    return events


def timeline_lines(events: List[TimelineEvent]) -> List[str]:
    """Render events to their text lines (separators become blank lines)."""
    return [event.text for event in events]
