"""
Validation and playing time aggregation for substitution plans.

A single pass over the grid derives every cell flag (change boundary, empty
cell, double booking) and each roster player's minutes and positions. The
pass is recomputed from scratch after every edit.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..models import AssignmentGrid, CellFlags, Evaluation, PlanConfig, PlayerAggregate
from ..models.config import GridKey
from ..utils.constants import HALVES

logger = logging.getLogger(__name__)


def evaluate(grid: AssignmentGrid, config: PlanConfig,
             players: Optional[Iterable[str]] = None) -> Evaluation:
    """
    Derive cell flags and per-player aggregates from the grid.

    Only cells implied by ``config`` (its formation and slot times) are read.

    Args:
        grid: Current assignments
        config: Active configuration
        players: Roster in canonical sorted order

    Returns:
        Evaluation with flags for every cell and one aggregate per roster player
    """
    roster = list(players or [])
    interval = config.slot_interval_minutes
    times = config.slot_times()

    change: Dict[GridKey, bool] = {}
    warning: Dict[GridKey, bool] = {}
    error: Dict[GridKey, bool] = {}
    first_claim: Dict[Tuple[str, int, float], str] = {}
    minutes: Dict[str, float] = {}
    positions_played: Dict[str, Set[str]] = {}

    for half in HALVES:
        for position in config.position_order:
            previous_player = ""
            for slot_time in times:
                key = (position, half, slot_time)
                player = grid.get(position, half, slot_time)

                change[key] = player != previous_player
                previous_player = player
                error.setdefault(key, False)

                if not player:
                    warning[key] = True
                    continue
                warning[key] = False

                # Flag any player in two places at once.
                collision = (player, half, slot_time)
                if collision not in first_claim:
                    first_claim[collision] = position
                else:
                    error[key] = True
                    error[(first_claim[collision], half, slot_time)] = True

                minutes[player] = minutes.get(player, 0) + interval
                positions_played.setdefault(player, set()).add(position)

    cell_flags = {
        key: CellFlags(is_change=change[key], is_warning=warning[key], is_error=error[key])
        for key in change
    }

    order = {position: index for index, position in enumerate(config.position_order)}
    aggregates: List[PlayerAggregate] = []
    for name in roster:
        total = minutes.get(name, 0)
        aggregates.append(
            PlayerAggregate(
                name=name,
                total_minutes=total,
                positions_played=sorted(positions_played.get(name, ()), key=order.get),
                under_minimum=total < config.min_minutes_per_player,
            )
        )

    listed = set(roster)
    unlisted = sorted(name for name in minutes if name not in listed)

    logger.debug(
        "Evaluated %d cells for %d roster players (%d unlisted)",
        len(cell_flags), len(roster), len(unlisted),
    )
    return Evaluation(
        cell_flags=cell_flags,
        player_aggregates=aggregates,
        player_count=len(roster),
        unlisted_players=unlisted,
    )
