"""
Plan service for the Soccer Substitution Planner application.

This module is the entry point the shells use: it owns a :class:`PlanState`,
validates user input before it reaches the engine and re-runs the pure
evaluation and timeline passes on demand.
"""
import logging
from typing import Iterable, List, Optional, Union

from ..models import (
    AssignmentGrid, Evaluation, PlanConfig, PlanState, TimelineEvent, parse_roster
)
from ..utils.constants import HALVES, SLOT_TIME_PRECISION
from .evaluation_service import evaluate
from .schedule_service import CascadeMode, assign, reshape
from .timeline_service import build_timeline

logger = logging.getLogger(__name__)


class PlanAssignmentError(ValueError):
    """Raised when an assignment targets a cell outside the current grid."""
    pass


class PlanService:
    """
    Service for editing a substitution plan and reading back its results.

    Every mutation leaves the grid consistent with the configuration; every
    read recomputes from scratch.
    """

    def __init__(self, state: Optional[PlanState] = None):
        self.state = state or PlanState.default()

    # ---------- Mutations ---------- #

    def update_config(self, half_duration_minutes: Optional[float] = None,
                      slot_interval_minutes: Optional[float] = None,
                      min_minutes_per_player: Optional[float] = None,
                      formation_id: Optional[str] = None) -> PlanConfig:
        """
        Change timing or formation and reshape the grid to match.

        Omitted arguments keep their current value.

        Raises:
            PlanConfigError: If the resulting configuration is invalid
        """
        changes = {
            "half_duration_minutes": half_duration_minutes,
            "slot_interval_minutes": slot_interval_minutes,
            "min_minutes_per_player": min_minutes_per_player,
            "formation_id": formation_id,
        }
        old_config = self.state.config
        new_config = old_config.with_changes(
            **{key: value for key, value in changes.items() if value is not None}
        )
        new_config.validate()

        if new_config != old_config:
            self.state.grid = reshape(self.state.grid, old_config, new_config)
            self.state.config = new_config
            logger.info("Plan configuration changed to %s", new_config.to_dict())
        return new_config

    def set_players(self, source: Union[str, Iterable[str], None]) -> List[str]:
        """Replace the roster from free text or a list of names."""
        self.state.players = parse_roster(source)
        return self.state.players

    def set_title(self, title: Optional[str]) -> str:
        self.state.title = (title or "").strip()
        return self.state.title

    def assign(self, position: str, half: int, slot_time: float, player: str,
               mode: CascadeMode = CascadeMode.NONE) -> AssignmentGrid:
        """
        Assign a player to one cell, optionally cascading forward.

        Args:
            position: Position id in the current formation
            half: 1 or 2
            slot_time: Slot start time in minutes
            player: Player name, ``""`` to clear the cell
            mode: Cascade behaviour for later slots

        Raises:
            PlanAssignmentError: If the cell does not exist in the current plan
        """
        config = self.state.config
        if position not in config.position_order:
            raise PlanAssignmentError(
                f"Position '{position}' is not part of formation {config.formation_id}"
            )
        try:
            half = int(half)
            slot_time = round(float(slot_time), SLOT_TIME_PRECISION)
        except (TypeError, ValueError) as exc:
            raise PlanAssignmentError(f"Invalid half or slot time: {exc}") from exc
        if half not in HALVES:
            raise PlanAssignmentError(f"Half must be one of {HALVES}, got {half}")
        if not self.state.grid.has(position, half, slot_time):
            raise PlanAssignmentError(f"No slot at minute {slot_time} in half {half}")

        return assign(self.state.grid, position, half, slot_time, player or "", mode)

    def clear(self) -> PlanState:
        """Reset to the default empty plan."""
        self.state = PlanState.default()
        logger.info("Plan cleared")
        return self.state

    def load_state(self, state: PlanState) -> None:
        self.state = state

    # ---------- Derived results ---------- #

    def evaluate(self) -> Evaluation:
        return evaluate(self.state.grid, self.state.config, self.state.players)

    def timeline(self, evaluation: Optional[Evaluation] = None) -> List[TimelineEvent]:
        evaluation = evaluation or self.evaluate()
        return build_timeline(self.state.grid, self.state.config, evaluation)

    def summary(self) -> dict:
        """
        Build the full JSON view of the plan and its derived results.

        Returns:
            Dictionary with the plan, cell flags, player totals and timeline
        """
        evaluation = self.evaluate()
        events = self.timeline(evaluation)
        config = self.state.config

        cells = []
        for key, flags in evaluation.cell_flags.items():
            position, half, slot_time = key
            cells.append({
                "position": position,
                "half": half,
                "time": slot_time,
                "player": self.state.grid.get(*key),
                **flags.to_dict(),
            })

        return {
            "plan": self.state.to_json(),
            "slot_times": config.slot_times(),
            "position_order": list(config.position_order),
            "cells": cells,
            "players": [aggregate.to_dict() for aggregate in evaluation.player_aggregates],
            "player_count": evaluation.player_count,
            "unlisted_players": evaluation.unlisted_players,
            "warning_count": evaluation.warning_count,
            "error_count": evaluation.error_count,
            "timeline": [event.to_dict() for event in events],
        }
