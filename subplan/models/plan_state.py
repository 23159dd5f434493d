"""
PlanState model for the Soccer Substitution Planner application.

This module contains the PlanState dataclass which represents the complete
state of a substitution plan, including configuration, roster, grid and the
JSON shape used by persistence and share links.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import PlanConfig
from .grid import AssignmentGrid
from .roster import parse_roster
from ..utils.constants import (
    DEFAULT_FORMATION_ID, DEFAULT_HALF_DURATION_MIN,
    DEFAULT_MIN_MINUTES_PER_PLAYER, DEFAULT_SLOT_INTERVAL_MIN, HALVES,
    SLOT_TIME_PRECISION
)
from ..utils.time_utils import parse_slot_key, slot_key

# Older saves used the browser tool's camelCase names
_LEGACY_KEYS = {
    "half_duration_minutes": ("halfDurationMinutes", "timePerHalf"),
    "min_minutes_per_player": ("minMinutesPerPlayer", "minTimePerPlayer"),
    "slot_interval_minutes": ("slotIntervalMinutes", "schedulingInterval"),
    "formation_id": ("formationId",),
}


class PlanFormatError(ValueError):
    """Raised when stored or shared plan data cannot be decoded."""
    pass


def _number(name, value, default):
    if value is None or value == "":
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise PlanFormatError(f"{name!r} must be a number")
    try:
        number = float(value)
    except ValueError as exc:
        raise PlanFormatError(f"{name!r} must be a number, got {value!r}") from exc
    return int(number) if number.is_integer() else number


@dataclass
class PlanState:
    """
    Represents the complete state of a substitution plan.

    Attributes:
        title: Free-text plan title (e.g. the opponent)
        config: Timing and formation parameters
        players: Canonical sorted roster
        grid: Player assignment per (position, half, slot)
    """
    title: str = ""
    config: PlanConfig = field(default_factory=PlanConfig)
    players: List[str] = field(default_factory=list)
    grid: Optional[AssignmentGrid] = None

    def __post_init__(self):
        if self.grid is None:
            self.grid = AssignmentGrid.for_config(self.config)
        self.players = parse_roster(self.players)

    @classmethod
    def default(cls) -> "PlanState":
        """The empty plan a "clear" resets to."""
        return cls(
            config=PlanConfig(
                half_duration_minutes=DEFAULT_HALF_DURATION_MIN,
                slot_interval_minutes=DEFAULT_SLOT_INTERVAL_MIN,
                min_minutes_per_player=DEFAULT_MIN_MINUTES_PER_PLAYER,
                formation_id=DEFAULT_FORMATION_ID,
            )
        )

    def to_json(self) -> dict:
        """
        Convert PlanState to JSON-serializable dictionary.

        Returns:
            Dictionary with every cell of the current grid under
            ``positions[position]["{half}-{slot}"]``
        """
        positions: Dict[str, Dict[str, str]] = {}
        times = self.config.slot_times()
        for position in self.config.position_order:
            cells = positions.setdefault(position, {})
            for half in HALVES:
                for slot_time in times:
                    cells[slot_key(half, slot_time)] = self.grid.get(position, half, slot_time)

        return {
            "title": self.title,
            "half_duration_minutes": self.config.half_duration_minutes,
            "min_minutes_per_player": self.config.min_minutes_per_player,
            "slot_interval_minutes": self.config.slot_interval_minutes,
            "players": list(self.players),
            "formation_id": self.config.formation_id,
            "positions": positions,
        }

    @staticmethod
    def from_json(data: dict) -> "PlanState":
        """
        Create PlanState from JSON dictionary.

        Missing fields fall back to the defaults and missing cells to ``""``.
        Cells outside the configured grid are ignored. Slot keys are matched
        by value, so ``"1-0.30000000000000004"`` fills the ``0.3`` slot.

        Args:
            data: Dictionary with plan data

        Returns:
            New PlanState instance

        Raises:
            PlanFormatError: If a field has the wrong JSON type
            PlanConfigError: If the stored configuration is invalid
        """
        if not isinstance(data, dict):
            raise PlanFormatError("Plan data must be a JSON object")

        def _get(key, default):
            if key in data:
                return data[key]
            for legacy in _LEGACY_KEYS.get(key, ()):
                if legacy in data:
                    return data[legacy]
            return default

        formation_id = _get("formation_id", None)
        if formation_id is not None and not isinstance(formation_id, str):
            raise PlanFormatError("'formation_id' must be a string")

        config = PlanConfig(
            half_duration_minutes=_number(
                "half_duration_minutes", _get("half_duration_minutes", None),
                DEFAULT_HALF_DURATION_MIN),
            slot_interval_minutes=_number(
                "slot_interval_minutes", _get("slot_interval_minutes", None),
                DEFAULT_SLOT_INTERVAL_MIN),
            min_minutes_per_player=_number(
                "min_minutes_per_player", _get("min_minutes_per_player", None),
                DEFAULT_MIN_MINUTES_PER_PLAYER),
            formation_id=formation_id or DEFAULT_FORMATION_ID,
        )
        config.validate()

        players = data.get("players")
        if players is not None and not isinstance(players, str):
            if not isinstance(players, list) or not all(isinstance(p, str) for p in players):
                raise PlanFormatError("'players' must be text or a list of names")

        positions = data.get("positions") or {}
        if not isinstance(positions, dict):
            raise PlanFormatError("'positions' must be an object keyed by position")

        state = PlanState(
            title=str(data.get("title") or ""),
            config=config,
            players=parse_roster(players),
        )

        for position, cells in positions.items():
            if cells is None:
                continue
            if not isinstance(cells, dict):
                raise PlanFormatError(f"Cells of position {position!r} must be an object")
            for key, player in cells.items():
                if player is None:
                    continue
                if not isinstance(player, str):
                    raise PlanFormatError(f"Cell {position} {key} must hold a player name")
                try:
                    half, slot_time = parse_slot_key(key)
                except ValueError:
                    continue
                slot_time = round(slot_time, SLOT_TIME_PRECISION)
                if state.grid.has(position, half, slot_time):
                    state.grid.set(position, half, slot_time, player)
        return state
