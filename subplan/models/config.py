"""
Plan configuration model for the Soccer Substitution Planner.

The configuration holds the three scalar timing parameters and the active
formation. Slot times and grid keys are derived from it, never stored.
"""
import math
from dataclasses import dataclass, replace
from typing import Iterator, List, Tuple

from .formation import Formation, PlanConfigError, get_formation
from ..utils.constants import (
    DEFAULT_FORMATION_ID, DEFAULT_HALF_DURATION_MIN,
    DEFAULT_MIN_MINUTES_PER_PLAYER, DEFAULT_SLOT_INTERVAL_MIN,
    HALVES, SLOT_TIME_PRECISION
)

GridKey = Tuple[str, int, float]


@dataclass(frozen=True)
class PlanConfig:
    """
    Timing and formation parameters of a substitution plan.

    Attributes:
        half_duration_minutes: Length of each half in minutes (> 0)
        slot_interval_minutes: Length of each scheduling slot (> 0)
        min_minutes_per_player: Minutes every roster player should reach (>= 0)
        formation_id: Id of the active formation
    """
    half_duration_minutes: float = DEFAULT_HALF_DURATION_MIN
    slot_interval_minutes: float = DEFAULT_SLOT_INTERVAL_MIN
    min_minutes_per_player: float = DEFAULT_MIN_MINUTES_PER_PLAYER
    formation_id: str = DEFAULT_FORMATION_ID

    @property
    def formation(self) -> Formation:
        return get_formation(self.formation_id)

    @property
    def position_order(self) -> Tuple[str, ...]:
        return self.formation.positions

    def validate(self) -> None:
        """
        Check the configuration before it reaches the engine.

        The engine assumes positive, finite timing values; a zero interval
        would never finish generating slots.

        Raises:
            PlanConfigError: If any parameter is out of range
            UnknownFormationError: If the formation id is not registered
        """
        for label, value in (
            ("Half duration", self.half_duration_minutes),
            ("Slot interval", self.slot_interval_minutes),
        ):
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
                raise PlanConfigError(f"{label} must be a positive number, got {value!r}")

        minimum = self.min_minutes_per_player
        if not isinstance(minimum, (int, float)) or not math.isfinite(minimum) or minimum < 0:
            raise PlanConfigError(
                f"Minimum minutes per player must be zero or more, got {minimum!r}"
            )

        get_formation(self.formation_id)

    def slot_times(self) -> List[float]:
        """
        Slot start times of one half: ``0, i, 2i, ...`` while below the half length.

        Returns:
            Increasing list of minute offsets (never empty for a valid config)
        """
        times = []
        index = 0
        while True:
            slot_time = round(index * self.slot_interval_minutes, SLOT_TIME_PRECISION)
            if slot_time >= self.half_duration_minutes:
                break
            times.append(slot_time)
            index += 1
        return times

    def keys(self) -> Iterator[GridKey]:
        """Yield every ``(position, half, slot_time)`` this configuration implies."""
        times = self.slot_times()
        for half in HALVES:
            for position in self.position_order:
                for slot_time in times:
                    yield (position, half, slot_time)

    def with_changes(self, **changes) -> "PlanConfig":
        """Return a copy with some fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "half_duration_minutes": self.half_duration_minutes,
            "slot_interval_minutes": self.slot_interval_minutes,
            "min_minutes_per_player": self.min_minutes_per_player,
            "formation_id": self.formation_id,
        }
