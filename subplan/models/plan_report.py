"""Dataclasses representing derived plan results for the planner app."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .config import GridKey
from ..utils.constants import HALF_LABELS
from ..utils.time_utils import fmt_minutes


@dataclass(frozen=True)
class CellFlags:
    """Validity flags of a single grid cell."""

    is_change: bool = False
    is_warning: bool = False
    is_error: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {
            "is_change": self.is_change,
            "is_warning": self.is_warning,
            "is_error": self.is_error,
        }


@dataclass
class PlayerAggregate:
    """Playing time summary for a single roster player."""

    name: str
    total_minutes: float
    positions_played: List[str]
    under_minimum: bool

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "total_minutes": self.total_minutes,
            "positions_played": list(self.positions_played),
            "under_minimum": self.under_minimum,
        }


@dataclass
class Evaluation:
    """Everything the validator derives from one pass over the grid."""

    cell_flags: Dict[GridKey, CellFlags] = field(default_factory=dict)
    player_aggregates: List[PlayerAggregate] = field(default_factory=list)
    player_count: int = 0
    unlisted_players: List[str] = field(default_factory=list)

    def flags_for(self, position: str, half: int, slot_time: float) -> CellFlags:
        return self.cell_flags[(position, half, slot_time)]

    def aggregate_for(self, name: str) -> Optional[PlayerAggregate]:
        for aggregate in self.player_aggregates:
            if aggregate.name == name:
                return aggregate
        return None

    @property
    def warning_count(self) -> int:
        return sum(1 for flags in self.cell_flags.values() if flags.is_warning)

    @property
    def error_count(self) -> int:
        return sum(1 for flags in self.cell_flags.values() if flags.is_error)

    @property
    def under_minimum_players(self) -> List[str]:
        return [a.name for a in self.player_aggregates if a.under_minimum]

    @property
    def is_complete(self) -> bool:
        """True when no cell is empty or double-booked."""
        return self.warning_count == 0 and self.error_count == 0


@dataclass(frozen=True)
class TimelineEvent:
    """
    One line of the substitution narrative.

    ``kind`` is ``start``, ``move``, ``in`` or ``separator``. An ``in``
    event with an empty ``player`` marks a position left unassigned.
    """

    kind: str
    half: int
    time: Optional[float] = None
    player: str = ""
    position: str = ""
    from_position: str = ""
    player_out: str = ""
    starters: Tuple[Tuple[str, str], ...] = ()

    @property
    def text(self) -> str:
        """Human-readable rendering of the event."""
        if self.kind == "separator":
            return ""
        if self.kind == "start":
            lineup = ", ".join(f"{player} at {position}" for position, player in self.starters)
            return f"{HALF_LABELS[self.half]} half start: {lineup}"

        if self.kind == "move":
            message = f"{self.player} moves from {self.from_position} to {self.position}"
        else:
            message = f"{self.player} in at {self.position}"
        if self.player_out:
            message += f", {self.player_out} out"
        return f"{fmt_minutes(self.time)}: {message}"

    def to_dict(self) -> Dict:
        return {
            "kind": self.kind,
            "half": self.half,
            "time": self.time,
            "player": self.player,
            "position": self.position,
            "from_position": self.from_position,
            "player_out": self.player_out,
            "text": self.text,
        }
