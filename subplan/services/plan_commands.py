"""
Command pattern implementation for plan edits.

This module provides undoable commands for every plan mutation, supporting
undo/redo in the web app.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from ..models import AssignmentGrid, PlanConfig, PlanState
from ..utils import now_ts
from ..utils.constants import MAX_COMMAND_HISTORY
from .plan_service import PlanService
from .schedule_service import CascadeMode


@dataclass
class PlanSnapshot:
    """Immutable snapshot of plan state for undo functionality."""
    timestamp: float
    title: str
    config: PlanConfig
    players: List[str]
    grid: AssignmentGrid

    @classmethod
    def from_plan_state(cls, state: PlanState) -> "PlanSnapshot":
        """Create snapshot from current plan state."""
        return cls(
            timestamp=now_ts(),
            title=state.title,
            config=state.config,
            players=list(state.players),
            grid=state.grid.copy(),
        )

    def to_plan_state(self) -> PlanState:
        return PlanState(
            title=self.title,
            config=self.config,
            players=list(self.players),
            grid=self.grid.copy(),
        )


class PlanCommand(ABC):
    """
    Undoable plan edit.

    Executing takes a snapshot of the whole plan before applying the edit, so
    undo is a plain restore and works the same for every subclass.
    """

    def __init__(self, service: PlanService):
        self.service = service
        self._previous_state: Optional[PlanSnapshot] = None

    def execute(self) -> bool:
        """
        Apply the edit. Errors from the service propagate and leave no snapshot.

        Returns:
            True once the edit is applied
        """
        snapshot = PlanSnapshot.from_plan_state(self.service.state)
        self._apply()
        self._previous_state = snapshot
        return True

    def undo(self) -> bool:
        if self._previous_state is None:
            return False
        self.service.load_state(self._previous_state.to_plan_state())
        return True

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable summary shown in the edit history."""

    @abstractmethod
    def _apply(self) -> None:
        pass


class AssignCommand(PlanCommand):
    """Command to assign a player to a cell, with optional cascade."""

    def __init__(self, service: PlanService, position: str, half: int,
                 slot_time: float, player: str, mode: CascadeMode = CascadeMode.NONE):
        super().__init__(service)
        self.position = position
        self.half = half
        self.slot_time = slot_time
        self.player = player
        self.mode = mode

    def _apply(self) -> None:
        self.service.assign(self.position, self.half, self.slot_time, self.player, self.mode)

    @property
    def description(self) -> str:
        who = self.player or "nobody"
        text = f"Assign {who} to {self.position} (half {self.half}, {self.slot_time})"
        if self.mode is not CascadeMode.NONE:
            text += f" [{self.mode.value}]"
        return text


class UpdateConfigCommand(PlanCommand):
    """Command to change timing or formation."""

    def __init__(self, service: PlanService, **changes):
        super().__init__(service)
        self.changes = changes

    def _apply(self) -> None:
        self.service.update_config(**self.changes)

    @property
    def description(self) -> str:
        changed = ", ".join(f"{k}={v}" for k, v in self.changes.items() if v is not None)
        return f"Update configuration ({changed})"


class SetPlayersCommand(PlanCommand):
    """Command to replace the roster."""

    def __init__(self, service: PlanService, source: Union[str, Iterable[str], None]):
        super().__init__(service)
        self.source = source

    def _apply(self) -> None:
        self.service.set_players(self.source)

    @property
    def description(self) -> str:
        return "Update roster"


class SetTitleCommand(PlanCommand):
    """Command to rename the plan."""

    def __init__(self, service: PlanService, title: str):
        super().__init__(service)
        self.title = title

    def _apply(self) -> None:
        self.service.set_title(self.title)

    @property
    def description(self) -> str:
        return f"Rename plan to '{self.title}'"


class ClearPlanCommand(PlanCommand):
    """Command to reset the plan to its defaults."""

    def _apply(self) -> None:
        self.service.clear()

    @property
    def description(self) -> str:
        return "Clear plan"


class PlanCommandManager:
    """
    Undo/redo history of plan commands.

    Executed commands sit on the undo stack (oldest first); undone ones move
    to the redo stack until a new command is executed.
    """

    def __init__(self, max_history: int = MAX_COMMAND_HISTORY):
        """
        Args:
            max_history: Number of undoable commands kept
        """
        self.max_history = max_history
        self._undo_stack: List[PlanCommand] = []
        self._redo_stack: List[PlanCommand] = []

    def execute_command(self, command: PlanCommand) -> bool:
        """
        Run a command and record it.

        Errors raised by the command propagate and leave history unchanged.
        """
        if not command.execute():
            return False

        self._undo_stack.append(command)
        self._redo_stack.clear()
        del self._undo_stack[:-self.max_history]
        return True

    def undo(self) -> bool:
        if not self._undo_stack:
            return False
        command = self._undo_stack.pop()
        if not command.undo():
            self._undo_stack.append(command)
            return False
        self._redo_stack.append(command)
        return True

    def redo(self) -> bool:
        if not self._redo_stack:
            return False
        command = self._redo_stack.pop()
        command.execute()
        self._undo_stack.append(command)
        return True

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def get_command_history(self) -> List[str]:
        """Descriptions of every recorded command, in the order they were first run."""
        commands = self._undo_stack + self._redo_stack[::-1]
        return [command.description for command in commands]

    def clear_history(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()
