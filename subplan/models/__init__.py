"""
Models package for the Soccer Substitution Planner.

This package contains the core data models used throughout the application.
"""
from .formation import (
    Formation, FormationTemplates, FormationType, PlanConfigError,
    UnknownFormationError, get_formation, register_formation, unregister_formation
)
from .config import PlanConfig
from .grid import AssignmentGrid
from .roster import parse_roster
from .plan_report import CellFlags, PlayerAggregate, Evaluation, TimelineEvent
from .plan_state import PlanFormatError, PlanState

__all__ = [
    "Formation", "FormationTemplates", "FormationType", "PlanConfigError",
    "UnknownFormationError", "get_formation", "register_formation",
    "unregister_formation", "PlanConfig", "AssignmentGrid", "parse_roster",
    "CellFlags", "PlayerAggregate", "Evaluation", "TimelineEvent", "PlanFormatError",
    "PlanState"
]
