"""
Services package for the Soccer Substitution Planner.

This package contains the planning engine (evaluation, timeline, cascade and
reshape) and the services the shells build on.
"""
from .evaluation_service import evaluate
from .timeline_service import build_timeline, timeline_lines
from .schedule_service import CascadeMode, assign, cascade, reshape
from .plan_service import PlanService, PlanAssignmentError
from .plan_commands import (
    AssignCommand, ClearPlanCommand, PlanCommandManager, SetPlayersCommand,
    SetTitleCommand, UpdateConfigCommand
)
from .persistence_service import PersistenceService, PlanFormatError
from .report_service import PlanReportService

__all__ = [
    "evaluate", "build_timeline", "timeline_lines", "CascadeMode", "assign",
    "cascade", "reshape", "PlanService", "PlanAssignmentError",
    "AssignCommand", "ClearPlanCommand", "PlanCommandManager",
    "SetPlayersCommand", "SetTitleCommand", "UpdateConfigCommand",
    "PersistenceService", "PlanFormatError", "PlanReportService"
]
