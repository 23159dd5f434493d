"""
Soccer Substitution Planner

Plan who plays where for every time slot of both halves, check the plan
for gaps and double-booked players, and read back playing minutes and a
substitution timeline.

This package provides the planning engine plus a Flask JSON API around it.
"""
from .models import AssignmentGrid, PlanConfig, PlanState, parse_roster
from .services import (
    PersistenceService, PlanService, build_timeline, cascade, evaluate, reshape
)
from .utils import fmt_minutes, APP_TITLE

__version__ = "1.0.0"
__author__ = "Soccer Coach Development Team"

__all__ = [
    "AssignmentGrid", "PlanConfig", "PlanState", "parse_roster",
    "PersistenceService", "PlanService", "build_timeline", "cascade",
    "evaluate", "reshape", "fmt_minutes", "APP_TITLE"
]
