"""
Utilities package for the Soccer Substitution Planner.

This package contains utility functions used throughout the application.
"""
from .time_utils import fmt_minutes, slot_key, parse_slot_key, now_ts
from .constants import (
    APP_TITLE, DEFAULT_HALF_DURATION_MIN, DEFAULT_SLOT_INTERVAL_MIN,
    DEFAULT_MIN_MINUTES_PER_PLAYER, DEFAULT_FORMATION_ID, HALVES, HALF_LABELS
)

__all__ = [
    "fmt_minutes", "slot_key", "parse_slot_key", "now_ts", "APP_TITLE",
    "DEFAULT_HALF_DURATION_MIN", "DEFAULT_SLOT_INTERVAL_MIN",
    "DEFAULT_MIN_MINUTES_PER_PLAYER", "DEFAULT_FORMATION_ID",
    "HALVES", "HALF_LABELS"
]
