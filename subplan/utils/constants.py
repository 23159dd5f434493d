"""
Constants for the Soccer Substitution Planner application.

This module contains configuration constants used throughout the application.
"""

# Application metadata
APP_TITLE = "Substitution Planner"

# Plan defaults (what "clear" resets to)
DEFAULT_HALF_DURATION_MIN = 20
DEFAULT_SLOT_INTERVAL_MIN = 2.5
DEFAULT_MIN_MINUTES_PER_PLAYER = 15
DEFAULT_FORMATION_ID = "2-3-1"

# A match always has two independent halves
HALVES = (1, 2)
HALF_LABELS = {
    1: "First",
    2: "Second",
}

# Slot times are rounded to this many decimals so keys compare equal
SLOT_TIME_PRECISION = 6

# Undo history length for the web app
MAX_COMMAND_HISTORY = 50

# Web server defaults
DEFAULT_WEB_HOST = "127.0.0.1"
DEFAULT_WEB_PORT = 7122
DEFAULT_AUTOSAVE_DIR = "autosave"
