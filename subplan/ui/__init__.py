"""
UI package for the Soccer Substitution Planner.

This package contains the Flask web server around the planning engine.
"""
from .web_app import create_app, run_web_app, PlanAppState

__all__ = ["create_app", "run_web_app", "PlanAppState"]
