#!/usr/bin/env python3
"""
Main entry point for the Soccer Substitution Planner web application.

This script launches the Flask-based JSON API server.
"""
import logging
import os

from subplan.ui.web_app import run_web_app
from subplan.utils.constants import DEFAULT_WEB_HOST, DEFAULT_WEB_PORT

if __name__ == "__main__":
    if not logging.getLogger().handlers:
        level = os.getenv("LOG_LEVEL", "INFO").upper()
        logging.basicConfig(
            level=getattr(logging, level, logging.INFO),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )

    run_web_app(
        host=os.getenv("SUBPLAN_HOST", DEFAULT_WEB_HOST),
        port=int(os.getenv("SUBPLAN_PORT", DEFAULT_WEB_PORT)),
    )
