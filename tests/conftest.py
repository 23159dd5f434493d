"""Shared fixtures for the planner tests."""
import pytest

from subplan.models import (
    AssignmentGrid, Formation, PlanConfig, register_formation, unregister_formation
)


@pytest.fixture
def two_position_config():
    """GK/ST formation with 30 minute halves and 10 minute slots (0, 10, 20)."""
    register_formation(Formation(formation_id="gk-st", name="GK + ST", positions=("GK", "ST")))
    yield PlanConfig(
        half_duration_minutes=30,
        slot_interval_minutes=10,
        min_minutes_per_player=20,
        formation_id="gk-st",
    )
    unregister_formation("gk-st")


@pytest.fixture
def two_position_grid(two_position_config):
    return AssignmentGrid.for_config(two_position_config)
