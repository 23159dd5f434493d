"""Tests for plan reporting."""

import csv
import io

import pytest

from subplan.models import PlanConfig, PlanState
from subplan.services import PlanReportService


@pytest.fixture
def plan():
    state = PlanState(
        title="Cup",
        config=PlanConfig(half_duration_minutes=20, slot_interval_minutes=10,
                          min_minutes_per_player=20),
        players=["Ada", "Bea"],
    )
    for slot_time in (0, 10):
        state.grid.set("GK", 1, slot_time, "Ada")
        state.grid.set("GK", 2, slot_time, "Ada")
    state.grid.set("ST", 1, 10, "Bea")
    return state


def test_generate_report_csv_contains_player_rows(plan):
    csv_text = PlanReportService(plan).generate_report_csv()
    rows = list(csv.reader(io.StringIO(csv_text)))

    assert rows[0] == ["Substitution Plan Report"]
    assert ["Title", "Cup"] in rows
    assert ["Formation", "2-3-1"] in rows
    assert ["Roster Size", "2"] in rows
    assert ["Double-Booked Cells", "0"] in rows
    assert ["Players Under Minimum", "1"] in rows

    header = ["Name", "Minutes", "Minimum", "Status", "Positions"]
    assert header in rows
    player_rows = rows[rows.index(header) + 1:]
    assert player_rows == [
        ["Ada", "40", "20", "ok", "GK"],
        ["Bea", "10", "20", "under", "ST"],
    ]


def test_generate_report_csv_requires_players():
    with pytest.raises(ValueError):
        PlanReportService(PlanState.default()).generate_report_csv()


def test_generate_timeline_text(plan):
    text = PlanReportService(plan).generate_timeline_text()
    lines = text.splitlines()

    assert lines[0] == "Cup"
    assert lines[2].startswith("First half start: Ada at GK,  at LD")
    assert "10: Bea in at ST" in lines
    assert any(line.startswith("Second half start: Ada at GK") for line in lines)
