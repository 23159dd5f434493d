"""Tests for plan persistence and share tokens."""

import base64
import json
import os
import zlib

import pytest

from subplan.models import PlanConfig, PlanState
from subplan.services import PersistenceService, PlanFormatError


@pytest.fixture
def plan():
    state = PlanState(
        title="Saturday",
        config=PlanConfig(half_duration_minutes=10, slot_interval_minutes=5),
        players=["Ada", "Bea"],
    )
    state.grid.set("GK", 1, 0, "Ada")
    state.grid.set("CM", 2, 5, "Bea")
    return state


def test_save_and_load_round_trip(plan, tmp_path):
    file_path = tmp_path / "plans" / "saturday.json"

    PersistenceService.save_plan_to_file(plan, str(file_path))
    loaded = PersistenceService.load_plan_from_file(str(file_path))

    assert file_path.exists()
    assert json.loads(file_path.read_text(encoding="utf-8"))["title"] == "Saturday"
    assert loaded.to_json() == plan.to_json()


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        PersistenceService.load_plan_from_file(str(tmp_path / "missing.json"))


def test_load_rejects_non_object(tmp_path):
    file_path = tmp_path / "list.json"
    file_path.write_text("[1, 2, 3]", encoding="utf-8")

    with pytest.raises(PlanFormatError):
        PersistenceService.load_plan_from_file(str(file_path))


def test_share_token_round_trip(plan):
    token = PersistenceService.encode_share_token(plan)

    assert "=" not in token
    assert "/" not in token and "+" not in token
    assert PersistenceService.decode_share_token(token).to_json() == plan.to_json()


def test_share_token_accepts_url_fragment(plan):
    token = PersistenceService.encode_share_token(plan)
    restored = PersistenceService.decode_share_token("#" + token)

    assert restored.grid == plan.grid


@pytest.mark.parametrize("token", ["", "   ", "not-a-token", "AAAA"])
def test_share_token_rejects_garbage(token):
    with pytest.raises(PlanFormatError):
        PersistenceService.decode_share_token(token)


def test_auto_save_and_recent_saves(plan, tmp_path):
    path = PersistenceService.auto_save(plan, str(tmp_path))

    assert path is not None
    recent = PersistenceService.get_recent_saves(str(tmp_path))
    assert [name for name, _ in recent] == [os.path.basename(path)]


def test_recent_saves_for_missing_directory(tmp_path):
    assert PersistenceService.get_recent_saves(str(tmp_path / "nowhere")) == []


@pytest.mark.parametrize(
    "data",
    [
        {"positions": ["GK"]},
        {"positions": {"GK": "Ada"}},
        {"positions": {"GK": {"1-0": 7}}},
        {"players": [1, 2]},
        {"players": {"Ada": True}},
        {"formation_id": ["2-3-1"]},
        {"half_duration_minutes": "long"},
        {"slot_interval_minutes": {"value": 5}},
    ],
)
def test_deserialize_rejects_wrongly_shaped_fields(data):
    with pytest.raises(PlanFormatError):
        PersistenceService.deserialize_plan(data)


def test_wrongly_shaped_share_token_is_rejected():
    data = PlanState.default().to_json()
    data["positions"] = ["GK"]
    payload = json.dumps(data, separators=(",", ":")).encode("utf-8")
    token = base64.urlsafe_b64encode(zlib.compress(payload)).decode("ascii").rstrip("=")

    with pytest.raises(PlanFormatError):
        PersistenceService.decode_share_token(token)


def test_load_saved_plan(plan, tmp_path):
    path = PersistenceService.auto_save(plan, str(tmp_path))

    loaded = PersistenceService.load_saved_plan(str(tmp_path), os.path.basename(path))

    assert loaded.to_json() == plan.to_json()


@pytest.mark.parametrize("filename", ["../secret.json", "notes.txt", "sub/plan.json"])
def test_load_saved_plan_rejects_paths(tmp_path, filename):
    with pytest.raises(PlanFormatError):
        PersistenceService.load_saved_plan(str(tmp_path), filename)


def test_load_saved_plan_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        PersistenceService.load_saved_plan(str(tmp_path), "gone.json")
