"""
Unit tests for PlanState serialization and roster parsing.
"""
import unittest

from subplan.models import PlanConfig, PlanConfigError, PlanFormatError, PlanState, parse_roster
from subplan.utils import fmt_minutes, parse_slot_key, slot_key


class TestRoster(unittest.TestCase):
    """Test roster parsing."""

    def test_parse_text(self) -> None:
        self.assertEqual(parse_roster(" Zoe\n\nAda \n  \nMo\n"), ["Ada", "Mo", "Zoe"])

    def test_parse_list_drops_duplicates(self) -> None:
        self.assertEqual(parse_roster(["Mo", "Ada", "Mo ", ""]), ["Ada", "Mo"])

    def test_parse_none(self) -> None:
        self.assertEqual(parse_roster(None), [])


class TestSlotKeys(unittest.TestCase):
    """Test slot key helpers."""

    def test_fmt_minutes(self) -> None:
        self.assertEqual(fmt_minutes(0), "0")
        self.assertEqual(fmt_minutes(5.0), "5")
        self.assertEqual(fmt_minutes(7.5), "7.5")

    def test_slot_key_round_trip(self) -> None:
        self.assertEqual(slot_key(2, 7.5), "2-7.5")
        self.assertEqual(slot_key(1, 10.0), "1-10")
        self.assertEqual(parse_slot_key("2-7.5"), (2, 7.5))

    def test_parse_slot_key_rejects_garbage(self) -> None:
        with self.assertRaises(ValueError):
            parse_slot_key("nonsense")


class TestPlanState(unittest.TestCase):
    """Test PlanState JSON shape."""

    def setUp(self) -> None:
        self.state = PlanState(
            title="vs. Rovers",
            config=PlanConfig(half_duration_minutes=5, slot_interval_minutes=2.5,
                              min_minutes_per_player=5, formation_id="2-3-1"),
            players=["Mo", "Ada"],
        )
        self.state.grid.set("GK", 1, 0, "Ada")
        self.state.grid.set("ST", 2, 2.5, "Mo")

    def test_default_state(self) -> None:
        state = PlanState.default()

        self.assertEqual(state.title, "")
        self.assertEqual(state.players, [])
        self.assertEqual(state.config, PlanConfig())
        self.assertEqual(len(state.grid), 2 * 7 * 8)

    def test_players_are_canonical(self) -> None:
        self.assertEqual(self.state.players, ["Ada", "Mo"])

    def test_to_json_shape(self) -> None:
        data = self.state.to_json()

        self.assertEqual(data["title"], "vs. Rovers")
        self.assertEqual(data["half_duration_minutes"], 5)
        self.assertEqual(data["slot_interval_minutes"], 2.5)
        self.assertEqual(data["min_minutes_per_player"], 5)
        self.assertEqual(data["formation_id"], "2-3-1")
        self.assertEqual(data["players"], ["Ada", "Mo"])
        self.assertEqual(list(data["positions"]), ["GK", "LD", "RD", "LM", "CM", "RM", "ST"])
        self.assertEqual(data["positions"]["GK"], {"1-0": "Ada", "1-2.5": "", "2-0": "", "2-2.5": ""})
        self.assertEqual(data["positions"]["ST"]["2-2.5"], "Mo")

    def test_round_trip_is_lossless(self) -> None:
        data = self.state.to_json()
        restored = PlanState.from_json(data)

        self.assertEqual(restored.to_json(), data)
        self.assertEqual(restored.grid, self.state.grid)

    def test_missing_cells_default_to_empty(self) -> None:
        restored = PlanState.from_json({"positions": {"GK": {"1-0": "Ada"}}})

        self.assertEqual(restored.config, PlanConfig())
        self.assertEqual(restored.grid.get("GK", 1, 0), "Ada")
        self.assertEqual(restored.grid.get("GK", 1, 2.5), "")
        self.assertEqual(restored.grid.get("CM", 2, 17.5), "")

    def test_cells_outside_grid_are_ignored(self) -> None:
        restored = PlanState.from_json({
            "half_duration_minutes": 5,
            "slot_interval_minutes": 2.5,
            "positions": {"GK": {"1-40": "Ghost"}, "SW": {"1-0": "Libero"}},
        })

        self.assertEqual(restored.grid.players(), [])

    def test_newline_joined_players(self) -> None:
        restored = PlanState.from_json({"players": "Zoe\nAda\n"})
        self.assertEqual(restored.players, ["Ada", "Zoe"])

    def test_legacy_camel_case_keys(self) -> None:
        restored = PlanState.from_json({
            "timePerHalf": 10,
            "minTimePerPlayer": 8,
            "schedulingInterval": 5,
            "players": ["Ada"],
            "positions": {"CM": {"2-5": "Ada"}},
        })

        self.assertEqual(restored.config.half_duration_minutes, 10)
        self.assertEqual(restored.config.min_minutes_per_player, 8)
        self.assertEqual(restored.config.slot_interval_minutes, 5)
        self.assertEqual(restored.grid.get("CM", 2, 5), "Ada")

    def test_invalid_config_rejected(self) -> None:
        with self.assertRaises(PlanConfigError):
            PlanState.from_json({"slot_interval_minutes": 0})

    def test_drifted_slot_keys_are_matched_by_value(self) -> None:
        restored = PlanState.from_json({
            "timePerHalf": 0.5,
            "schedulingInterval": 0.1,
            "positions": {"GK": {"1-0.30000000000000004": "Ada", "2-0.1": "Mo"}},
        })

        self.assertEqual(restored.config.slot_times(), [0.0, 0.1, 0.2, 0.3, 0.4])
        self.assertEqual(restored.grid.get("GK", 1, 0.3), "Ada")
        self.assertEqual(restored.grid.get("GK", 2, 0.1), "Mo")

    def test_malformed_slot_keys_are_ignored(self) -> None:
        restored = PlanState.from_json({"positions": {"GK": {"first": "Ada", "1-": "Mo"}}})
        self.assertEqual(restored.grid.players(), [])

    def test_wrongly_shaped_positions_rejected(self) -> None:
        with self.assertRaises(PlanFormatError):
            PlanState.from_json({"positions": ["GK"]})
        with self.assertRaises(PlanFormatError):
            PlanState.from_json({"positions": {"GK": "Ada"}})
        with self.assertRaises(PlanFormatError):
            PlanState.from_json({"players": [1, 2]})
