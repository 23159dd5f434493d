"""
Unit tests for Formation and PlanConfig models.

Tests formation registry lookups, position-order invariants, configuration
validation and derived slot times.
"""
import unittest

from subplan.models import (
    Formation,
    FormationTemplates,
    FormationType,
    PlanConfig,
    PlanConfigError,
    UnknownFormationError,
    get_formation,
    register_formation,
    unregister_formation,
)


class TestFormation(unittest.TestCase):
    """Test Formation model."""

    def test_default_seven_a_side_order(self) -> None:
        formation = get_formation("2-3-1")

        self.assertEqual(formation.positions, ("GK", "LD", "RD", "LM", "CM", "RM", "ST"))
        self.assertEqual(formation.field_size, 7)

    def test_every_template_has_unique_positions(self) -> None:
        for formation in FormationTemplates.get_all_templates():
            self.assertEqual(len(formation.positions), len(set(formation.positions)))
            self.assertEqual(formation.positions[0], "GK")

    def test_every_formation_type_resolves(self) -> None:
        for formation_type in FormationType:
            self.assertEqual(get_formation(formation_type.value).formation_id,
                             formation_type.value)

    def test_duplicate_positions_rejected(self) -> None:
        with self.assertRaises(PlanConfigError):
            Formation(formation_id="bad", name="Bad", positions=("GK", "ST", "GK"))

    def test_empty_positions_rejected(self) -> None:
        with self.assertRaises(PlanConfigError):
            Formation(formation_id="empty", name="Empty", positions=())

    def test_unknown_formation(self) -> None:
        with self.assertRaises(UnknownFormationError):
            get_formation("1-1-1-1")

    def test_register_custom_formation(self) -> None:
        custom = Formation(formation_id="futsal", name="Futsal", positions=("GK", "DF", "LW", "RW", "PV"))
        register_formation(custom)
        try:
            self.assertIs(get_formation("futsal"), custom)
            self.assertIn(custom, FormationTemplates.get_all_templates())
            with self.assertRaises(PlanConfigError):
                register_formation(custom)
        finally:
            unregister_formation("futsal")

        self.assertIsNone(FormationTemplates.get_template_by_id("futsal"))

    def test_formation_dict_round_trip(self) -> None:
        formation = get_formation("4-3-3")
        data = formation.to_dict()

        self.assertEqual(data["field_size"], 11)
        self.assertEqual(Formation.from_dict(data), formation)


class TestPlanConfig(unittest.TestCase):
    """Test PlanConfig model."""

    def test_defaults(self) -> None:
        config = PlanConfig()

        self.assertEqual(config.half_duration_minutes, 20)
        self.assertEqual(config.slot_interval_minutes, 2.5)
        self.assertEqual(config.min_minutes_per_player, 15)
        self.assertEqual(config.formation_id, "2-3-1")
        self.assertEqual(len(config.slot_times()), 8)

    def test_slot_times_stop_before_half_length(self) -> None:
        self.assertEqual(PlanConfig(half_duration_minutes=25, slot_interval_minutes=10).slot_times(),
                         [0, 10, 20])
        self.assertEqual(PlanConfig(half_duration_minutes=30, slot_interval_minutes=10).slot_times(),
                         [0, 10, 20])

    def test_slot_times_do_not_drift(self) -> None:
        times = PlanConfig(half_duration_minutes=1, slot_interval_minutes=0.1).slot_times()

        self.assertEqual(len(times), 10)
        self.assertEqual(times[3], 0.3)

    def test_interval_longer_than_half_gives_one_slot(self) -> None:
        self.assertEqual(PlanConfig(half_duration_minutes=5, slot_interval_minutes=10).slot_times(), [0])

    def test_keys_cover_both_halves(self) -> None:
        config = PlanConfig(half_duration_minutes=20, slot_interval_minutes=10)
        keys = list(config.keys())

        self.assertEqual(len(keys), 2 * 7 * 2)
        self.assertEqual(keys[0], ("GK", 1, 0))
        self.assertEqual(keys[-1], ("ST", 2, 10))

    def test_validate_accepts_defaults(self) -> None:
        PlanConfig().validate()

    def test_validate_rejects_bad_values(self) -> None:
        bad_configs = [
            PlanConfig(half_duration_minutes=0),
            PlanConfig(half_duration_minutes=-5),
            PlanConfig(slot_interval_minutes=0),
            PlanConfig(slot_interval_minutes=float("inf")),
            PlanConfig(min_minutes_per_player=-1),
            PlanConfig(formation_id="nope"),
        ]

        for config in bad_configs:
            with self.assertRaises(PlanConfigError):
                config.validate()
