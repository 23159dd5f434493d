"""Formation models for the Soccer Substitution Planner."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
from enum import Enum


class PlanConfigError(ValueError):
    """Raised when a plan configuration cannot be used by the engine."""
    pass


class UnknownFormationError(PlanConfigError):
    """Raised when a formation id is not in the registry."""
    pass


class FormationType(Enum):
    """Built-in formations, keyed by their id."""
    F_2_3_1 = "2-3-1"  # 7v7
    F_3_2_3 = "3-2-3"  # 9v9
    F_3_3_3 = "3-3-3"  # 10v10
    F_4_4_2 = "4-4-2"
    F_4_3_3 = "4-3-3"
    F_3_5_2 = "3-5-2"


@dataclass(frozen=True)
class Formation:
    """
    A named, ordered list of on-field position identifiers.

    The order is the order rows are listed, evaluated and narrated in, so it
    is part of the formation's identity.
    """
    formation_id: str
    name: str
    positions: Tuple[str, ...]
    description: str = ""

    def __post_init__(self):
        if not self.positions:
            raise PlanConfigError(f"Formation '{self.formation_id}' has no positions")
        seen = set()
        for position in self.positions:
            if position in seen:
                raise PlanConfigError(
                    f"Formation '{self.formation_id}' lists position '{position}' twice"
                )
            seen.add(position)

    @property
    def field_size(self) -> int:
        """Number of players on the field."""
        return len(self.positions)

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization."""
        return {
            "formation_id": self.formation_id,
            "name": self.name,
            "positions": list(self.positions),
            "description": self.description,
            "field_size": self.field_size,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> Formation:
        """Create formation from dictionary."""
        return cls(
            formation_id=data["formation_id"],
            name=data.get("name", data["formation_id"]),
            positions=tuple(data["positions"]),
            description=data.get("description", ""),
        )


class FormationTemplates:
    """Pre-defined formation templates for common youth and senior formats."""

    _custom: Dict[str, Formation] = {}

    @staticmethod
    def create_2_3_1() -> Formation:
        """Create a 2-3-1 formation template for 7v7."""
        return Formation(
            formation_id=FormationType.F_2_3_1.value,
            name="2-3-1 (7v7)",
            positions=("GK", "LD", "RD", "LM", "CM", "RM", "ST"),
            description="Two defenders, a flat midfield three and a lone striker",
        )

    @staticmethod
    def create_3_2_3() -> Formation:
        """Create a 3-2-3 formation template for 9v9."""
        return Formation(
            formation_id=FormationType.F_3_2_3.value,
            name="3-2-3 Attack (9v9)",
            positions=("GK", "LB", "CB", "RB", "LCM", "RCM", "LW", "ST", "RW"),
            description="Attacking 9v9 formation with strong defensive line and three forwards",
        )

    @staticmethod
    def create_3_3_3() -> Formation:
        """Create a 3-3-3 formation template for 10v10."""
        return Formation(
            formation_id=FormationType.F_3_3_3.value,
            name="3-3-3 Balanced (10v10)",
            positions=("GK", "LB", "CB", "RB", "LM", "CM", "RM", "LW", "ST", "RW"),
            description="Balanced 10v10 formation with equal distribution across the lines",
        )

    @staticmethod
    def create_4_4_2() -> Formation:
        """Create a 4-4-2 formation template."""
        return Formation(
            formation_id=FormationType.F_4_4_2.value,
            name="4-4-2 Classic",
            positions=("GK", "LB", "LCB", "RCB", "RB", "LM", "LCM", "RCM", "RM", "LS", "RS"),
            description="Classic balanced formation with two strikers and solid midfield",
        )

    @staticmethod
    def create_4_3_3() -> Formation:
        """Create a 4-3-3 formation template."""
        return Formation(
            formation_id=FormationType.F_4_3_3.value,
            name="4-3-3 Attack",
            positions=("GK", "LB", "LCB", "RCB", "RB", "LCM", "CM", "RCM", "LW", "ST", "RW"),
            description="Attacking formation with wingers and strong midfield triangle",
        )

    @staticmethod
    def create_3_5_2() -> Formation:
        """Create a 3-5-2 formation template."""
        return Formation(
            formation_id=FormationType.F_3_5_2.value,
            name="3-5-2 Control",
            positions=("GK", "LCB", "CB", "RCB", "LM", "LCM", "CM", "RCM", "RM", "LS", "RS"),
            description="Midfield-heavy formation with wing play and two strikers",
        )

    @staticmethod
    def get_all_templates() -> List[Formation]:
        """Get all pre-defined formation templates followed by custom ones."""
        templates = [
            FormationTemplates.create_2_3_1(),  # 7v7
            FormationTemplates.create_3_2_3(),  # 9v9
            FormationTemplates.create_3_3_3(),  # 10v10
            FormationTemplates.create_4_4_2(),
            FormationTemplates.create_4_3_3(),
            FormationTemplates.create_3_5_2(),
        ]
        return templates + list(FormationTemplates._custom.values())

    @staticmethod
    def get_template_by_id(formation_id: str) -> Optional[Formation]:
        """Get template by formation id, or None when unknown."""
        templates = {
            FormationType.F_2_3_1.value: FormationTemplates.create_2_3_1,
            FormationType.F_3_2_3.value: FormationTemplates.create_3_2_3,
            FormationType.F_3_3_3.value: FormationTemplates.create_3_3_3,
            FormationType.F_4_4_2.value: FormationTemplates.create_4_4_2,
            FormationType.F_4_3_3.value: FormationTemplates.create_4_3_3,
            FormationType.F_3_5_2.value: FormationTemplates.create_3_5_2,
        }

        factory = templates.get(formation_id)
        if factory:
            return factory()
        return FormationTemplates._custom.get(formation_id)


def get_formation(formation_id: str) -> Formation:
    """
    Resolve a formation id to its formation.

    Raises:
        UnknownFormationError: If no built-in or registered formation matches
    """
    formation = FormationTemplates.get_template_by_id(formation_id)
    if formation is None:
        raise UnknownFormationError(f"Unknown formation: {formation_id!r}")
    return formation


def register_formation(formation: Formation) -> None:
    """Register a custom formation so configurations can refer to it by id."""
    if FormationTemplates.get_template_by_id(formation.formation_id) is not None:
        raise PlanConfigError(f"Formation '{formation.formation_id}' already exists")
    FormationTemplates._custom[formation.formation_id] = formation


def unregister_formation(formation_id: str) -> None:
    """Remove a custom formation (built-in templates cannot be removed)."""
    FormationTemplates._custom.pop(formation_id, None)
