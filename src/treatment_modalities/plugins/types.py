"""
Type definitions for treatment modality plugins.

Plugins are built from these records once, at import time, and are never
mutated afterwards. Updating a modality means registering a new plugin value.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SkillLevel(str, Enum):
    """
    Practitioner skill needed to apply a modality.

    Using str-based Enum for better JSON serialization and
    compatibility with plain string keys in data files.
    """
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    def __str__(self) -> str:
        return self.value


class StepType(str, Enum):
    """Phase of a protocol step."""
    PREPARATION = "preparation"
    TREATMENT = "treatment"
    ASSESSMENT = "assessment"
    EVALUATION = "evaluation"

    def __str__(self) -> str:
        return self.value


class Intensity(str, Enum):
    """How firmly a technique is applied."""
    LIGHT = "light"
    MODERATE = "moderate"
    FIRM = "firm"
    VARIABLE = "variable"

    def __str__(self) -> str:
        return self.value


class EvidenceLevel(str, Enum):
    """Strength of the evidence behind an effectiveness score."""
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    def __str__(self) -> str:
        return self.value


class PregnancyPolicy(str, Enum):
    """Whether a modality may be used during pregnancy."""
    SAFE = "safe"
    CAUTION = "caution"
    AVOID = "avoid"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ModalityMetadata:
    """Identity and descriptive fields of a modality."""
    id: str
    name: str
    display_name: str
    icon: str
    version: str
    skill_level: SkillLevel
    equipment_required: bool
    self_administered: bool
    description: str = ""
    category: str = "physical"
    author: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "display_name": self.display_name,
            "icon": self.icon,
            "version": self.version,
            "skill_level": self.skill_level.value,
            "equipment_required": self.equipment_required,
            "self_administered": self.self_administered,
            "description": self.description,
            "category": self.category,
            "author": self.author,
        }


@dataclass(frozen=True)
class Step:
    """One ordered step of a protocol. ``order`` is 1-based."""
    id: str
    order: int
    type: StepType
    title: str
    description: str
    duration: str
    points: tuple[str, ...] = ()
    techniques: tuple[str, ...] = ()
    equipment: tuple[str, ...] = ()
    notes: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "order": self.order,
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "duration": self.duration,
            "points": list(self.points),
            "techniques": list(self.techniques),
            "equipment": list(self.equipment),
            "notes": self.notes,
        }


@dataclass(frozen=True)
class TreatmentProtocol:
    """An ordered treatment procedure for one indication."""
    id: str
    modality_id: str
    indication: str
    name: str
    description: str
    steps: tuple[Step, ...]
    duration: str
    frequency: str
    difficulty: SkillLevel
    contraindications: tuple[str, ...] = ()
    precautions: tuple[str, ...] = ()
    expected_outcomes: tuple[str, ...] = ()
    clinical_notes: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "modality_id": self.modality_id,
            "indication": self.indication,
            "name": self.name,
            "description": self.description,
            "steps": [step.to_dict() for step in self.steps],
            "duration": self.duration,
            "frequency": self.frequency,
            "difficulty": self.difficulty.value,
            "contraindications": list(self.contraindications),
            "precautions": list(self.precautions),
            "expected_outcomes": list(self.expected_outcomes),
            "clinical_notes": self.clinical_notes,
        }


@dataclass(frozen=True)
class TechniqueModification:
    """Adjustment of a technique for a specific patient situation."""
    condition: str
    modification: str


@dataclass(frozen=True)
class Technique:
    """A named manual technique referenced by protocol steps."""
    id: str
    modality_id: str
    name: str
    description: str
    instructions: tuple[str, ...]
    duration: str
    intensity: Intensity
    equipment: tuple[str, ...] = ()
    contraindications: tuple[str, ...] = ()
    modifications: tuple[TechniqueModification, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "modality_id": self.modality_id,
            "name": self.name,
            "description": self.description,
            "instructions": list(self.instructions),
            "duration": self.duration,
            "intensity": self.intensity.value,
            "equipment": list(self.equipment),
            "contraindications": list(self.contraindications),
            "modifications": [
                {"condition": m.condition, "modification": m.modification}
                for m in self.modifications
            ],
        }


@dataclass(frozen=True)
class EffectivenessEntry:
    """Effectiveness of a modality for one indication (score in 0-100)."""
    indication: str
    effectiveness_score: float
    evidence_level: EvidenceLevel
    references: tuple[str, ...] = ()
    clinical_notes: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "indication": self.indication,
            "effectiveness_score": self.effectiveness_score,
            "evidence_level": self.evidence_level.value,
            "references": list(self.references),
            "clinical_notes": self.clinical_notes,
        }


@dataclass(frozen=True)
class AgeRestrictions:
    min_age: int | None = None
    max_age: int | None = None
    special_considerations: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "min_age": self.min_age,
            "max_age": self.max_age,
            "special_considerations": self.special_considerations,
        }


@dataclass(frozen=True)
class Contraindications:
    """Safety rules of a modality."""
    absolute: tuple[str, ...] = ()
    relative: tuple[str, ...] = ()
    pregnancy: PregnancyPolicy = PregnancyPolicy.SAFE
    age_restrictions: AgeRestrictions | None = None
    medications: tuple[str, ...] = ()
    conditions: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "absolute": list(self.absolute),
            "relative": list(self.relative),
            "pregnancy": self.pregnancy.value,
            "age_restrictions": (
                self.age_restrictions.to_dict() if self.age_restrictions else None
            ),
            "medications": list(self.medications),
            "conditions": list(self.conditions),
        }


@dataclass(frozen=True)
class UIBindings:
    """
    Opaque references to the views that render a modality.

    The registry and composer only forward these; they never resolve them.
    """
    protocol_page: str
    protocol_card: str
    techniques_list: str
    safety_warnings: str
    comparison_metrics: str

    def to_dict(self) -> dict[str, str]:
        return {
            "protocol_page": self.protocol_page,
            "protocol_card": self.protocol_card,
            "techniques_list": self.techniques_list,
            "safety_warnings": self.safety_warnings,
            "comparison_metrics": self.comparison_metrics,
        }


_TRUE_VALUES = ("true", "yes", "1")
_FALSE_VALUES = ("false", "no", "0", "")


def _string_list(value: Any, name: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None]
    raise ValueError(f"{name} must be a string or a list of strings")


def _flag(value: Any, name: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ValueError(f"{name} must be true or false")


@dataclass
class PatientData:
    """Patient facts checked against a modality's contraindications."""
    conditions: list[str] = field(default_factory=list)
    medications: list[str] = field(default_factory=list)
    pregnancy: bool = False
    age: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "PatientData":
        """
        Build patient data from a loosely shaped mapping.

        Missing keys fall back to empty/unknown values; ``age`` that cannot
        be read as an integer is treated as unknown. A single string is
        accepted for ``conditions`` and ``medications``.

        Raises:
            ValueError: If a list field or ``pregnancy`` has an unusable type
        """
        data = data or {}
        age = data.get("age")
        try:
            age = int(age) if age is not None else None
        except (TypeError, ValueError):
            age = None
        return cls(
            conditions=_string_list(data.get("conditions"), "conditions"),
            medications=_string_list(data.get("medications"), "medications"),
            pregnancy=_flag(data.get("pregnancy"), "pregnancy"),
            age=age,
        )


@dataclass
class SafetyResult:
    safe: bool
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"safe": self.safe, "warnings": list(self.warnings)}


@dataclass(frozen=True)
class ComparisonMetrics:
    """Row of the treatment comparison table for one modality."""
    duration: str
    frequency: str
    effectiveness: float
    ease_of_use: int
    safety_profile: int
    cost: str
    equipment: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "duration": self.duration,
            "frequency": self.frequency,
            "effectiveness": self.effectiveness,
            "ease_of_use": self.ease_of_use,
            "safety_profile": self.safety_profile,
            "cost": self.cost,
            "equipment": self.equipment,
        }
