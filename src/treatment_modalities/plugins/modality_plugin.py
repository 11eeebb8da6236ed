"""
Data-only modality plugin.

A ModalityPlugin is a frozen record of a modality's data. Its methods
delegate to the shared defaults in ``defaults.py``; a plugin that wants
different behavior passes an override callable rather than subclassing.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from . import defaults
from .types import (
    ComparisonMetrics,
    Contraindications,
    EffectivenessEntry,
    ModalityMetadata,
    PatientData,
    SafetyResult,
    Technique,
    TreatmentProtocol,
    UIBindings,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ModalityPlugin:
    """
    One registered treatment modality.

    Overrides:
        comparison_override: Replaces the derived comparison row wholesale.
            Called with the plugin; whatever it returns is the row.
        extra_search_terms: Domain synonyms appended after the default terms.
    """

    metadata: ModalityMetadata
    protocols: tuple[TreatmentProtocol, ...]
    techniques: tuple[Technique, ...]
    effectiveness: tuple[EffectivenessEntry, ...]
    contraindications: Contraindications
    ui: UIBindings
    comparison_override: Callable[["ModalityPlugin"], ComparisonMetrics] | None = None
    extra_search_terms: tuple[str, ...] = ()

    @property
    def id(self) -> str:
        return self.metadata.id

    async def initialize(self) -> None:
        logger.info("Initializing %s plugin...", self.metadata.name)
        self.validate()
        terms = self.register_search_terms()
        logger.debug("Indexed %d search terms for %s", len(terms), self.metadata.name)
        logger.info("%s plugin initialized", self.metadata.name)

    def validate(self) -> None:
        defaults.validate_protocols(self)

    def get_protocols_for_indication(self, indication: str) -> list[TreatmentProtocol]:
        return defaults.protocols_for_indication(self, indication)

    def get_techniques_for_indication(self, indication: str) -> list[Technique]:
        return defaults.techniques_for_indication(self, indication)

    def get_effectiveness_for_indication(self, indication: str) -> EffectivenessEntry | None:
        return defaults.effectiveness_for_indication(self, indication)

    def get_effectiveness_score(self) -> float:
        return self.get_comparison_data().effectiveness

    def validate_safety_for_patient(
        self,
        patient_data: PatientData | dict[str, Any] | None
    ) -> SafetyResult:
        if not isinstance(patient_data, PatientData):
            patient_data = PatientData.from_dict(patient_data)
        return defaults.validate_safety(self, patient_data)

    def get_comparison_data(self) -> ComparisonMetrics:
        if self.comparison_override is not None:
            return self.comparison_override(self)
        return defaults.comparison_data(self)

    def register_routes(self) -> list[dict[str, Any]]:
        return defaults.routes(self)

    def register_navigation(self) -> dict[str, str]:
        return defaults.navigation(self)

    def register_search_terms(self) -> list[str]:
        return defaults.unique([
            *defaults.search_terms(self),
            *self.extra_search_terms,
        ])

    def summary(self) -> dict[str, Any]:
        """Short description used in listings."""
        return {
            "id": self.metadata.id,
            "name": self.metadata.name,
            "display_name": self.metadata.display_name,
            "icon": self.metadata.icon,
            "category": self.metadata.category,
            "description": self.metadata.description,
            "protocols": len(self.protocols),
            "techniques": len(self.techniques),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "metadata": self.metadata.to_dict(),
            "protocols": [p.to_dict() for p in self.protocols],
            "techniques": [t.to_dict() for t in self.techniques],
            "effectiveness": [e.to_dict() for e in self.effectiveness],
            "contraindications": self.contraindications.to_dict(),
            "ui": self.ui.to_dict(),
            "comparison": self.get_comparison_data().to_dict(),
            "search_terms": self.register_search_terms(),
        }


def curated_comparison(metrics: ComparisonMetrics) -> Callable[[ModalityPlugin], ComparisonMetrics]:
    """Build a ``comparison_override`` that always returns ``metrics``."""
    def override(_plugin: ModalityPlugin) -> ComparisonMetrics:
        return metrics
    return override
