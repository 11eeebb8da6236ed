"""
Plugin interface for treatment modalities.

Defines the contract that every modality registered with the
ModalityRegistry must satisfy.
"""

from typing import Any, Protocol

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


class ModalityPluginContract(Protocol):
    """
    Interface that all modality plugins must implement.

    A plugin is data (metadata, protocols, techniques, effectiveness,
    contraindications, UI bindings) plus a handful of query and
    derivation methods. The registry relies only on this contract, so
    nothing downstream needs to know which modalities exist.
    """

    metadata: ModalityMetadata
    protocols: tuple[TreatmentProtocol, ...]
    techniques: tuple[Technique, ...]
    effectiveness: tuple[EffectivenessEntry, ...]
    contraindications: Contraindications
    ui: UIBindings

    @property
    def id(self) -> str:
        """Registry key; same as ``metadata.id``."""
        ...

    async def initialize(self) -> None:
        """
        Prepare the plugin for registration.

        Awaited once by the loader, strictly sequentially with other
        plugins.

        Raises:
            PluginValidationError: If the plugin's protocols are malformed
        """
        ...

    def validate(self) -> None:
        """
        Check protocol shape and ownership.

        Raises:
            PluginValidationError: On the first invalid protocol
        """
        ...

    def get_protocols_for_indication(self, indication: str) -> list[TreatmentProtocol]:
        """Protocols whose indication matches (loose, case-insensitive)."""
        ...

    def get_techniques_for_indication(self, indication: str) -> list[Technique]:
        """Techniques referenced by the steps of matching protocols."""
        ...

    def get_effectiveness_for_indication(self, indication: str) -> EffectivenessEntry | None:
        """First matching effectiveness entry, or None."""
        ...

    def get_effectiveness_score(self) -> float:
        """Overall effectiveness used in comparison tables."""
        ...

    def validate_safety_for_patient(self, patient_data: PatientData) -> SafetyResult:
        """
        Check the patient against every contraindication source.

        Returns:
            SafetyResult with ``safe`` False on any hard stop and every
            warning that applies (evaluation never short-circuits)
        """
        ...

    def get_comparison_data(self) -> ComparisonMetrics:
        """Comparison row; either derived or a curated override."""
        ...

    def register_routes(self) -> list[dict[str, Any]]:
        """Routes this plugin contributes on its own."""
        ...

    def register_navigation(self) -> dict[str, str]:
        """Navigation entry: ``{name, path, icon}``."""
        ...

    def register_search_terms(self) -> list[str]:
        """De-duplicated terms under which the modality can be found."""
        ...
