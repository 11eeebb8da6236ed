"""
Default behavior shared by all modality plugins.

Every function takes the plugin as its first argument so that a concrete
plugin can be declared with data only. A plugin that needs different
behavior attaches an override instead of subclassing.
"""

from typing import Any

from .errors import PluginValidationError
from .modality_plugin_protocol import ModalityPluginContract
from .types import (
    ComparisonMetrics,
    EffectivenessEntry,
    PatientData,
    PregnancyPolicy,
    SafetyResult,
    SkillLevel,
    Technique,
    TreatmentProtocol,
)

EASE_OF_USE = {
    SkillLevel.BEGINNER: 90,
    SkillLevel.INTERMEDIATE: 70,
    SkillLevel.ADVANCED: 50,
}

# Safety profile never drops below this floor
MIN_SAFETY_PROFILE = 60
ABSOLUTE_PENALTY = 10
RELATIVE_PENALTY = 5

DEFAULT_DURATION = "Variable"
DEFAULT_FREQUENCY = "As needed"


def indication_matches(candidate: str, indication: str) -> bool:
    """
    Loose indication match used by every indication lookup.

    Equal keys match, and so does either key containing the other,
    ignoring case. ``"pain"`` therefore matches ``"back_pain"``.
    """
    if candidate == indication:
        return True
    a = candidate.lower()
    b = indication.lower()
    return b in a or a in b


def validate_protocols(plugin: ModalityPluginContract) -> None:
    """
    Raise PluginValidationError for the first malformed protocol.

    A protocol needs a non-empty id, name and indication, and must belong
    to the plugin it is declared in.
    """
    plugin_id = plugin.metadata.id
    if not plugin_id:
        raise PluginValidationError("<unnamed>", "metadata.id is required")

    for index, protocol in enumerate(plugin.protocols):
        missing = [
            attr for attr in ("id", "name", "indication")
            if not getattr(protocol, attr, None)
        ]
        if missing:
            raise PluginValidationError(
                plugin_id,
                f"protocol #{index} is missing {', '.join(missing)}"
            )
        if protocol.modality_id != plugin_id:
            raise PluginValidationError(
                plugin_id,
                f"protocol '{protocol.id}' belongs to '{protocol.modality_id}'"
            )


def protocols_for_indication(
    plugin: ModalityPluginContract,
    indication: str
) -> list[TreatmentProtocol]:
    return [
        protocol for protocol in plugin.protocols
        if indication_matches(protocol.indication, indication)
    ]


def techniques_for_indication(
    plugin: ModalityPluginContract,
    indication: str
) -> list[Technique]:
    technique_ids: set[str] = set()
    for protocol in plugin.get_protocols_for_indication(indication):
        for step in protocol.steps:
            technique_ids.update(step.techniques)

    return [t for t in plugin.techniques if t.id in technique_ids]


def effectiveness_for_indication(
    plugin: ModalityPluginContract,
    indication: str
) -> EffectivenessEntry | None:
    for entry in plugin.effectiveness:
        if indication_matches(entry.indication, indication):
            return entry
    return None


def _has_condition(patient_data: PatientData, contraindication: str) -> bool:
    needle = contraindication.lower()
    return any(
        needle in value.lower()
        for value in (*patient_data.conditions, *patient_data.medications)
    )


def validate_safety(
    plugin: ModalityPluginContract,
    patient_data: PatientData
) -> SafetyResult:
    """
    Check a patient against all contraindication sources of a plugin.

    Sources are evaluated in order (absolute, relative, pregnancy, age) and
    every applicable warning is collected. Only absolute matches, pregnancy
    'avoid' and being under the minimum age make the result unsafe.
    """
    rules = plugin.contraindications
    result = SafetyResult(safe=True)

    for contraindication in rules.absolute:
        if _has_condition(patient_data, contraindication):
            result.warnings.append(f"Absolute contraindication: {contraindication}")
            result.safe = False

    for contraindication in rules.relative:
        if _has_condition(patient_data, contraindication):
            result.warnings.append(f"Use with caution: {contraindication}")

    if patient_data.pregnancy:
        if rules.pregnancy == PregnancyPolicy.AVOID:
            result.warnings.append("Avoid during pregnancy")
            result.safe = False
        elif rules.pregnancy == PregnancyPolicy.CAUTION:
            result.warnings.append("Use with caution during pregnancy")

    restrictions = rules.age_restrictions
    if restrictions and patient_data.age is not None:
        age = patient_data.age
        if restrictions.min_age is not None and age < restrictions.min_age:
            result.warnings.append(
                f"Not recommended for ages under {restrictions.min_age}"
            )
            result.safe = False
        if restrictions.max_age is not None and age > restrictions.max_age:
            result.warnings.append(
                f"Use with caution for ages over {restrictions.max_age}"
            )

    return result


def comparison_data(plugin: ModalityPluginContract) -> ComparisonMetrics:
    """Derive a comparison row from the plugin's own data."""
    metadata = plugin.metadata
    first = plugin.protocols[0] if plugin.protocols else None

    scores = [entry.effectiveness_score for entry in plugin.effectiveness]
    effectiveness = sum(scores) / len(scores) if scores else 0

    penalty = (
        ABSOLUTE_PENALTY * len(plugin.contraindications.absolute)
        + RELATIVE_PENALTY * len(plugin.contraindications.relative)
    )

    return ComparisonMetrics(
        duration=(first.duration if first else "") or DEFAULT_DURATION,
        frequency=(first.frequency if first else "") or DEFAULT_FREQUENCY,
        effectiveness=effectiveness,
        ease_of_use=EASE_OF_USE.get(metadata.skill_level, EASE_OF_USE[SkillLevel.ADVANCED]),
        safety_profile=max(MIN_SAFETY_PROFILE, 100 - penalty),
        cost="Low-Medium" if metadata.equipment_required else "Free",
        equipment="Required" if metadata.equipment_required else "None",
    )


def routes(plugin: ModalityPluginContract) -> list[dict[str, Any]]:
    return [{
        "path": f"/{plugin.metadata.id}",
        "view": plugin.ui.protocol_page,
    }]


def navigation(plugin: ModalityPluginContract) -> dict[str, str]:
    return {
        "name": plugin.metadata.display_name,
        "path": f"/{plugin.metadata.id}",
        "icon": plugin.metadata.icon,
    }


def search_terms(plugin: ModalityPluginContract) -> list[str]:
    """Modality name, display name and every protocol and technique name."""
    terms = [
        plugin.metadata.name,
        plugin.metadata.display_name,
        *(protocol.name for protocol in plugin.protocols),
        *(technique.name for technique in plugin.techniques),
    ]
    return unique(terms)


def unique(terms: list[str]) -> list[str]:
    """Drop duplicates and empty strings, keeping first-seen order."""
    return [term for term in dict.fromkeys(terms) if term]
