"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and makes fixtures
available to all test modules.
"""

import sys
from pathlib import Path

import pytest

# Add src/ to Python path so tests run without an editable install
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from treatment_modalities.config import reset_modality_config  # noqa: E402
from treatment_modalities.plugins import ModalityPlugin, ModalityRegistry  # noqa: E402
from treatment_modalities.plugins.types import (  # noqa: E402
    Contraindications,
    EffectivenessEntry,
    EvidenceLevel,
    Intensity,
    ModalityMetadata,
    PregnancyPolicy,
    SkillLevel,
    Step,
    StepType,
    Technique,
    TreatmentProtocol,
    UIBindings,
)


def build_protocol(plugin_id: str, indication: str, **overrides) -> TreatmentProtocol:
    """Protocol with one treatment step referencing ``<plugin_id>_tech``."""
    fields = {
        "id": f"{plugin_id}_{indication}",
        "modality_id": plugin_id,
        "indication": indication,
        "name": f"{plugin_id} for {indication}",
        "description": "test protocol",
        "steps": (
            Step(
                id="treatment",
                order=1,
                type=StepType.TREATMENT,
                title="Treatment",
                description="Apply technique",
                duration="10 minutes",
                techniques=(f"{plugin_id}_tech",),
            ),
        ),
        "duration": "10 minutes",
        "frequency": "Daily",
        "difficulty": SkillLevel.BEGINNER,
    }
    fields.update(overrides)
    return TreatmentProtocol(**fields)


def build_plugin(
    plugin_id: str = "test_modality",
    indications=("headache", "back_pain"),
    scores=(80, 90),
    absolute=(),
    relative=(),
    pregnancy=PregnancyPolicy.SAFE,
    age_restrictions=None,
    skill_level=SkillLevel.BEGINNER,
    equipment_required=False,
    category="physical",
    protocols=None,
    **overrides
) -> ModalityPlugin:
    """Data-only plugin for tests; every argument is optional."""
    if protocols is None:
        protocols = tuple(build_protocol(plugin_id, ind) for ind in indications)

    fields = {
        "metadata": ModalityMetadata(
            id=plugin_id,
            name=plugin_id,
            display_name=plugin_id.replace("_", " ").title(),
            icon="*",
            version="1.0.0",
            skill_level=skill_level,
            equipment_required=equipment_required,
            self_administered=True,
            category=category,
        ),
        "protocols": tuple(protocols),
        "techniques": (
            Technique(
                id=f"{plugin_id}_tech",
                modality_id=plugin_id,
                name=f"{plugin_id} technique",
                description="test technique",
                instructions=("Do it",),
                duration="5 minutes",
                intensity=Intensity.LIGHT,
            ),
            Technique(
                id=f"{plugin_id}_unused",
                modality_id=plugin_id,
                name=f"{plugin_id} unused technique",
                description="not referenced by any step",
                instructions=("Skip it",),
                duration="5 minutes",
                intensity=Intensity.FIRM,
            ),
        ),
        "effectiveness": tuple(
            EffectivenessEntry(
                indication=ind,
                effectiveness_score=score,
                evidence_level=EvidenceLevel.MODERATE,
            )
            for ind, score in zip(indications, scores)
        ),
        "contraindications": Contraindications(
            absolute=tuple(absolute),
            relative=tuple(relative),
            pregnancy=pregnancy,
            age_restrictions=age_restrictions,
        ),
        "ui": UIBindings(
            protocol_page=f"{plugin_id}/page",
            protocol_card=f"{plugin_id}/card",
            techniques_list=f"{plugin_id}/techniques",
            safety_warnings=f"{plugin_id}/safety",
            comparison_metrics=f"{plugin_id}/metrics",
        ),
    }
    fields.update(overrides)
    return ModalityPlugin(**fields)


@pytest.fixture
def registry() -> ModalityRegistry:
    """Fresh, empty registry per test."""
    return ModalityRegistry()


@pytest.fixture
def make_plugin():
    return build_plugin


@pytest.fixture
def make_protocol():
    return build_protocol


@pytest.fixture(autouse=True)
def _fresh_config():
    """Re-read the environment for every test."""
    reset_modality_config()
    yield
    reset_modality_config()
