"""
Reflexology demo modality.

Not loaded at startup. The API adds and removes it at runtime to show
that navigation, routes and comparison tables follow the registry.
Declared with data only, so every behavior comes from the defaults.
"""

from ..modality_plugin import ModalityPlugin
from ..types import (
    AgeRestrictions,
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

MODALITY_ID = "reflexology_demo"


def get_plugin() -> ModalityPlugin:
    return ModalityPlugin(
        metadata=ModalityMetadata(
            id=MODALITY_ID,
            name="reflexology",
            display_name="Reflexology Demo",
            icon="🦶",
            version="0.1.0",
            skill_level=SkillLevel.BEGINNER,
            equipment_required=False,
            self_administered=True,
            description="Foot pressure therapy on reflex zones (demo plugin)",
            category="physical",
        ),
        protocols=(
            TreatmentProtocol(
                id="reflexology_headache",
                modality_id=MODALITY_ID,
                indication="headache",
                name="Reflexology for headache",
                description="Head reflex areas on the big toes and toe bases",
                steps=(
                    Step(
                        id="treatment",
                        order=1,
                        type=StepType.TREATMENT,
                        title="Toe Reflex Work",
                        description="Firm thumb circles on the head reflex areas",
                        duration="15-20 minutes",
                        points=("big_toe_tip", "toe_base_area", "neck_reflex_zone"),
                        techniques=("thumb_walking",),
                    ),
                ),
                duration="15-20 minutes",
                frequency="2-3 times per week",
                difficulty=SkillLevel.BEGINNER,
                contraindications=("foot_injuries", "open_wounds"),
            ),
        ),
        techniques=(
            Technique(
                id="thumb_walking",
                modality_id=MODALITY_ID,
                name="Thumb Walking",
                description="Small forward bends of the thumb across a reflex zone",
                instructions=(
                    "Support the foot with one hand",
                    "Bend and straighten the thumb to inch forward",
                    "Keep constant contact with the skin",
                ),
                duration="2-3 minutes per zone",
                intensity=Intensity.MODERATE,
            ),
        ),
        effectiveness=(
            EffectivenessEntry(
                indication="headache",
                effectiveness_score=78,
                evidence_level=EvidenceLevel.MODERATE,
            ),
        ),
        contraindications=Contraindications(
            absolute=("foot_injuries",),
            relative=("severe_diabetes",),
            pregnancy=PregnancyPolicy.CAUTION,
            age_restrictions=AgeRestrictions(min_age=5),
        ),
        ui=UIBindings(
            protocol_page="reflexology_demo/protocol_page.html",
            protocol_card="reflexology_demo/protocol_card.html",
            techniques_list="reflexology_demo/techniques_list.html",
            safety_warnings="reflexology_demo/safety_warnings.html",
            comparison_metrics="reflexology_demo/comparison_metrics.html",
        ),
        extra_search_terms=("reflexology", "foot", "pressure", "demo"),
    )
