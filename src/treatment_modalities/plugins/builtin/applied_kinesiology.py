"""
Applied Kinesiology modality.

Diagnostic muscle testing followed by corrections. Advanced skill level,
no equipment, not self-administered.
"""

from ..modality_plugin import ModalityPlugin, curated_comparison
from ..types import (
    ComparisonMetrics,
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

MODALITY_ID = "applied_kinesiology"


def _protocol(indication: str, muscles: tuple[str, ...], corrections: tuple[str, ...], notes: str) -> TreatmentProtocol:
    label = indication.replace("_", " ")
    return TreatmentProtocol(
        id=f"ak_{indication}",
        modality_id=MODALITY_ID,
        indication=indication,
        name=f"AK Assessment for {label}",
        description=f"Applied Kinesiology assessment and correction protocol for {label}",
        steps=(
            Step(
                id="assessment",
                order=1,
                type=StepType.ASSESSMENT,
                title="Muscle Assessment",
                description="Test primary muscle groups",
                duration="10-15 minutes",
                points=muscles,
                techniques=("manual_muscle_testing",),
                notes=f"Primary assessments: {', '.join(muscles)}",
            ),
            Step(
                id="treatment",
                order=2,
                type=StepType.TREATMENT,
                title="Correction Techniques",
                description=notes,
                duration="10-20 minutes",
                techniques=corrections,
            ),
        ),
        duration="30-45 minutes",
        frequency="As needed for assessment",
        difficulty=SkillLevel.ADVANCED,
        precautions=("Ensure patient cooperation", "Avoid muscle fatigue", "Document findings"),
        expected_outcomes=("Identify muscle weaknesses", "Correct imbalances", "Improve function"),
        clinical_notes=notes,
    )


def get_plugin() -> ModalityPlugin:
    return ModalityPlugin(
        metadata=ModalityMetadata(
            id=MODALITY_ID,
            name="applied_kinesiology",
            display_name="Applied Kinesiology",
            icon="💪",
            version="1.0.0",
            skill_level=SkillLevel.ADVANCED,
            equipment_required=False,
            self_administered=False,
            description=(
                "Muscle testing technique to assess body function and identify "
                "imbalances for targeted treatment."
            ),
            category="diagnostic",
        ),
        protocols=(
            _protocol(
                "back_pain",
                ("psoas", "gluteus_medius", "quadratus_lumborum"),
                ("challenge_testing",),
                "Correct pelvic imbalance before treating the lumbar muscles.",
            ),
            _protocol(
                "digestive_disorders",
                ("pectoralis_major_clavicular", "latissimus_dorsi"),
                ("challenge_testing",),
                "Check the stomach and pancreas associated muscles first.",
            ),
        ),
        techniques=(
            Technique(
                id="manual_muscle_testing",
                modality_id=MODALITY_ID,
                name="Manual Muscle Testing",
                description="Basic muscle strength testing to assess neurological function",
                instructions=(
                    "Position patient in optimal testing position",
                    "Isolate specific muscle group",
                    "Apply gradual pressure against muscle contraction",
                    "Assess strength response and quality",
                    "Document findings and correlate with symptoms",
                ),
                duration="2-5 minutes per muscle",
                intensity=Intensity.VARIABLE,
                contraindications=("acute_injuries", "severe_pain"),
            ),
            Technique(
                id="challenge_testing",
                modality_id=MODALITY_ID,
                name="Challenge Testing",
                description="Testing muscle response to various stimuli",
                instructions=(
                    "Establish baseline muscle strength",
                    "Introduce challenge stimulus",
                    "Retest muscle strength",
                    "Compare pre and post challenge responses",
                    "Identify positive or negative responses",
                ),
                duration="5-10 minutes",
                intensity=Intensity.LIGHT,
            ),
        ),
        effectiveness=(
            EffectivenessEntry(
                indication="back_pain",
                effectiveness_score=70,
                evidence_level=EvidenceLevel.LOW,
                clinical_notes="Useful to identify compensation patterns",
            ),
            EffectivenessEntry(
                indication="digestive_disorders",
                effectiveness_score=65,
                evidence_level=EvidenceLevel.LOW,
            ),
        ),
        contraindications=Contraindications(
            absolute=("acute_fractures",),
            relative=("severe_pain", "recent_surgery"),
            pregnancy=PregnancyPolicy.SAFE,
            medications=("muscle_relaxants",),
            conditions=("neuromuscular_disease",),
        ),
        ui=UIBindings(
            protocol_page="applied_kinesiology/protocol_page.html",
            protocol_card="applied_kinesiology/protocol_card.html",
            techniques_list="applied_kinesiology/techniques_list.html",
            safety_warnings="applied_kinesiology/safety_warnings.html",
            comparison_metrics="applied_kinesiology/comparison_metrics.html",
        ),
        comparison_override=curated_comparison(ComparisonMetrics(
            duration="30-45 minutes",
            frequency="As needed",
            effectiveness=92,
            ease_of_use=60,
            safety_profile=95,
            cost="Free",
            equipment="None required",
        )),
    )
