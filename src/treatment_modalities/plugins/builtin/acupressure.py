"""
Acupressure modality.

Gentle finger pressure on acupuncture points; beginner level and
self-administered, so it needs no equipment.
"""

from ..modality_plugin import ModalityPlugin, curated_comparison
from ..types import (
    AgeRestrictions,
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

MODALITY_ID = "acupressure"

# (indication, primary points, techniques, total duration, frequency, clinical notes)
_PROTOCOL_DATA = [
    (
        "headache",
        ("LI4", "GB20", "Yintang", "Taiyang"),
        ("finger_pressure", "circular_pressure"),
        "15-20 minutes",
        "Daily during episodes, 2-3 times per week for prevention",
        "Start with LI4 bilaterally, then work the neck and temples.",
    ),
    (
        "insomnia",
        ("HT7", "SP6", "Anmian", "KI1"),
        ("circular_pressure", "pulsing_pressure"),
        "15-25 minutes",
        "Nightly before bed",
        "Apply slowly in a quiet room; finish with KI1 on both feet.",
    ),
    (
        "nausea",
        ("PC6", "ST36", "CV12"),
        ("finger_pressure",),
        "10-15 minutes",
        "As needed, up to every 2 hours",
        "PC6 is the primary point; maintain steady pressure until nausea eases.",
    ),
]


def _label(indication: str) -> str:
    return indication.replace("_", " ")


def _protocol(indication, points, techniques, duration, frequency, notes) -> TreatmentProtocol:
    return TreatmentProtocol(
        id=f"acupressure_{indication}",
        modality_id=MODALITY_ID,
        indication=indication,
        name=f"Acupressure for {_label(indication)}",
        description=f"Acupressure treatment protocol for {_label(indication)}",
        steps=(
            Step(
                id="preparation",
                order=1,
                type=StepType.PREPARATION,
                title="Preparation",
                description="Position the patient comfortably and locate primary points",
                duration="2-3 minutes",
            ),
            Step(
                id="treatment",
                order=2,
                type=StepType.TREATMENT,
                title="Acupressure Application",
                description=notes,
                duration=duration,
                points=points,
                techniques=techniques,
                notes=f"Primary points: {', '.join(points)}",
            ),
            Step(
                id="evaluation",
                order=3,
                type=StepType.EVALUATION,
                title="Evaluation",
                description="Assess treatment response",
                duration="1-2 minutes",
                notes="Check for symptom improvement and patient comfort",
            ),
        ),
        duration=duration,
        frequency=frequency,
        difficulty=SkillLevel.BEGINNER,
        contraindications=("open_wounds", "severe_inflammation"),
        expected_outcomes=(f"Improvement in {_label(indication)}",),
        clinical_notes=notes,
    )


TECHNIQUES = (
    Technique(
        id="finger_pressure",
        modality_id=MODALITY_ID,
        name="Finger Pressure",
        description="Apply steady pressure using fingertips",
        instructions=(
            "Locate the acupuncture point accurately",
            "Apply steady, perpendicular pressure",
            "Gradually increase pressure to patient tolerance",
            "Hold for specified duration",
            "Release pressure slowly",
        ),
        duration="30 seconds to 3 minutes",
        intensity=Intensity.MODERATE,
        contraindications=("open_wounds", "severe_inflammation"),
    ),
    Technique(
        id="circular_pressure",
        modality_id=MODALITY_ID,
        name="Circular Pressure",
        description="Apply pressure with small circular motions",
        instructions=(
            "Place finger on point with moderate pressure",
            "Make small clockwise circles",
            "Maintain consistent pressure",
            "Continue for specified duration",
        ),
        duration="1-2 minutes",
        intensity=Intensity.LIGHT,
        contraindications=("skin_sensitivity",),
    ),
    Technique(
        id="pulsing_pressure",
        modality_id=MODALITY_ID,
        name="Pulsing Pressure",
        description="Rhythmic pressure application and release",
        instructions=(
            "Apply pressure for 3-5 seconds",
            "Release for 1-2 seconds",
            "Repeat rhythmic pattern",
            "Continue for total duration",
        ),
        duration="2-3 minutes",
        intensity=Intensity.MODERATE,
        contraindications=("acute_pain",),
    ),
)


def get_plugin() -> ModalityPlugin:
    return ModalityPlugin(
        metadata=ModalityMetadata(
            id=MODALITY_ID,
            name="acupressure",
            display_name="Acupressure",
            icon="👆",
            version="1.0.0",
            skill_level=SkillLevel.BEGINNER,
            equipment_required=False,
            self_administered=True,
            description=(
                "Gentle finger pressure applied to specific acupuncture points "
                "to stimulate healing and balance energy flow."
            ),
            category="physical",
        ),
        protocols=tuple(_protocol(*row) for row in _PROTOCOL_DATA),
        techniques=TECHNIQUES,
        effectiveness=(
            EffectivenessEntry(
                indication="headache",
                effectiveness_score=85,
                evidence_level=EvidenceLevel.HIGH,
                references=("Clinical trials on acupressure for headache relief",),
                clinical_notes="Particularly effective for tension headaches and migraines",
            ),
            EffectivenessEntry(
                indication="stress",
                effectiveness_score=90,
                evidence_level=EvidenceLevel.HIGH,
                clinical_notes="Excellent for stress reduction and relaxation",
            ),
            EffectivenessEntry(
                indication="insomnia",
                effectiveness_score=75,
                evidence_level=EvidenceLevel.MODERATE,
                clinical_notes="Helps with sleep quality when applied before bedtime",
            ),
            EffectivenessEntry(
                indication="nausea",
                effectiveness_score=82,
                evidence_level=EvidenceLevel.HIGH,
                clinical_notes="PC6 is well studied for post-operative and morning nausea",
            ),
        ),
        contraindications=Contraindications(
            absolute=("severe_osteoporosis", "blood_clotting_disorders"),
            relative=("pregnancy_first_trimester", "recent_surgery"),
            pregnancy=PregnancyPolicy.CAUTION,
            age_restrictions=AgeRestrictions(
                min_age=3,
                special_considerations="Use gentle pressure for children and elderly",
            ),
            medications=("blood_thinners",),
            conditions=("severe_hypertension", "heart_conditions"),
        ),
        ui=UIBindings(
            protocol_page="acupressure/protocol_page.html",
            protocol_card="acupressure/protocol_card.html",
            techniques_list="acupressure/techniques_list.html",
            safety_warnings="acupressure/safety_warnings.html",
            comparison_metrics="acupressure/comparison_metrics.html",
        ),
        comparison_override=curated_comparison(ComparisonMetrics(
            duration="15-30 minutes",
            frequency="2-3 times per week",
            effectiveness=85,
            ease_of_use=95,
            safety_profile=98,
            cost="Free",
            equipment="None - hands only",
        )),
        extra_search_terms=(
            "finger pressure",
            "point pressure",
            "meridian massage",
            "pressure therapy",
            "self-treatment",
            "non-invasive",
            "traditional chinese medicine",
            "tcm",
        ),
    )
