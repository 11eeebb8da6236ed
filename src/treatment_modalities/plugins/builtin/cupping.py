"""
Cupping therapy modality.
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
    TechniqueModification,
    TreatmentProtocol,
    UIBindings,
)

MODALITY_ID = "cupping"

_PROTOCOL_DATA = [
    {
        "indication": "back_pain",
        "areas": ("BL23", "BL25", "erector_spinae", "quadratus_lumborum"),
        "techniques": ("stationary_cupping", "moving_cupping"),
        "duration": "25-35 minutes",
        "frequency": "2-3 times per week for acute pain, weekly for chronic conditions",
        "contraindications": ("spinal_fractures", "recent_back_surgery"),
        "notes": "Work the paraspinal muscles first, then leave cups on BL23 and BL25.",
    },
    {
        "indication": "headache",
        "areas": ("GB21", "upper_trapezius", "BL10"),
        "techniques": ("flash_cupping", "stationary_cupping"),
        "duration": "15-25 minutes",
        "frequency": "2-3 times per week during acute episodes, weekly for prevention",
        "contraindications": ("migraine_with_aura",),
        "notes": "Treat the neck and shoulders; avoid the head itself.",
    },
    {
        "indication": "muscle_tension",
        "areas": ("trigger_points", "large_muscle_groups"),
        "techniques": ("moving_cupping",),
        "duration": "20-30 minutes",
        "frequency": "2-3 times per week for acute tension, weekly for maintenance",
        "contraindications": (),
        "notes": "Use moving cups with oil along the tight muscle bands.",
    },
]


def _label(indication: str) -> str:
    return indication.replace("_", " ")


def _protocol(data: dict) -> TreatmentProtocol:
    indication = data["indication"]
    return TreatmentProtocol(
        id=f"cupping_{indication}",
        modality_id=MODALITY_ID,
        indication=indication,
        name=f"Cupping Therapy for {_label(indication)}",
        description=f"Professional cupping treatment protocol for {_label(indication)}",
        steps=(
            Step(
                id="preparation",
                order=1,
                type=StepType.PREPARATION,
                title="Preparation",
                description="Prepare equipment and treatment area",
                duration="3-5 minutes",
                equipment=("glass_cups", "suction_pump", "massage_oil"),
            ),
            Step(
                id="treatment",
                order=2,
                type=StepType.TREATMENT,
                title="Cupping Application",
                description=data["notes"],
                duration=data["duration"],
                points=data["areas"],
                techniques=data["techniques"],
            ),
            Step(
                id="evaluation",
                order=3,
                type=StepType.EVALUATION,
                title="Post-Treatment Care",
                description="Remove cups and provide aftercare",
                duration="2-3 minutes",
                notes="Explain normal skin discoloration and duration",
            ),
        ),
        duration=data["duration"],
        frequency=data["frequency"],
        difficulty=SkillLevel.INTERMEDIATE,
        contraindications=data["contraindications"],
        precautions=("Monitor skin condition", "Avoid over-suction", "Educate patient about marks"),
        expected_outcomes=(
            f"Improved circulation in {_label(indication)}",
            "Reduced muscle tension",
            "Pain relief",
        ),
        clinical_notes=data["notes"],
    )


TECHNIQUES = (
    Technique(
        id="stationary_cupping",
        modality_id=MODALITY_ID,
        name="Stationary Cupping",
        description="Cups placed and left in position for specified duration",
        instructions=(
            "Clean and prepare the treatment area",
            "Select appropriate cup size for the area",
            "Apply moderate suction to create seal",
            "Leave cups in place for specified duration",
            "Remove cups by releasing suction gradually",
        ),
        duration="10-20 minutes",
        intensity=Intensity.MODERATE,
        equipment=("glass_cups", "suction_pump"),
        contraindications=("pregnancy", "blood_thinners", "skin_conditions"),
    ),
    Technique(
        id="moving_cupping",
        modality_id=MODALITY_ID,
        name="Moving Cupping",
        description="Cups moved along meridian lines or muscle groups",
        instructions=(
            "Apply oil to treatment area",
            "Create light suction with cup",
            "Move cup smoothly along meridian or muscle",
            "Maintain consistent suction pressure",
            "Complete treatment area systematically",
        ),
        duration="15-25 minutes",
        intensity=Intensity.LIGHT,
        equipment=("glass_cups", "massage_oil", "suction_pump"),
        contraindications=("skin_sensitivity", "recent_injuries"),
    ),
    Technique(
        id="flash_cupping",
        modality_id=MODALITY_ID,
        name="Flash Cupping",
        description="Rapid application and removal of cups",
        instructions=(
            "Apply cup with light suction",
            "Hold for 1-2 seconds",
            "Release suction and remove",
            "Repeat 5-10 times per point",
            "Move to next treatment area",
        ),
        duration="5-10 minutes",
        intensity=Intensity.LIGHT,
        equipment=("glass_cups", "suction_pump"),
        contraindications=("severe_hypertension",),
    ),
    Technique(
        id="wet_cupping",
        modality_id=MODALITY_ID,
        name="Wet Cupping (Hijama)",
        description="Cupping with controlled bloodletting",
        instructions=(
            "Perform dry cupping first",
            "Make small superficial incisions",
            "Apply cups to draw small amount of blood",
            "Monitor closely for patient comfort",
            "Apply antiseptic and bandage after treatment",
        ),
        duration="20-30 minutes",
        intensity=Intensity.FIRM,
        equipment=("sterile_lancets", "glass_cups", "antiseptic", "bandages"),
        contraindications=("blood_disorders", "pregnancy", "diabetes", "immunocompromised"),
        modifications=(
            TechniqueModification(
                condition="first_time_patient",
                modification="Start with dry cupping only to assess tolerance",
            ),
        ),
    ),
)


def get_plugin() -> ModalityPlugin:
    return ModalityPlugin(
        metadata=ModalityMetadata(
            id=MODALITY_ID,
            name="cupping",
            display_name="Cupping Therapy",
            icon="🥤",
            version="1.0.0",
            skill_level=SkillLevel.INTERMEDIATE,
            equipment_required=True,
            self_administered=False,
            description=(
                "Suction therapy using cups to improve circulation, reduce "
                "muscle tension, and promote healing."
            ),
            category="physical",
        ),
        protocols=tuple(_protocol(row) for row in _PROTOCOL_DATA),
        techniques=TECHNIQUES,
        effectiveness=(
            EffectivenessEntry(
                indication="back_pain",
                effectiveness_score=92,
                evidence_level=EvidenceLevel.HIGH,
                references=("Systematic review: Cupping for chronic back pain",),
                clinical_notes="Excellent for deep muscle tension and chronic back pain",
            ),
            EffectivenessEntry(
                indication="muscle_tension",
                effectiveness_score=90,
                evidence_level=EvidenceLevel.HIGH,
                clinical_notes="Rapid relief of muscle knots and tension",
            ),
            EffectivenessEntry(
                indication="headache",
                effectiveness_score=78,
                evidence_level=EvidenceLevel.MODERATE,
                clinical_notes="Effective for tension headaches, less effective for migraines",
            ),
            EffectivenessEntry(
                indication="athletic_recovery",
                effectiveness_score=88,
                evidence_level=EvidenceLevel.MODERATE,
                clinical_notes="Popular among athletes for muscle recovery",
            ),
        ),
        contraindications=Contraindications(
            absolute=("pregnancy", "blood_clotting_disorders", "severe_heart_conditions", "skin_cancer"),
            relative=("diabetes", "recent_surgery", "blood_thinners", "skin_sensitivity"),
            pregnancy=PregnancyPolicy.AVOID,
            age_restrictions=AgeRestrictions(
                min_age=12,
                max_age=75,
                special_considerations="Use lighter suction for elderly patients and adolescents",
            ),
            medications=("warfarin", "heparin", "aspirin_high_dose"),
            conditions=("eczema", "psoriasis", "open_wounds", "severe_anemia"),
        ),
        ui=UIBindings(
            protocol_page="cupping/protocol_page.html",
            protocol_card="cupping/protocol_card.html",
            techniques_list="cupping/techniques_list.html",
            safety_warnings="cupping/safety_warnings.html",
            comparison_metrics="cupping/comparison_metrics.html",
        ),
        comparison_override=curated_comparison(ComparisonMetrics(
            duration="20-30 minutes",
            frequency="1-2 times per week",
            effectiveness=90,
            ease_of_use=75,
            safety_profile=85,
            cost="Low-Medium",
            equipment="Cups and suction pump required",
        )),
        extra_search_terms=(
            "suction therapy",
            "glass cups",
            "hijama",
            "wet cupping",
            "dry cupping",
            "moving cups",
            "circulation therapy",
            "muscle tension relief",
        ),
    )
