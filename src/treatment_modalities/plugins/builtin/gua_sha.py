"""
Gua Sha modality.
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

MODALITY_ID = "gua_sha"

_PROTOCOL_DATA = [
    {
        "indication": "neck_stiffness",
        "areas": ("GB20", "GB21", "upper_trapezius", "SCM"),
        "tool": "buffalo_horn",
        "techniques": ("unidirectional_scraping",),
        "duration": "15-25 minutes",
        "frequency": "2-3 times per week for acute stiffness, weekly for chronic tension",
        "notes": "Scrape downward from the occiput along the trapezius.",
    },
    {
        "indication": "headache",
        "areas": ("GB20", "posterior_neck", "Taiyang"),
        "tool": "jade_gua_sha_tool",
        "techniques": ("unidirectional_scraping", "facial_gua_sha"),
        "duration": "15-25 minutes",
        "frequency": "2-3 times per week during acute episodes, weekly for prevention",
        "notes": "Use light strokes at the temples and moderate strokes on the neck.",
    },
]


def _protocol(data: dict) -> TreatmentProtocol:
    indication = data["indication"]
    label = indication.replace("_", " ")
    return TreatmentProtocol(
        id=f"gua_sha_{indication}",
        modality_id=MODALITY_ID,
        indication=indication,
        name=f"Gua Sha for {label}",
        description=f"Gua Sha treatment protocol for {label}",
        steps=(
            Step(
                id="preparation",
                order=1,
                type=StepType.PREPARATION,
                title="Preparation",
                description="Prepare tools and treatment area",
                duration="2-3 minutes",
                equipment=(data["tool"], "massage_oil"),
            ),
            Step(
                id="treatment",
                order=2,
                type=StepType.TREATMENT,
                title="Gua Sha Application",
                description=data["notes"],
                duration=data["duration"],
                points=data["areas"],
                techniques=data["techniques"],
                notes=f"Tool: {data['tool']}",
            ),
        ),
        duration=data["duration"],
        frequency=data["frequency"],
        difficulty=SkillLevel.INTERMEDIATE,
        precautions=("Monitor skin response", "Use appropriate pressure", "Avoid broken skin"),
        expected_outcomes=("Improved circulation", "Reduced tension", "Lymphatic drainage"),
        clinical_notes=data["notes"],
    )


def get_plugin() -> ModalityPlugin:
    return ModalityPlugin(
        metadata=ModalityMetadata(
            id=MODALITY_ID,
            name="gua_sha",
            display_name="Gua Sha",
            icon="🪨",
            version="1.0.0",
            skill_level=SkillLevel.INTERMEDIATE,
            equipment_required=True,
            self_administered=True,
            description=(
                "Scraping technique using smooth tools to improve circulation "
                "and release muscle tension."
            ),
            category="physical",
        ),
        protocols=tuple(_protocol(row) for row in _PROTOCOL_DATA),
        techniques=(
            Technique(
                id="unidirectional_scraping",
                modality_id=MODALITY_ID,
                name="Unidirectional Scraping",
                description="Scraping in one direction following meridian flow",
                instructions=(
                    "Apply oil to treatment area",
                    "Hold tool at 45-degree angle",
                    "Apply moderate pressure",
                    "Scrape in one direction 20-30 times",
                    "Move to adjacent area systematically",
                ),
                duration="15-20 minutes",
                intensity=Intensity.MODERATE,
                equipment=("gua_sha_tool", "massage_oil"),
                contraindications=("blood_thinners", "skin_infections"),
            ),
            Technique(
                id="facial_gua_sha",
                modality_id=MODALITY_ID,
                name="Facial Gua Sha",
                description="Gentle scraping technique for the face",
                instructions=(
                    "Apply facial oil or serum",
                    "Use light pressure with smooth tool",
                    "Follow facial contours and lymphatic pathways",
                    "Scrape upward and outward",
                    "Complete with gentle circular motions",
                ),
                duration="10-15 minutes",
                intensity=Intensity.LIGHT,
                equipment=("jade_gua_sha_tool", "facial_oil"),
                contraindications=("active_acne", "rosacea", "recent_facial_procedures"),
            ),
        ),
        effectiveness=(
            EffectivenessEntry(
                indication="neck_pain",
                effectiveness_score=88,
                evidence_level=EvidenceLevel.HIGH,
                clinical_notes="Excellent for neck and shoulder tension relief",
            ),
            EffectivenessEntry(
                indication="headache",
                effectiveness_score=76,
                evidence_level=EvidenceLevel.MODERATE,
            ),
            EffectivenessEntry(
                indication="lymphatic_congestion",
                effectiveness_score=92,
                evidence_level=EvidenceLevel.MODERATE,
                clinical_notes="Supports lymphatic drainage",
            ),
        ),
        contraindications=Contraindications(
            absolute=("blood_clotting_disorders", "severe_cardiovascular_disease"),
            relative=("pregnancy", "recent_injuries", "skin_sensitivity"),
            pregnancy=PregnancyPolicy.CAUTION,
            age_restrictions=AgeRestrictions(
                min_age=8,
                special_considerations="Use very light pressure for children and elderly",
            ),
            medications=("blood_thinners", "anticoagulants"),
            conditions=("eczema", "psoriasis", "open_wounds"),
        ),
        ui=UIBindings(
            protocol_page="gua_sha/protocol_page.html",
            protocol_card="gua_sha/protocol_card.html",
            techniques_list="gua_sha/techniques_list.html",
            safety_warnings="gua_sha/safety_warnings.html",
            comparison_metrics="gua_sha/comparison_metrics.html",
        ),
        comparison_override=curated_comparison(ComparisonMetrics(
            duration="15-25 minutes",
            frequency="2-3 times per week",
            effectiveness=88,
            ease_of_use=80,
            safety_profile=90,
            cost="Low",
            equipment="Gua sha tool required",
        )),
    )
