"""
Dynamic composition of views over the modality registry.

Routes, navigation, modality cards, comparison rows and recommendations
are derived from whatever is registered at the moment of the call.
Nothing is cached, so a plugin added or removed at runtime shows up in
the next call.
"""

import logging
from typing import Any

from treatment_modalities.plugins.plugin_registry import ModalityRegistry
from treatment_modalities.plugins.types import PatientData

logger = logging.getLogger(__name__)

# Route kinds emitted per plugin, in order
ROUTE_PROTOCOL_PAGE = "protocol_page"
ROUTE_INDICATION = "indication"
ROUTE_TECHNIQUES = "techniques"
ROUTE_SAFETY = "safety"

# Recommendation threshold on the indication's effectiveness score
RECOMMENDATION_MIN_SCORE = 70


class DynamicComposer:
    """Pure, on-demand projections over a ModalityRegistry."""

    def __init__(self, registry: ModalityRegistry) -> None:
        self.registry = registry

    def is_ready(self) -> bool:
        """True once at least one plugin is registered."""
        return len(self.registry.get_all()) > 0

    def generate_plugin_routes(self) -> list[dict[str, Any]]:
        """
        Four routes per plugin, in registration order.

        Returns:
            List of route entries:
            [
                {
                    "path": "/cupping/techniques",
                    "plugin_id": "cupping",
                    "kind": "techniques",
                    "view": "cupping/techniques_list.html",
                    "props": {"techniques": (...)}
                }
            ]
        """
        routes: list[dict[str, Any]] = []
        plugins = self.registry.get_all()

        for plugin in plugins:
            plugin_id = plugin.metadata.id
            routes.extend([
                {
                    "path": f"/{plugin_id}",
                    "plugin_id": plugin_id,
                    "kind": ROUTE_PROTOCOL_PAGE,
                    "view": plugin.ui.protocol_page,
                    "props": {},
                },
                {
                    "path": f"/{plugin_id}/:indication",
                    "plugin_id": plugin_id,
                    "kind": ROUTE_INDICATION,
                    "view": plugin.ui.protocol_page,
                    "props": {},
                },
                {
                    "path": f"/{plugin_id}/techniques",
                    "plugin_id": plugin_id,
                    "kind": ROUTE_TECHNIQUES,
                    "view": plugin.ui.techniques_list,
                    "props": {"techniques": plugin.techniques},
                },
                {
                    "path": f"/{plugin_id}/safety",
                    "plugin_id": plugin_id,
                    "kind": ROUTE_SAFETY,
                    "view": plugin.ui.safety_warnings,
                    "props": {"contraindications": plugin.contraindications},
                },
            ])

        logger.debug("Generated %d dynamic routes from %d plugins", len(routes), len(plugins))
        return routes

    def resolve_route(self, path: str) -> dict[str, Any] | None:
        """
        Find the composed route serving a concrete path.

        Literal segments win over the ``:indication`` parameter, so
        ``/cupping/safety`` resolves to the safety route.

        Returns:
            The route entry plus a ``params`` dict, or None if no route matches
        """
        segments = [s for s in path.strip("/").split("/") if s]
        if not segments:
            return None

        parameterized = []
        for route in self.generate_plugin_routes():
            pattern = route["path"].strip("/").split("/")
            if len(pattern) != len(segments):
                continue

            params = {}
            for expected, actual in zip(pattern, segments):
                if expected.startswith(":"):
                    params[expected[1:]] = actual
                elif expected != actual:
                    break
            else:
                if not params:
                    return {**route, "params": params}
                parameterized.append({**route, "params": params})

        return parameterized[0] if parameterized else None

    def generate_plugin_navigation(self) -> list[dict[str, str]]:
        return [
            {
                **plugin.register_navigation(),
                "category": plugin.metadata.category,
            }
            for plugin in self.registry.get_all()
        ]

    def generate_modality_cards(self, indication: str) -> list[dict[str, Any]]:
        """One card per plugin that treats the indication."""
        cards = []
        for plugin in self.registry.get_for_indication(indication):
            metadata = plugin.metadata
            effectiveness = plugin.get_effectiveness_for_indication(indication)
            cards.append({
                "id": metadata.id,
                "name": metadata.display_name,
                "icon": metadata.icon,
                "description": metadata.description,
                "protocols": len(plugin.get_protocols_for_indication(indication)),
                "effectiveness": effectiveness.effectiveness_score if effectiveness else 0,
                "link": f"/{metadata.id}/{indication}",
                "view": plugin.ui.protocol_card,
                "skill_level": metadata.skill_level.value,
                "equipment_required": metadata.equipment_required,
                "self_administered": metadata.self_administered,
            })
        return cards

    def generate_comparison_data(self, indication: str) -> list[dict[str, Any]]:
        return self.registry.get_comparison_data(indication)

    def generate_search_index(self) -> list[dict[str, Any]]:
        return self.registry.get_all_search_terms()

    def generate_treatment_recommendations(
        self,
        indication: str,
        patient_data: PatientData | dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """
        Rank the modalities treating an indication for one patient.

        Safe modalities come first, then higher effectiveness for the
        indication. A modality is recommended when it is safe and its
        effectiveness score is above RECOMMENDATION_MIN_SCORE.
        """
        if not isinstance(patient_data, PatientData):
            patient_data = PatientData.from_dict(patient_data)

        recommendations = []
        for plugin in self.registry.get_for_indication(indication):
            safety = plugin.validate_safety_for_patient(patient_data)
            effectiveness = plugin.get_effectiveness_for_indication(indication)
            score = effectiveness.effectiveness_score if effectiveness else 0
            recommendations.append({
                "modality": plugin.metadata.to_dict(),
                "protocols": [p.to_dict() for p in plugin.get_protocols_for_indication(indication)],
                "safety": safety.to_dict(),
                "effectiveness": effectiveness.to_dict() if effectiveness else None,
                "score": score,
                "recommended": safety.safe and score > RECOMMENDATION_MIN_SCORE,
            })

        recommendations.sort(key=lambda r: (not r["safety"]["safe"], -r["score"]))
        return recommendations
