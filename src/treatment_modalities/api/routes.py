"""
Flask routes for the treatment modality registry.

JSON only; rendering belongs to the UI layer. Provides:
- /health - Liveness and readiness
- /api/modalities - Registered modalities and their details
- /api/navigation, /api/routes, /api/stats, /api/search-terms - Composed views
- /api/indications/<indication>/... - Cards, comparison, recommendations
- /api/modalities/<id>/safety - Patient safety check
- /api/demo/reflexology - Add/remove the demo plugin at runtime
- /modalities/<path> - Resolve a composed plugin route
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from treatment_modalities.composer import (
    ROUTE_INDICATION,
    ROUTE_SAFETY,
    ROUTE_TECHNIQUES,
)
from treatment_modalities.plugins.builtin import DEMO_PLUGIN
from treatment_modalities.plugins.errors import PluginValidationError
from treatment_modalities.plugins.types import PatientData

from .state import EXTENSION_KEY, ModalityState

logger = logging.getLogger(__name__)

modalities_bp = Blueprint("modalities", __name__)


def _state() -> ModalityState:
    return current_app.extensions[EXTENSION_KEY]


def _not_ready():
    return jsonify({"error": "Modality registry not ready"}), 503


def _patient_data() -> tuple[PatientData | None, str | None]:
    """Read PatientData from the JSON body; returns (patient_data, error)."""
    body = request.get_json(silent=True)
    if body is None:
        body = {}
    if not isinstance(body, dict):
        return None, "Request body must be a JSON object"
    try:
        return PatientData.from_dict(body), None
    except ValueError as e:
        return None, str(e)


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------


@modalities_bp.route("/health")
def health():
    state = _state()
    return jsonify({
        "status": "healthy",
        "ready": state.composer.is_ready(),
        "loader": state.loader.get_loading_status(),
    })


@modalities_bp.route("/api/stats")
def stats():
    return jsonify(_state().registry.get_stats())


# ---------------------------------------------------------------------------
# Modalities
# ---------------------------------------------------------------------------


@modalities_bp.route("/api/modalities")
def list_modalities():
    state = _state()
    category = request.args.get("category")
    plugins = (
        state.registry.get_by_category(category) if category
        else state.registry.get_all()
    )
    return jsonify({"modalities": [p.summary() for p in plugins]})


@modalities_bp.route("/api/modalities/<plugin_id>")
def get_modality(plugin_id: str):
    plugin = _state().registry.get(plugin_id)
    if plugin is None:
        return jsonify({"error": f"Modality '{plugin_id}' not found"}), 404
    return jsonify(plugin.to_dict())


@modalities_bp.route("/api/modalities/<plugin_id>/safety", methods=["POST"])
def check_safety(plugin_id: str):
    plugin = _state().registry.get(plugin_id)
    if plugin is None:
        return jsonify({"error": f"Modality '{plugin_id}' not found"}), 404

    patient_data, error = _patient_data()
    if error:
        return jsonify({"error": error}), 400

    return jsonify(plugin.validate_safety_for_patient(patient_data).to_dict())


# ---------------------------------------------------------------------------
# Composed views
# ---------------------------------------------------------------------------


@modalities_bp.route("/api/navigation")
def navigation():
    composer = _state().composer
    if not composer.is_ready():
        return _not_ready()
    return jsonify({"navigation": composer.generate_plugin_navigation()})


@modalities_bp.route("/api/routes")
def routes():
    composer = _state().composer
    if not composer.is_ready():
        return _not_ready()
    return jsonify({
        "routes": [
            {key: route[key] for key in ("path", "plugin_id", "kind", "view")}
            for route in composer.generate_plugin_routes()
        ]
    })


@modalities_bp.route("/api/search-terms")
def search_terms():
    return jsonify({"search_terms": _state().composer.generate_search_index()})


@modalities_bp.route("/api/indications/<indication>/cards")
def modality_cards(indication: str):
    composer = _state().composer
    if not composer.is_ready():
        return _not_ready()
    return jsonify({"indication": indication, "cards": composer.generate_modality_cards(indication)})


@modalities_bp.route("/api/indications/<indication>/comparison")
def comparison(indication: str):
    composer = _state().composer
    if not composer.is_ready():
        return _not_ready()
    return jsonify({"indication": indication, "rows": composer.generate_comparison_data(indication)})


@modalities_bp.route("/api/indications/<indication>/recommendations", methods=["POST"])
def recommendations(indication: str):
    composer = _state().composer
    if not composer.is_ready():
        return _not_ready()

    patient_data, error = _patient_data()
    if error:
        return jsonify({"error": error}), 400

    return jsonify({
        "indication": indication,
        "recommendations": composer.generate_treatment_recommendations(indication, patient_data),
    })


@modalities_bp.route("/modalities/<path:subpath>")
def plugin_page(subpath: str):
    """Serve a composed plugin route: the view reference and the data bound to it."""
    state = _state()
    if not state.composer.is_ready():
        return _not_ready()

    route = state.composer.resolve_route(subpath)
    if route is None:
        return jsonify({"error": f"No modality route for '/{subpath}'"}), 404

    plugin = state.registry.get(route["plugin_id"])
    kind = route["kind"]

    if kind == ROUTE_TECHNIQUES:
        data = {"techniques": [t.to_dict() for t in route["props"]["techniques"]]}
    elif kind == ROUTE_SAFETY:
        data = {"contraindications": route["props"]["contraindications"].to_dict()}
    elif kind == ROUTE_INDICATION:
        indication = route["params"]["indication"]
        effectiveness = plugin.get_effectiveness_for_indication(indication)
        data = {
            "indication": indication,
            "protocols": [p.to_dict() for p in plugin.get_protocols_for_indication(indication)],
            "techniques": [t.to_dict() for t in plugin.get_techniques_for_indication(indication)],
            "effectiveness": effectiveness.to_dict() if effectiveness else None,
        }
    else:
        data = {
            "metadata": plugin.metadata.to_dict(),
            "protocols": [p.to_dict() for p in plugin.protocols],
        }

    return jsonify({
        "path": route["path"],
        "plugin_id": route["plugin_id"],
        "kind": kind,
        "view": route["view"],
        "params": route["params"],
        "data": data,
    })


# ---------------------------------------------------------------------------
# Demo plugin
# ---------------------------------------------------------------------------


@modalities_bp.route("/api/demo/reflexology", methods=["POST", "DELETE"])
def demo_plugin():
    """Register (POST) or unregister (DELETE) the reflexology demo plugin."""
    state = _state()
    if not state.config.enable_demo_plugin:
        return jsonify({"error": "Demo plugin is disabled (ENABLE_DEMO_PLUGIN=false)"}), 403

    plugin = DEMO_PLUGIN()
    if request.method == "DELETE":
        state.registry.unregister(plugin.id)
        return jsonify({"status": "unregistered", "stats": state.registry.get_stats()})

    try:
        state.registry.register(plugin)
    except PluginValidationError as e:
        logger.warning("Demo plugin rejected: %s", e)
        return jsonify({"error": str(e)}), 400

    return jsonify({"status": "registered", "stats": state.registry.get_stats()}), 201
