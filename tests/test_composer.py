"""
Tests for DynamicComposer.
"""

import pytest

from treatment_modalities.composer import (
    ROUTE_INDICATION,
    ROUTE_PROTOCOL_PAGE,
    ROUTE_SAFETY,
    ROUTE_TECHNIQUES,
    DynamicComposer,
)
from treatment_modalities.plugins.types import AgeRestrictions, PatientData, SkillLevel


@pytest.fixture
def composer(registry):
    return DynamicComposer(registry)


class TestReadiness:
    def test_not_ready_when_empty(self, composer):
        assert composer.is_ready() is False

    def test_ready_after_register(self, composer, registry, make_plugin):
        registry.register(make_plugin("a"))

        assert composer.is_ready() is True

    def test_not_ready_after_last_unregister(self, composer, registry, make_plugin):
        registry.register(make_plugin("a"))
        registry.unregister("a")

        assert composer.is_ready() is False


class TestRoutes:
    """Tests for generate_plugin_routes and resolve_route."""

    def test_four_routes_per_plugin(self, composer, registry, make_plugin):
        registry.register(make_plugin("a"))
        registry.register(make_plugin("b"))

        routes = composer.generate_plugin_routes()

        assert [r["path"] for r in routes] == [
            "/a", "/a/:indication", "/a/techniques", "/a/safety",
            "/b", "/b/:indication", "/b/techniques", "/b/safety",
        ]
        assert [r["kind"] for r in routes[:4]] == [
            ROUTE_PROTOCOL_PAGE, ROUTE_INDICATION, ROUTE_TECHNIQUES, ROUTE_SAFETY,
        ]

    def test_route_views_and_props(self, composer, registry, make_plugin):
        plugin = make_plugin("a")
        registry.register(plugin)

        page, indication, techniques, safety = composer.generate_plugin_routes()

        assert page["view"] == "a/page"
        assert indication["view"] == "a/page"
        assert techniques["view"] == "a/techniques"
        assert techniques["props"]["techniques"] == plugin.techniques
        assert safety["view"] == "a/safety"
        assert safety["props"]["contraindications"] is plugin.contraindications

    def test_routes_empty_registry(self, composer):
        assert composer.generate_plugin_routes() == []

    def test_routes_follow_registry_changes(self, composer, registry, make_plugin):
        registry.register(make_plugin("a"))
        registry.register(make_plugin("b"))
        registry.unregister("a")

        assert {r["plugin_id"] for r in composer.generate_plugin_routes()} == {"b"}

    def test_resolve_literal_route(self, composer, registry, make_plugin):
        registry.register(make_plugin("a"))

        route = composer.resolve_route("/a/safety")

        assert route["kind"] == ROUTE_SAFETY
        assert route["params"] == {}

    def test_resolve_indication_route(self, composer, registry, make_plugin):
        registry.register(make_plugin("a"))

        route = composer.resolve_route("a/headache/")

        assert route["kind"] == ROUTE_INDICATION
        assert route["params"] == {"indication": "headache"}

    def test_resolve_protocol_page(self, composer, registry, make_plugin):
        registry.register(make_plugin("a"))

        assert composer.resolve_route("/a")["kind"] == ROUTE_PROTOCOL_PAGE

    @pytest.mark.parametrize("path", ["/", "/missing", "/a/headache/extra"])
    def test_resolve_unknown(self, composer, registry, make_plugin, path):
        registry.register(make_plugin("a"))

        assert composer.resolve_route(path) is None


class TestNavigation:
    def test_navigation_entries(self, composer, registry, make_plugin):
        registry.register(make_plugin("gua_sha", category="physical"))
        registry.register(make_plugin("ak", category="diagnostic"))

        assert composer.generate_plugin_navigation() == [
            {"name": "Gua Sha", "path": "/gua_sha", "icon": "*", "category": "physical"},
            {"name": "Ak", "path": "/ak", "icon": "*", "category": "diagnostic"},
        ]


class TestModalityCards:
    def test_cards_for_indication(self, composer, registry, make_plugin):
        registry.register(make_plugin(
            "a",
            indications=("headache", "back_pain"),
            scores=(80, 90),
            skill_level=SkillLevel.INTERMEDIATE,
        ))
        registry.register(make_plugin("b", indications=("insomnia",), scores=(70,)))

        cards = composer.generate_modality_cards("headache")

        assert len(cards) == 1
        card = cards[0]
        assert card["id"] == "a"
        assert card["name"] == "A"
        assert card["effectiveness"] == 80
        assert card["protocols"] == 1
        assert card["link"] == "/a/headache"
        assert card["view"] == "a/card"
        assert card["skill_level"] == "intermediate"

    def test_card_without_effectiveness_entry(self, composer, registry, make_plugin):
        registry.register(make_plugin("a", indications=("headache",), scores=()))

        assert composer.generate_modality_cards("headache")[0]["effectiveness"] == 0

    def test_no_cards(self, composer, registry, make_plugin):
        registry.register(make_plugin("a"))

        assert composer.generate_modality_cards("insomnia") == []


class TestComparisonAndSearch:
    def test_comparison_delegates_to_registry(self, composer, registry, make_plugin):
        registry.register(make_plugin("a"))

        assert composer.generate_comparison_data("headache") == registry.get_comparison_data("headache")

    def test_search_index(self, composer, registry, make_plugin):
        registry.register(make_plugin("a"))
        registry.register(make_plugin("b"))

        index = composer.generate_search_index()

        assert [entry["modality_id"] for entry in index] == ["a", "b"]


class TestRecommendations:
    """Tests for generate_treatment_recommendations."""

    def test_ranked_safe_first_then_score(self, composer, registry, make_plugin):
        registry.register(make_plugin("low", indications=("headache",), scores=(75,)))
        registry.register(make_plugin(
            "unsafe",
            indications=("headache",),
            scores=(95,),
            age_restrictions=AgeRestrictions(min_age=18),
        ))
        registry.register(make_plugin("high", indications=("headache",), scores=(88,)))

        recommendations = composer.generate_treatment_recommendations(
            "headache", PatientData(age=10)
        )

        assert [r["modality"]["id"] for r in recommendations] == ["high", "low", "unsafe"]
        assert [r["recommended"] for r in recommendations] == [True, True, False]
        assert recommendations[2]["safety"]["safe"] is False

    def test_threshold_is_exclusive(self, composer, registry, make_plugin):
        registry.register(make_plugin("a", indications=("headache",), scores=(70,)))

        (recommendation,) = composer.generate_treatment_recommendations("headache")

        assert recommendation["score"] == 70
        assert recommendation["recommended"] is False

    def test_accepts_dict_patient_data(self, composer, registry, make_plugin):
        registry.register(make_plugin("a", indications=("headache",), absolute=("hemophilia",)))

        (recommendation,) = composer.generate_treatment_recommendations(
            "headache", {"conditions": ["hemophilia"]}
        )

        assert recommendation["safety"] == {
            "safe": False,
            "warnings": ["Absolute contraindication: hemophilia"],
        }

    def test_no_matching_modalities(self, composer, registry, make_plugin):
        registry.register(make_plugin("a"))

        assert composer.generate_treatment_recommendations("insomnia") == []
