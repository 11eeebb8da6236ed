"""
Tests for Binding and ModalityBindings.
"""

import asyncio

import pytest

from treatment_modalities.bindings import Binding, ModalityBindings
from treatment_modalities.composer import DynamicComposer
from treatment_modalities.plugins import ReadinessSignal
from treatment_modalities.plugins.types import PatientData, PregnancyPolicy, SafetyResult


@pytest.fixture
def composer(registry):
    return DynamicComposer(registry)


@pytest.fixture
def bindings(composer):
    return ModalityBindings(composer, timeout=0.05)


class TestBinding:
    """Tests for the mount/refresh/unmount lifecycle."""

    def test_mount_when_ready_loads_immediately(self, registry, bindings, make_plugin):
        registry.register(make_plugin("a"))
        binding = bindings.stats()

        assert asyncio.run(binding.mount()) is True
        assert binding.loaded is True
        assert binding.value["total_plugins"] == 1
        assert binding.version == 1

    def test_mount_timeout_leaves_binding_empty(self, bindings):
        binding = bindings.all_modalities()

        assert asyncio.run(binding.mount()) is False
        assert binding.loaded is False
        assert binding.value == []
        assert binding.mounted is True

    def test_mount_waits_for_registration(self, registry, composer, make_plugin):
        binding = Binding(composer, registry.get_all, empty=[], timeout=1.0)

        async def scenario():
            mounting = asyncio.ensure_future(binding.mount())
            await asyncio.sleep(0)
            registry.register(make_plugin("a"))
            return await mounting

        assert asyncio.run(scenario()) is True
        assert [p.id for p in binding.value] == ["a"]

    def test_mount_wakes_on_loader_signal(self, registry, composer, make_plugin):
        ready = ReadinessSignal()
        binding = Binding(composer, registry.get_stats, empty={}, ready=ready, timeout=1.0)

        async def scenario():
            mounting = asyncio.ensure_future(binding.mount())
            await asyncio.sleep(0)
            binding.unmount()
            registry.register(make_plugin("a"))
            ready.set()
            return await mounting

        assert asyncio.run(scenario()) is True
        assert binding.value["total_plugins"] == 1

    def test_stale_loader_signal_does_not_cut_wait_short(self, registry, composer, make_plugin):
        """A set signal over an emptied registry still waits for a registration."""
        ready = ReadinessSignal()
        registry.register(make_plugin("a"))
        ready.set()
        registry.unregister("a")
        binding = Binding(composer, registry.get_all, empty=[], ready=ready, timeout=1.0)

        async def scenario():
            mounting = asyncio.ensure_future(binding.mount())
            await asyncio.sleep(0.05)
            registry.register(make_plugin("b"))
            return await mounting

        assert asyncio.run(scenario()) is True
        assert [p.id for p in binding.value] == ["b"]

    def test_stale_loader_signal_waits_full_timeout(self, composer):
        ready = ReadinessSignal()
        ready.set()
        binding = Binding(composer, composer.registry.get_all, empty=[], ready=ready, timeout=0.1)

        async def scenario():
            loop = asyncio.get_running_loop()
            started = loop.time()
            loaded = await binding.mount()
            return loaded, loop.time() - started

        loaded, elapsed = asyncio.run(scenario())

        assert loaded is False
        assert elapsed >= 0.09

    def test_refreshes_on_register_and_unregister(self, registry, bindings, make_plugin):
        registry.register(make_plugin("a"))
        binding = bindings.all_modalities()
        asyncio.run(binding.mount())

        registry.register(make_plugin("b"))
        assert [p.id for p in binding.value] == ["a", "b"]

        registry.unregister("a")
        registry.unregister("b")
        assert binding.value == []
        assert binding.version == 4

    def test_unmount_stops_refreshing(self, registry, bindings, make_plugin):
        registry.register(make_plugin("a"))
        binding = bindings.stats()
        asyncio.run(binding.mount())

        binding.unmount()
        registry.register(make_plugin("b"))

        assert binding.mounted is False
        assert binding.value["total_plugins"] == 1

    def test_loads_on_registration_after_timeout(self, registry, composer, make_plugin):
        calls = []
        binding = Binding(composer, lambda: calls.append(1), timeout=0.01)
        assert asyncio.run(binding.mount()) is False

        registry.register(make_plugin("a"))

        assert calls == [1]
        assert binding.loaded is True


class TestModalityBindings:
    """Tests for the binding factories."""

    @pytest.fixture(autouse=True)
    def _plugins(self, registry, make_plugin):
        registry.register(make_plugin("a", indications=("headache", "back_pain")))
        registry.register(make_plugin(
            "b",
            indications=("insomnia",),
            scores=(70,),
            category="diagnostic",
            pregnancy=PregnancyPolicy.AVOID,
        ))

    def _load(self, binding):
        asyncio.run(binding.mount())
        return binding.value

    def test_modality(self, bindings):
        assert self._load(bindings.modality("a")).id == "a"
        assert self._load(bindings.modality("missing")) is None

    def test_modalities_for_indication(self, bindings):
        assert [p.id for p in self._load(bindings.modalities_for_indication("insomnia"))] == ["b"]

    def test_protocols(self, bindings):
        assert len(self._load(bindings.protocols("a"))) == 2
        assert [p.id for p in self._load(bindings.protocols("a", "back_pain"))] == ["a_back_pain"]
        assert self._load(bindings.protocols("missing")) == []

    def test_comparison(self, bindings):
        assert [row["id"] for row in self._load(bindings.comparison("headache"))] == ["a"]

    def test_safety(self, bindings):
        assert self._load(bindings.safety("b", PatientData(pregnancy=True))).safe is False
        assert self._load(bindings.safety("b", None)) == SafetyResult(safe=True)
        assert self._load(bindings.safety("missing", {"pregnancy": True})).safe is True

    def test_by_category(self, bindings):
        assert [p.id for p in self._load(bindings.modalities_by_category("diagnostic"))] == ["b"]

    def test_composed_views(self, bindings):
        assert len(self._load(bindings.routes())) == 8
        assert len(self._load(bindings.navigation())) == 2
        assert len(self._load(bindings.search_terms())) == 2
        assert len(self._load(bindings.modality_cards("headache"))) == 1

    def test_treatment_recommendations(self, bindings):
        (recommendation,) = self._load(
            bindings.treatment_recommendations("insomnia", {"pregnancy": True})
        )

        assert recommendation["modality"]["id"] == "b"
        assert recommendation["recommended"] is False
