"""
Tests for PluginLoader and ReadinessSignal.
"""

import asyncio
import os
from unittest.mock import patch

from treatment_modalities.config import ModalityConfig
from treatment_modalities.plugins import PluginLoader, ReadinessSignal
from treatment_modalities.plugins.builtin import BUILTIN_PLUGINS


def _factory(plugin):
    return lambda: plugin


def _failing_factory():
    raise RuntimeError("broken plugin")


class TestPluginLoader:
    """Tests for load_all_plugins and its bookkeeping."""

    def test_loads_all_plugins_in_order(self, registry, make_plugin):
        loader = PluginLoader(registry, plugin_factories=[
            _factory(make_plugin("a")),
            _factory(make_plugin("b")),
        ])

        registered = asyncio.run(loader.load_all_plugins())

        assert registered == ["a", "b"]
        assert [p.id for p in registry.get_all()] == ["a", "b"]
        assert loader.is_initialized()
        assert loader.ready.is_set()

    def test_failing_plugin_is_isolated(self, registry, make_plugin, make_protocol):
        broken = make_plugin("broken", protocols=(make_protocol("broken", "headache", name=""),))
        loader = PluginLoader(registry, plugin_factories=[
            _factory(make_plugin("a")),
            _factory(broken),
            _failing_factory,
            _factory(make_plugin("c")),
        ])

        registered = asyncio.run(loader.load_all_plugins())

        assert registered == ["a", "c"]
        assert registry.get("broken") is None
        status = loader.get_loading_status()
        assert status["initialized"] is True
        assert status["plugin_count"] == 2
        assert len(status["errors"]) == 2
        assert status["errors"][0].startswith("broken: ")
        assert "broken plugin" in status["errors"][1]

    def test_second_load_is_noop(self, registry, make_plugin):
        calls = []

        def factory():
            calls.append(1)
            return make_plugin("a")

        loader = PluginLoader(registry, plugin_factories=[factory])

        asyncio.run(loader.load_all_plugins())
        second = asyncio.run(loader.load_all_plugins())

        assert second == []
        assert len(calls) == 1
        assert len(registry) == 1

    def test_reload_runs_again(self, registry, make_plugin):
        loader = PluginLoader(registry, plugin_factories=[_factory(make_plugin("a"))])
        asyncio.run(loader.load_all_plugins())

        registered = asyncio.run(loader.reload_plugins())

        assert registered == ["a"]
        assert len(registry) == 1
        assert loader.ready.is_set()

    def test_empty_load_does_not_signal_ready(self, registry):
        loader = PluginLoader(registry, plugin_factories=[])

        assert asyncio.run(loader.load_all_plugins()) == []
        assert loader.is_initialized()
        assert not loader.ready.is_set()

    def test_ready_follows_runtime_changes(self, registry, make_plugin):
        loader = PluginLoader(registry, plugin_factories=[_factory(make_plugin("a"))])
        asyncio.run(loader.load_all_plugins())

        registry.unregister("a")
        assert not loader.ready.is_set()

        registry.register(make_plugin("b"))
        assert loader.ready.is_set()

    def test_ready_not_set_by_registration_before_load(self, registry, make_plugin):
        loader = PluginLoader(registry, plugin_factories=[])

        registry.register(make_plugin("a"))

        assert not loader.ready.is_set()

    def test_status_before_load(self, registry):
        loader = PluginLoader(registry, plugin_factories=[])

        assert loader.get_loading_status() == {
            "initialized": False,
            "plugin_count": 0,
            "errors": [],
        }

    @patch.dict(os.environ, {"DISABLED_PLUGINS": "B, other"})
    def test_disabled_plugins_skipped(self, registry, make_plugin):
        loader = PluginLoader(
            registry,
            plugin_factories=[_factory(make_plugin("a")), _factory(make_plugin("b"))],
            config=ModalityConfig(),
        )

        assert asyncio.run(loader.load_all_plugins()) == ["a"]
        assert loader.get_loading_status()["errors"] == []

    def test_defaults_to_builtin_plugins(self, registry):
        loader = PluginLoader(registry, config=ModalityConfig())

        registered = asyncio.run(loader.load_all_plugins())

        assert registered == [factory().id for factory in BUILTIN_PLUGINS]

    @patch.dict(os.environ, {"ENABLE_BUILTIN_PLUGINS": "false"})
    def test_builtin_plugins_disabled(self, registry):
        loader = PluginLoader(registry, config=ModalityConfig())

        assert asyncio.run(loader.load_all_plugins()) == []
        assert len(registry) == 0


class TestReadinessSignal:
    """Tests for ReadinessSignal."""

    def test_wait_returns_immediately_when_set(self):
        signal = ReadinessSignal()
        signal.set()

        assert asyncio.run(signal.wait(timeout=0.01)) is True

    def test_wait_times_out(self):
        signal = ReadinessSignal()

        assert asyncio.run(signal.wait(timeout=0.01)) is False

    def test_wait_wakes_on_set(self):
        signal = ReadinessSignal()

        async def scenario():
            waiter = asyncio.ensure_future(signal.wait(timeout=1.0))
            await asyncio.sleep(0)
            signal.set()
            return await waiter

        assert asyncio.run(scenario()) is True

    def test_clear(self):
        signal = ReadinessSignal()
        signal.set()

        signal.clear()

        assert signal.is_set() is False
