"""
Application-owned modality state.

The registry is not a module-level singleton: the application root builds
one ModalityState and hands it to the loader, composer, bindings and the
web layer.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from treatment_modalities.bindings import ModalityBindings
from treatment_modalities.composer import DynamicComposer
from treatment_modalities.config import ModalityConfig, get_modality_config
from treatment_modalities.plugins.plugin_loader import PluginFactory, PluginLoader
from treatment_modalities.plugins.plugin_registry import ModalityRegistry

EXTENSION_KEY = "treatment_modalities"


@dataclass
class ModalityState:
    config: ModalityConfig
    registry: ModalityRegistry
    loader: PluginLoader
    composer: DynamicComposer
    bindings: ModalityBindings


def create_state(
    config: ModalityConfig | None = None,
    plugin_factories: Iterable[PluginFactory] | None = None
) -> ModalityState:
    """
    Wire a fresh registry to its loader, composer and bindings.

    Args:
        config: Configuration (defaults to env-configured config)
        plugin_factories: Plugins to load instead of the built-in set
    """
    config = config or get_modality_config()
    registry = ModalityRegistry()
    loader = PluginLoader(registry, plugin_factories=plugin_factories, config=config)
    composer = DynamicComposer(registry)
    bindings = ModalityBindings(composer, ready=loader.ready, timeout=config.readiness_timeout)
    return ModalityState(
        config=config,
        registry=registry,
        loader=loader,
        composer=composer,
        bindings=bindings,
    )
