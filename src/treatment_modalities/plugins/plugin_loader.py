"""
Plugin loading for the modality registry.

Populates a ModalityRegistry once per process from the known set of
plugins. Each plugin is initialized and registered on its own, so one
broken plugin is logged and skipped while the rest still register.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import Any

from treatment_modalities.config import ModalityConfig, get_modality_config

from .modality_plugin_protocol import ModalityPluginContract
from .plugin_registry import REGISTERED, UNREGISTERED, ModalityRegistry

logger = logging.getLogger(__name__)

PluginFactory = Callable[[], ModalityPluginContract]


class ReadinessSignal:
    """
    One-shot signal that the registry has been populated.

    Consumers await ``wait()`` instead of polling. The signal can be
    cleared again for a reload.
    """

    def __init__(self) -> None:
        self._ready = False
        self._waiters: list[asyncio.Future] = []

    def is_set(self) -> bool:
        return self._ready

    def set(self) -> None:
        self._ready = True
        for waiter in self._waiters:
            if not waiter.done():
                waiter.set_result(True)

    def clear(self) -> None:
        self._ready = False

    async def wait(self, timeout: float | None = None) -> bool:
        """
        Wait until the signal is set.

        Args:
            timeout: Seconds to wait; None waits indefinitely

        Returns:
            True if the signal was set, False if the timeout elapsed first
        """
        if self._ready:
            return True

        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            await asyncio.wait_for(waiter, timeout)
            return True
        except asyncio.TimeoutError:
            return False
        finally:
            self._waiters.remove(waiter)


def builtin_plugin_factories() -> list[PluginFactory]:
    """Factories for the modalities that ship with the package."""
    from .builtin import BUILTIN_PLUGINS
    return list(BUILTIN_PLUGINS)


class PluginLoader:
    """Loads the known plugins into a registry exactly once."""

    def __init__(
        self,
        registry: ModalityRegistry,
        plugin_factories: Iterable[PluginFactory] | None = None,
        config: ModalityConfig | None = None
    ) -> None:
        """
        Initialize the loader.

        Args:
            registry: Registry to populate
            plugin_factories: Callables returning plugin instances
                (defaults to the built-in plugins, subject to config)
            config: Configuration (defaults to env-configured config)
        """
        self.registry = registry
        self.config = config or get_modality_config()
        self._plugin_factories = (
            list(plugin_factories) if plugin_factories is not None else None
        )
        self._initialized = False
        self._errors: list[str] = []
        self.ready = ReadinessSignal()
        registry.subscribe(self._on_registry_change)

    def _known_plugins(self) -> list[PluginFactory]:
        if self._plugin_factories is not None:
            return self._plugin_factories

        if not self.config.enable_builtin_plugins:
            logger.info("Built-in plugins disabled (ENABLE_BUILTIN_PLUGINS=false)")
            return []
        return builtin_plugin_factories()

    async def load_all_plugins(self) -> list[str]:
        """
        Initialize and register every known plugin, one at a time.

        A second call is a no-op until ``reload_plugins()`` resets the
        loader. Plugin failures are recorded in ``get_loading_status()``.

        Returns:
            Ids of the plugins registered by this call
        """
        if self._initialized:
            logger.info("Plugins already loaded")
            return []

        logger.info("Loading modality plugins...")
        self._errors = []
        registered: list[str] = []

        for factory in self._known_plugins():
            plugin_id = getattr(factory, "__name__", repr(factory))
            try:
                plugin = factory()
                plugin_id = plugin.metadata.id

                if self.config.is_plugin_disabled(plugin_id):
                    logger.info("Skipped '%s' - disabled (DISABLED_PLUGINS)", plugin_id)
                    continue

                await plugin.initialize()
                self.registry.register(plugin)
                registered.append(plugin_id)
            except Exception as e:
                logger.exception("Failed to register %s plugin", plugin_id)
                self._errors.append(f"{plugin_id}: {e}")

        self._initialized = True
        if self.registry.get_all():
            self.ready.set()

        logger.info(
            "Registered %d plugin(s): %s",
            len(registered),
            ", ".join(registered) or "none"
        )
        logger.info("Plugin statistics: %s", self.registry.get_stats())
        return registered

    def _on_registry_change(self, event: str, plugin_id: str) -> None:
        """Keep ``ready`` in step with runtime changes after the initial load."""
        if not self._initialized:
            return
        if event == UNREGISTERED and len(self.registry) == 0:
            logger.info("Registry emptied by unregistering '%s'; not ready", plugin_id)
            self.ready.clear()
        elif event == REGISTERED and not self.ready.is_set():
            self.ready.set()

    def is_initialized(self) -> bool:
        return self._initialized

    async def reload_plugins(self) -> list[str]:
        """Reset the loader and run a full load again (development/tests)."""
        logger.info("Reloading all plugins...")
        self._initialized = False
        self.ready.clear()
        return await self.load_all_plugins()

    def get_loading_status(self) -> dict[str, Any]:
        return {
            "initialized": self._initialized,
            "plugin_count": self.registry.get_stats()["total_plugins"],
            "errors": list(self._errors),
        }
