"""
Plugin registry for treatment modalities.

Handles plugin registration, lookup, and the cross-plugin projections
(indication filter, comparison rows, statistics). All reads are computed
from the current plugins on every call.
"""

import logging
from collections.abc import Callable
from typing import Any

from .modality_plugin_protocol import ModalityPluginContract

logger = logging.getLogger(__name__)

REGISTERED = "registered"
UNREGISTERED = "unregistered"

RegistryListener = Callable[[str, str], None]


class ModalityRegistry:
    """Central registry of treatment modality plugins, keyed by plugin id."""

    def __init__(self):
        """Initialize empty plugin registry."""
        self._plugins: dict[str, ModalityPluginContract] = {}
        self._listeners: list[RegistryListener] = []

    def register(self, plugin: ModalityPluginContract) -> None:
        """
        Register a plugin, replacing any plugin with the same id.

        Re-registration keeps the first position in registration order
        and replaces the stored value wholesale.

        Args:
            plugin: Plugin instance implementing ModalityPluginContract

        Raises:
            PluginValidationError: If the plugin's protocols are malformed
        """
        plugin.validate()

        plugin_id = plugin.metadata.id
        replaced = plugin_id in self._plugins
        self._plugins[plugin_id] = plugin

        if replaced:
            logger.info("Replaced plugin: %s (%s)", plugin.metadata.display_name, plugin_id)
        else:
            logger.info("Registered plugin: %s (%s)", plugin.metadata.display_name, plugin_id)
        self._notify(REGISTERED, plugin_id)

    def unregister(self, plugin_id: str) -> None:
        """
        Unregister a plugin. Unknown ids are ignored.

        Args:
            plugin_id: Plugin identifier
        """
        plugin = self._plugins.pop(plugin_id, None)
        if plugin is None:
            return

        logger.info("Unregistered plugin: %s (%s)", plugin.metadata.display_name, plugin_id)
        self._notify(UNREGISTERED, plugin_id)

    def clear(self) -> None:
        """Unregister every plugin."""
        for plugin_id in list(self._plugins):
            self.unregister(plugin_id)

    def get(self, plugin_id: str) -> ModalityPluginContract | None:
        """
        Get a registered plugin by id.

        Returns:
            Plugin instance, or None if no plugin has that id
        """
        return self._plugins.get(plugin_id)

    def has(self, plugin_id: str) -> bool:
        return plugin_id in self._plugins

    def get_all(self) -> list[ModalityPluginContract]:
        """All plugins in registration order."""
        return list(self._plugins.values())

    def get_for_indication(self, indication: str) -> list[ModalityPluginContract]:
        """Plugins with at least one protocol matching the indication."""
        return [
            plugin for plugin in self._plugins.values()
            if plugin.get_protocols_for_indication(indication)
        ]

    def get_by_category(self, category: str) -> list[ModalityPluginContract]:
        return [
            plugin for plugin in self._plugins.values()
            if plugin.metadata.category == category
        ]

    def get_comparison_data(self, indication: str) -> list[dict[str, Any]]:
        """
        Comparison rows for every plugin treating an indication.

        Returns:
            List of rows:
            [
                {
                    "id": "cupping",
                    "name": "Cupping Therapy",
                    "icon": "...",
                    "effectiveness": 90,
                    "protocols": 2,
                    "metrics": {...}
                }
            ]
        """
        rows = []
        for plugin in self.get_for_indication(indication):
            metrics = plugin.get_comparison_data()
            rows.append({
                "id": plugin.metadata.id,
                "name": plugin.metadata.display_name,
                "icon": plugin.metadata.icon,
                "effectiveness": plugin.get_effectiveness_score(),
                "protocols": len(plugin.get_protocols_for_indication(indication)),
                "metrics": metrics.to_dict(),
            })
        return rows

    def get_all_search_terms(self) -> list[dict[str, Any]]:
        return [
            {"modality_id": plugin.metadata.id, "terms": plugin.register_search_terms()}
            for plugin in self._plugins.values()
        ]

    def get_stats(self) -> dict[str, int]:
        plugins = self._plugins.values()
        return {
            "total_plugins": len(plugins),
            "total_protocols": sum(len(p.protocols) for p in plugins),
            "total_techniques": sum(len(p.techniques) for p in plugins),
        }

    def subscribe(self, listener: RegistryListener) -> Callable[[], None]:
        """
        Call ``listener(event, plugin_id)`` after every register/unregister.

        Returns:
            Function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: str, plugin_id: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, plugin_id)
            except Exception:
                logger.exception("Registry listener failed on %s '%s'", event, plugin_id)

    def __len__(self) -> int:
        return len(self._plugins)

    def __contains__(self, plugin_id: object) -> bool:
        return plugin_id in self._plugins
