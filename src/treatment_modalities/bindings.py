"""
Consumer bindings for presentation layers.

A Binding turns one registry/composer query into a read model a view can
hold on to:

1. ``mount()`` waits (bounded) for the registry to become ready
2. The query runs once and its result is held in ``value``
3. Every later registry change re-runs the whole query

If the registry never becomes ready within the timeout the binding stays
empty (``loaded`` is False) and nothing is raised.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from treatment_modalities.composer import DynamicComposer
from treatment_modalities.config import get_modality_config
from treatment_modalities.plugins.plugin_loader import ReadinessSignal
from treatment_modalities.plugins.types import PatientData, SafetyResult

logger = logging.getLogger(__name__)


class Binding:
    """Holds the latest result of one query and re-runs it on registry changes."""

    def __init__(
        self,
        composer: DynamicComposer,
        query: Callable[[], Any],
        empty: Any = None,
        ready: ReadinessSignal | None = None,
        timeout: float | None = None,
        name: str = "binding"
    ) -> None:
        """
        Initialize the binding.

        Args:
            composer: Composer whose registry the query reads
            query: Zero-argument callable producing the value
            empty: Value held until the first successful query
            ready: Loader readiness signal to wait on
            timeout: Seconds to wait for readiness (defaults to READINESS_TIMEOUT)
            name: Label used in log messages
        """
        self.composer = composer
        self.name = name
        self.value = empty
        self.loaded = False
        self._query = query
        self._ready = ready
        self._timeout = timeout if timeout is not None else get_modality_config().readiness_timeout
        self._registry_ready = ReadinessSignal()
        self._unsubscribe: Callable[[], None] | None = None
        self._version = 0

    @property
    def version(self) -> int:
        """Number of times the query has produced a value."""
        return self._version

    @property
    def mounted(self) -> bool:
        return self._unsubscribe is not None

    async def mount(self) -> bool:
        """
        Subscribe to the registry and load once it is ready.

        Returns:
            True if a value was loaded, False if readiness timed out
        """
        if self._unsubscribe is None:
            self._unsubscribe = self.composer.registry.subscribe(self._on_registry_change)

        if self.composer.is_ready():
            self.refresh()
            return True

        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._timeout
        while not self.composer.is_ready():
            remaining = deadline - loop.time()
            if remaining <= 0:
                break
            await self._wait_for_change(remaining)

        if self.composer.is_ready():
            if not self.loaded:
                self.refresh()
            return True

        logger.debug("%s: registry not ready after %.1fs", self.name, self._timeout)
        return False

    async def _wait_for_change(self, timeout: float) -> None:
        """Wait for a registration or the loader signal, whichever comes first."""
        self._registry_ready.clear()
        waiters = [asyncio.ensure_future(self._registry_ready.wait())]
        # A loader signal that is already set says nothing about an empty registry
        if self._ready is not None and not self._ready.is_set():
            waiters.append(asyncio.ensure_future(self._ready.wait()))

        _done, pending = await asyncio.wait(
            waiters,
            timeout=timeout,
            return_when=asyncio.FIRST_COMPLETED
        )
        for waiter in pending:
            waiter.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    def refresh(self) -> Any:
        """Re-run the query and hold its result."""
        self.value = self._query()
        self.loaded = True
        self._version += 1
        return self.value

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_registry_change(self, event: str, plugin_id: str) -> None:
        if self.composer.is_ready():
            self._registry_ready.set()
        elif not self.loaded:
            return
        logger.debug("%s: refreshing after %s '%s'", self.name, event, plugin_id)
        self.refresh()


class ModalityBindings:
    """
    Factory for the bindings presentation layers use.

    All bindings share one composer, readiness signal and timeout.
    """

    def __init__(
        self,
        composer: DynamicComposer,
        ready: ReadinessSignal | None = None,
        timeout: float | None = None
    ) -> None:
        self.composer = composer
        self.ready = ready
        self.timeout = timeout

    @property
    def registry(self):
        return self.composer.registry

    def _bind(self, name: str, query: Callable[[], Any], empty: Any) -> Binding:
        return Binding(
            self.composer,
            query,
            empty=empty,
            ready=self.ready,
            timeout=self.timeout,
            name=name,
        )

    def modality(self, plugin_id: str) -> Binding:
        return self._bind(f"modality:{plugin_id}", lambda: self.registry.get(plugin_id), None)

    def modalities_for_indication(self, indication: str) -> Binding:
        return self._bind(
            f"for_indication:{indication}",
            lambda: self.registry.get_for_indication(indication),
            [],
        )

    def protocols(self, plugin_id: str, indication: str | None = None) -> Binding:
        """Protocols of one modality, optionally narrowed to an indication."""
        def query():
            plugin = self.registry.get(plugin_id)
            if plugin is None:
                return []
            if indication:
                return plugin.get_protocols_for_indication(indication)
            return list(plugin.protocols)

        return self._bind(f"protocols:{plugin_id}", query, [])

    def comparison(self, indication: str) -> Binding:
        return self._bind(
            f"comparison:{indication}",
            lambda: self.composer.generate_comparison_data(indication),
            [],
        )

    def safety(self, plugin_id: str, patient_data: PatientData | dict | None) -> Binding:
        """Safety check of one modality for one patient; safe until proven otherwise."""
        def query():
            plugin = self.registry.get(plugin_id)
            if plugin is None or patient_data is None:
                return SafetyResult(safe=True)
            return plugin.validate_safety_for_patient(patient_data)

        return self._bind(f"safety:{plugin_id}", query, SafetyResult(safe=True))

    def all_modalities(self) -> Binding:
        return self._bind("all", self.registry.get_all, [])

    def modalities_by_category(self, category: str) -> Binding:
        return self._bind(
            f"category:{category}",
            lambda: self.registry.get_by_category(category),
            [],
        )

    def stats(self) -> Binding:
        return self._bind("stats", self.registry.get_stats, {})

    def routes(self) -> Binding:
        return self._bind("routes", self.composer.generate_plugin_routes, [])

    def navigation(self) -> Binding:
        return self._bind("navigation", self.composer.generate_plugin_navigation, [])

    def search_terms(self) -> Binding:
        return self._bind("search_terms", self.composer.generate_search_index, [])

    def modality_cards(self, indication: str) -> Binding:
        return self._bind(
            f"cards:{indication}",
            lambda: self.composer.generate_modality_cards(indication),
            [],
        )

    def treatment_recommendations(
        self,
        indication: str,
        patient_data: PatientData | dict | None = None
    ) -> Binding:
        return self._bind(
            f"recommendations:{indication}",
            lambda: self.composer.generate_treatment_recommendations(indication, patient_data),
            [],
        )
