"""
Plugin system for treatment modalities.

Lets independent modality definitions (protocols, techniques, safety
rules, UI bindings) be registered at startup so that every derived view
comes from the registered set.
"""

from .errors import PluginValidationError
from .modality_plugin import ModalityPlugin, curated_comparison
from .modality_plugin_protocol import ModalityPluginContract
from .plugin_loader import PluginLoader, ReadinessSignal
from .plugin_registry import REGISTERED, UNREGISTERED, ModalityRegistry

__all__ = [
    'ModalityPluginContract',
    'ModalityPlugin',
    'curated_comparison',
    'ModalityRegistry',
    'REGISTERED',
    'UNREGISTERED',
    'PluginLoader',
    'ReadinessSignal',
    'PluginValidationError',
]
