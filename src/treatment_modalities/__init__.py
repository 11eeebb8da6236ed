"""
Treatment modality registry.

Registers treatment modality plugins at startup and derives navigation,
routes, comparison tables and safety checks from the registered set.
"""

from .bindings import Binding, ModalityBindings
from .composer import DynamicComposer
from .config import ModalityConfig, get_modality_config
from .plugins import ModalityPlugin, ModalityRegistry, PluginLoader

__all__ = [
    'Binding',
    'ModalityBindings',
    'DynamicComposer',
    'ModalityConfig',
    'get_modality_config',
    'ModalityPlugin',
    'ModalityRegistry',
    'PluginLoader',
]
