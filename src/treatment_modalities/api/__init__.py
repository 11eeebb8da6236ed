"""
Web layer for the treatment modality registry.
"""

from .app import create_app, run_async
from .routes import modalities_bp
from .state import ModalityState, create_state

__all__ = [
    'create_app',
    'run_async',
    'modalities_bp',
    'ModalityState',
    'create_state',
]
