"""
Built-in treatment modalities.

Each module exposes ``get_plugin()`` returning a fresh plugin instance.
"""

from . import acupressure, applied_kinesiology, cupping, gua_sha, reflexology_demo

# Registration order of the built-in plugins
BUILTIN_PLUGINS = [
    acupressure.get_plugin,
    cupping.get_plugin,
    gua_sha.get_plugin,
    applied_kinesiology.get_plugin,
]

DEMO_PLUGIN = reflexology_demo.get_plugin

__all__ = ["BUILTIN_PLUGINS", "DEMO_PLUGIN"]
