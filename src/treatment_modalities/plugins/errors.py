"""Exceptions raised by the modality plugin system."""


class PluginValidationError(ValueError):
    """A plugin's data does not have the shape the registry requires."""

    def __init__(self, plugin_id: str, message: str) -> None:
        self.plugin_id = plugin_id
        super().__init__(f"Invalid plugin '{plugin_id}': {message}")
