"""
Configuration for the treatment modality service.

Environment variables:
    ENABLE_BUILTIN_PLUGINS: Register the built-in modalities (default: "true")
    DISABLED_PLUGINS: Comma-separated plugin ids to skip (case-insensitive)
    ENABLE_DEMO_PLUGIN: Allow adding/removing the demo plugin at runtime
        (default: "true")
    READINESS_TIMEOUT: Seconds a consumer waits for the registry to fill
        (default: 5.0)
    LOG_LEVEL: Logging level name (default: "INFO")
    RATE_LIMIT_STORAGE_URI: flask-limiter storage (default: "memory://")
"""

import logging
import os

DEFAULT_READINESS_TIMEOUT = 5.0


def _env_flag(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).strip().lower() == "true"


class ModalityConfig:
    """
    Configuration for plugin loading and the web layer.

    Reads from environment variables; invalid values fall back to
    defaults and are reported by ``validate()``.
    """

    def __init__(self) -> None:
        # Plugin selection
        self.enable_builtin_plugins = _env_flag("ENABLE_BUILTIN_PLUGINS")
        disabled = os.getenv("DISABLED_PLUGINS", "").strip()
        self.disabled_plugins = [
            p.strip().lower() for p in disabled.split(",") if p.strip()
        ]
        self.enable_demo_plugin = _env_flag("ENABLE_DEMO_PLUGIN")

        # Readiness wait for consumers
        self._readiness_timeout_raw = os.getenv("READINESS_TIMEOUT", "")
        try:
            self.readiness_timeout = float(
                self._readiness_timeout_raw or DEFAULT_READINESS_TIMEOUT
            )
        except ValueError:
            self.readiness_timeout = DEFAULT_READINESS_TIMEOUT
        if self.readiness_timeout < 0:
            self.readiness_timeout = DEFAULT_READINESS_TIMEOUT

        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.rate_limit_storage_uri = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")

    def is_plugin_disabled(self, plugin_id: str) -> bool:
        """Check if a plugin is disabled via DISABLED_PLUGINS."""
        return plugin_id.lower() in self.disabled_plugins

    @property
    def logging_level(self) -> int:
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.INFO

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of errors.

        Returns:
            List of error strings (empty if valid)
        """
        errors = []

        if self._readiness_timeout_raw:
            try:
                if float(self._readiness_timeout_raw) < 0:
                    errors.append("READINESS_TIMEOUT must not be negative")
            except ValueError:
                errors.append("READINESS_TIMEOUT must be a number of seconds")

        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"LOG_LEVEL '{self.log_level}' is not a logging level")

        return errors

    def to_dict(self) -> dict:
        """Return configuration summary."""
        return {
            "enable_builtin_plugins": self.enable_builtin_plugins,
            "disabled_plugins": list(self.disabled_plugins),
            "enable_demo_plugin": self.enable_demo_plugin,
            "readiness_timeout": self.readiness_timeout,
            "log_level": self.log_level,
        }


# Singleton instance
_config: ModalityConfig | None = None


def get_modality_config() -> ModalityConfig:
    """Get the modality config singleton."""
    global _config
    if _config is None:
        _config = ModalityConfig()
    return _config


def reset_modality_config() -> None:
    """Forget the cached config so the next call re-reads the environment."""
    global _config
    _config = None
