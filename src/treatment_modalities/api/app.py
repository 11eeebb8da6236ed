"""
Flask application factory for the treatment modality service.
"""

import asyncio
import logging
from collections.abc import Coroutine, Iterable
from typing import Any

from flask import Flask
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from treatment_modalities.config import ModalityConfig, get_modality_config
from treatment_modalities.plugins.plugin_loader import PluginFactory

from .routes import modalities_bp
from .state import EXTENSION_KEY, ModalityState, create_state

logger = logging.getLogger(__name__)


def run_async(coro: Coroutine) -> Any:
    """Run an async coroutine synchronously (Python 3.12+ safe)."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop and loop.is_running():
        # Already in an async context, run on a separate thread
        import concurrent.futures
        with concurrent.futures.ThreadPoolExecutor() as pool:
            return pool.submit(asyncio.run, coro).result()
    else:
        return asyncio.run(coro)


def create_app(
    config: ModalityConfig | None = None,
    plugin_factories: Iterable[PluginFactory] | None = None,
    load_plugins: bool = True,
    testing: bool = False
) -> Flask:
    """
    Build the Flask app and its modality state.

    Args:
        config: Configuration (defaults to env-configured config)
        plugin_factories: Plugins to load instead of the built-in set
        load_plugins: Populate the registry before returning
        testing: Enable Flask testing mode and disable rate limiting
    """
    config = config or get_modality_config()
    for error in config.validate():
        logger.warning("Configuration: %s", error)

    app = Flask(__name__)
    app.config["TESTING"] = testing
    app.config["RATELIMIT_ENABLED"] = not testing

    state: ModalityState = create_state(config, plugin_factories)
    app.extensions[EXTENSION_KEY] = state

    if config.rate_limit_storage_uri == "memory://" and not testing:
        logger.warning(
            "Rate limiting uses in-memory storage; set RATE_LIMIT_STORAGE_URI "
            "to share limits across instances"
        )

    Limiter(
        app=app,
        key_func=get_remote_address,
        default_limits=["1000 per day", "200 per hour"],
        storage_uri=config.rate_limit_storage_uri,
        strategy="fixed-window",
    )

    app.register_blueprint(modalities_bp)

    if load_plugins:
        run_async(state.loader.load_all_plugins())

    return app
