"""
Treatment Modality Service
Flask application serving the modality registry and the views composed from it.
"""

import logging
import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from treatment_modalities.api import create_app
from treatment_modalities.config import get_modality_config

config = get_modality_config()
logging.basicConfig(
    level=config.logging_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app(config)


if __name__ == '__main__':
    port = int(os.getenv("PORT", 8080))
    debug = os.getenv("DEBUG", "false").lower() == "true"

    print(f"🚀 Starting Treatment Modality Service on port {port}")
    print(f"📦 Plugins: {app.extensions['treatment_modalities'].registry.get_stats()}")

    app.run(host='0.0.0.0', port=port, debug=debug)
