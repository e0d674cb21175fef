"""Centralized configuration for the catalog web app."""

import os

from catalog.config import DB_PATH, FEED_URL, IMPORT_LIMIT, IMPORT_ON_STARTUP

# Flask app settings (allow env overrides; default debug off for safety)
# Hosting platforms set PORT dynamically; fall back to FLASK_PORT or 5000 for local.
FLASK_HOST = os.getenv("FLASK_HOST", "0.0.0.0")
FLASK_PORT = int(os.getenv("FLASK_PORT", os.getenv("PORT", "5000")))
FLASK_DEBUG = os.getenv("FLASK_DEBUG", "False").lower() == "true"

# Optional HTTP Basic Auth; disabled unless both are set
AUTH_USER = os.getenv("CATALOG_USER")
AUTH_PASS = os.getenv("CATALOG_PASS")

# Defaults copied into app.config by create_app()
DEFAULT_APP_CONFIG = {
    "CATALOG_DB_PATH": DB_PATH,
    "CATALOG_FEED_URL": FEED_URL,
    "CATALOG_IMPORT_LIMIT": IMPORT_LIMIT,
    "CATALOG_IMPORT_ON_STARTUP": IMPORT_ON_STARTUP,
    "CATALOG_AUTH_USER": AUTH_USER,
    "CATALOG_AUTH_PASS": AUTH_PASS,
}
