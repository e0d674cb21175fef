"""Flask web app for managing the product catalog.

Serves a single page whose sections are HTML fragments rendered by the
routes in views.py.
"""

import base64
import logging
from typing import Any, Mapping, Optional, Tuple

from flask import Flask, Response, current_app, render_template, request

from catalog.db import init_db
from catalog.exceptions import ProductNotFoundError
from catalog.logging_config import setup_logging
from catalog.repository import ProductRepository
from catalog.service import CatalogService

from .config import DEFAULT_APP_CONFIG, FLASK_DEBUG, FLASK_HOST, FLASK_PORT
from .forms import FormError
from .views import products

__all__ = ["create_app"]

logger = logging.getLogger(__name__)


def create_app(
    config_overrides: Optional[Mapping[str, Any]] = None,
    repository: Optional[ProductRepository] = None,
) -> Flask:
    """Build the Flask app.

    Args:
        config_overrides: Values merged over DEFAULT_APP_CONFIG.
        repository: Repository to use instead of one built from CATALOG_DB_PATH.
    """
    app = Flask(__name__)
    app.config.update(DEFAULT_APP_CONFIG)
    if config_overrides:
        app.config.update(config_overrides)

    if repository is None:
        repository = ProductRepository(db_path=app.config["CATALOG_DB_PATH"])
    init_db(repository.db_path)

    service = CatalogService(
        repository,
        feed_url=app.config["CATALOG_FEED_URL"],
        import_limit=app.config["CATALOG_IMPORT_LIMIT"],
    )
    app.extensions["catalog"] = service

    app.before_request(_require_basic_auth)
    app.register_blueprint(products)
    app.register_error_handler(ProductNotFoundError, _not_found)
    app.register_error_handler(FormError, _bad_form)

    if app.config["CATALOG_IMPORT_ON_STARTUP"]:
        service.import_sample_products()

    return app


# ---------- BASIC AUTH ----------


def _basic_auth_creds() -> Tuple[Optional[str], Optional[str]]:
    return current_app.config["CATALOG_AUTH_USER"], current_app.config["CATALOG_AUTH_PASS"]


def _unauthorized() -> Response:
    return Response(
        "Authentication required",
        401,
        {"WWW-Authenticate": 'Basic realm="Login Required"'},
    )


def _require_basic_auth() -> Optional[Response]:
    """
    Enforce HTTP Basic Auth for all routes.
    Skips enforcement if credentials are not configured (CATALOG_USER/CATALOG_PASS unset).
    """
    user, password = _basic_auth_creds()
    if not user or not password:
        return None  # auth disabled

    header = request.headers.get("Authorization", "")
    if not header.startswith("Basic "):
        return _unauthorized()

    try:
        decoded = base64.b64decode(header.split(" ", 1)[1]).decode("utf-8")
        username, passwd = decoded.split(":", 1)
    except (ValueError, UnicodeDecodeError):
        return _unauthorized()

    if username == user and passwd == password:
        return None
    return _unauthorized()


# ---------- ERROR FRAGMENTS ----------


def _not_found(error: ProductNotFoundError) -> Tuple[str, int]:
    logger.info(str(error))
    return render_template("fragments/error.html", message=str(error)), 404


def _bad_form(error: FormError) -> Tuple[str, int]:
    logger.info(f"Rejected form submission: {error}")
    return render_template("fragments/error.html", message=str(error)), 400


if __name__ == "__main__":
    setup_logging()
    create_app().run(host=FLASK_HOST, port=FLASK_PORT, debug=FLASK_DEBUG)
