"""Flask front end for the product catalog."""

from .app import create_app

__all__ = ["create_app"]
