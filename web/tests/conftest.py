"""Shared fixtures for the web test suite."""

import base64
from datetime import datetime, timedelta

import pytest

from catalog.db import init_db
from catalog.ids import SequentialIdGenerator
from catalog.models import Product, Variant
from catalog.repository import ProductRepository
from web.app import create_app


@pytest.fixture
def app_config():
    """Config for apps under test: no startup import, no auth."""
    return {
        "TESTING": True,
        "CATALOG_IMPORT_ON_STARTUP": False,
        "CATALOG_AUTH_USER": None,
        "CATALOG_AUTH_PASS": None,
    }


class StepClock:
    """Returns a timestamp one second later on every call."""

    def __init__(self, start=datetime(2024, 1, 1, 12, 0, 0)):
        self.current = start

    def __call__(self):
        now = self.current
        self.current = now + timedelta(seconds=1)
        return now


@pytest.fixture
def repository(tmp_path):
    db_path = str(tmp_path / "web.db")
    init_db(db_path)
    return ProductRepository(
        db_path=db_path,
        id_generator=SequentialIdGenerator(1000),
        clock=StepClock(),
    )


@pytest.fixture
def app(repository, app_config):
    return create_app(app_config, repository=repository)


@pytest.fixture
def client(app):
    """Create Flask test client."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def seed(repository):
    """Save a product with one variant per title and return its id."""

    def _seed(title, vendor="Acme", type="Shoes", variant_titles=("One Size",)):
        product = Product(
            title=title,
            vendor=vendor,
            type=type,
            variants=[
                Variant(title=v, sku=f"{title[:3].upper()}-{i}", price=10.0 + i, available=True)
                for i, v in enumerate(variant_titles)
            ],
        )
        return repository.save(product)

    return _seed


@pytest.fixture
def basic_auth_header():
    """Build an Authorization header for HTTP Basic Auth."""

    def _header(user, password):
        token = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
        return {"Authorization": f"Basic {token}"}

    return _header
