"""Shared fixtures for the catalog test suite."""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

import pytest

from catalog.db import init_db
from catalog.ids import SequentialIdGenerator
from catalog.models import Product, Variant
from catalog.repository import ProductRepository


class StepClock:
    """Returns a timestamp one second later on every call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, 0)):
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + timedelta(seconds=1)
        return now


@pytest.fixture
def db_path(tmp_path):
    """Create a temporary database with the catalog schema."""
    path = str(tmp_path / "catalog.db")
    init_db(path)
    return path


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def repository(db_path, clock):
    """Repository with ids 1000, 1001, ... and a stepping clock."""
    return ProductRepository(
        db_path=db_path,
        id_generator=SequentialIdGenerator(1000),
        clock=clock,
    )


@pytest.fixture
def make_product():
    """Build an unsaved product with the given variant titles."""

    def _make(
        title: str = "Red Sneaker",
        vendor: str = "Acme",
        type: str = "Shoes",
        variant_titles: Optional[List[str]] = None,
    ) -> Product:
        titles = variant_titles if variant_titles is not None else ["Size 42", "Size 43"]
        variants = [
            Variant(
                title=variant_title,
                sku=f"{title[:3].upper()}-{index}",
                price=49.5 + index,
                available=index % 2 == 0,
                option1=variant_title.split()[-1],
                option2="Red",
            )
            for index, variant_title in enumerate(titles)
        ]
        return Product(title=title, vendor=vendor, type=type, variants=variants)

    return _make


@pytest.fixture
def reset_catalog_logger():
    """Restore the catalog logger after tests that configure it."""
    yield
    logger = logging.getLogger("catalog")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
