"""Exceptions raised by the catalog package."""

from typing import Iterable, Optional

__all__ = [
    "CatalogError",
    "ProductNotFoundError",
    "MappingError",
    "FeedError",
]


class CatalogError(Exception):
    """Base class for catalog errors."""
    pass


class ProductNotFoundError(CatalogError, LookupError):
    """Raised when a product id has no matching row."""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} not found")


class MappingError(CatalogError):
    """Raised when a database row is missing columns an entity needs."""

    def __init__(self, entity: str, missing: Iterable[str]):
        self.entity = entity
        self.missing = sorted(missing)
        super().__init__(f"Cannot map row to {entity}: missing columns {self.missing}")


class FeedError(CatalogError):
    """Raised when the external product feed cannot be fetched or parsed."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)
