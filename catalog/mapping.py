"""Row-to-entity mapping for products and variants.

Every query path maps rows through these functions. A row missing any
expected column raises MappingError instead of producing a half-filled
entity.
"""

import sqlite3
from typing import Iterable, List, Mapping, Union

from catalog.db import parse_timestamp
from catalog.exceptions import MappingError
from catalog.models import Product, Variant

__all__ = [
    "PRODUCT_FIELDS",
    "VARIANT_FIELDS",
    "map_product_row",
    "map_variant_row",
    "map_product_rows",
    "map_variant_rows",
]

Row = Union[sqlite3.Row, Mapping[str, object]]

PRODUCT_FIELDS = ("id", "title", "vendor", "type", "created_at", "updated_at")

VARIANT_FIELDS = (
    "id",
    "product_id",
    "title",
    "sku",
    "price",
    "available",
    "option1",
    "option2",
    "created_at",
    "updated_at",
)


def _require_columns(row: Row, entity: str, fields: Iterable[str]) -> None:
    present = set(row.keys())
    missing = [name for name in fields if name not in present]
    if missing:
        raise MappingError(entity, missing)


def map_product_row(row: Row) -> Product:
    """Map a products row to a Product with an empty variant list."""
    _require_columns(row, "Product", PRODUCT_FIELDS)
    return Product(
        id=row["id"],
        title=row["title"],
        vendor=row["vendor"],
        type=row["type"],
        created_at=parse_timestamp(row["created_at"]),
        updated_at=parse_timestamp(row["updated_at"]),
    )


def map_variant_row(row: Row) -> Variant:
    _require_columns(row, "Variant", VARIANT_FIELDS)
    price = row["price"]
    return Variant(
        id=row["id"],
        product_id=row["product_id"],
        title=row["title"],
        sku=row["sku"],
        price=float(price) if price is not None else 0.0,
        available=bool(row["available"]),
        option1=row["option1"],
        option2=row["option2"],
        created_at=parse_timestamp(row["created_at"]),
        updated_at=parse_timestamp(row["updated_at"]),
    )


def map_product_rows(rows: Iterable[Row]) -> List[Product]:
    return [map_product_row(row) for row in rows]


def map_variant_rows(rows: Iterable[Row]) -> List[Variant]:
    return [map_variant_row(row) for row in rows]
