"""Decode the product edit/create form into catalog models.

Variant fields arrive indexed, as the variant rows on the page are named
``variants[0].title``, ``variants[0].sku``, ``variants[1].title`` and so on.
Rows are returned in index order.
"""

import re
from typing import Dict, Mapping, Optional

from catalog.models import Product, Variant

__all__ = ["FormError", "product_from_form"]

VARIANT_FIELD_RE = re.compile(r"^variants\[(\d+)\]\.(\w+)$")
VARIANT_FIELDS = {"id", "title", "sku", "price", "option1", "option2", "available"}
TRUE_VALUES = {"true", "on", "1", "yes"}


class FormError(ValueError):
    """Raised when submitted form data cannot be turned into a product."""
    pass


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_id(raw: Optional[str]) -> Optional[int]:
    raw = _blank_to_none(raw)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        raise FormError(f"Invalid variant id: {raw!r}") from None


def _parse_price(raw: Optional[str]) -> float:
    raw = _blank_to_none(raw)
    if raw is None:
        return 0.0
    try:
        price = float(raw)
    except ValueError:
        raise FormError(f"Invalid price: {raw!r}") from None
    if price < 0:
        raise FormError(f"Price must not be negative: {raw}")
    return price


def product_from_form(form: Mapping[str, str]) -> Product:
    rows: Dict[int, Dict[str, str]] = {}
    for key, value in form.items():
        match = VARIANT_FIELD_RE.match(key)
        if not match or match.group(2) not in VARIANT_FIELDS:
            continue
        rows.setdefault(int(match.group(1)), {})[match.group(2)] = value

    variants = []
    for index in sorted(rows):
        row = rows[index]
        variants.append(Variant(
            id=_parse_id(row.get("id")),
            title=_blank_to_none(row.get("title")),
            sku=_blank_to_none(row.get("sku")),
            price=_parse_price(row.get("price")),
            available=(row.get("available") or "").strip().lower() in TRUE_VALUES,
            option1=_blank_to_none(row.get("option1")),
            option2=_blank_to_none(row.get("option2")),
        ))

    return Product(
        title=_blank_to_none(form.get("title")),
        vendor=_blank_to_none(form.get("vendor")),
        type=_blank_to_none(form.get("type")),
        variants=variants,
    )
