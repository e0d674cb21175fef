"""Data models for products and their variants."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

__all__ = ["Product", "Variant"]


@dataclass
class Variant:
    """A purchasable configuration of a product (size, color, ...).

    An id of ``None`` or anything <= 0 marks a variant that has not been
    stored yet.
    """

    title: Optional[str] = None
    sku: Optional[str] = None
    price: float = 0.0
    available: bool = False
    option1: Optional[str] = None
    option2: Optional[str] = None

    id: Optional[int] = None
    product_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None and self.id > 0


@dataclass
class Product:
    """A catalog item owning one or more variants.

    Timestamps are assigned by the repository on every write.
    """

    title: Optional[str] = None
    vendor: Optional[str] = None
    type: Optional[str] = None
    variants: List[Variant] = field(default_factory=list)

    # Database ID (set after save)
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
