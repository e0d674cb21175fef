"""Variant reconciliation for product updates.

Given the variants a caller submits for a product, bring the ``variants``
table in line with them:

1. variants carrying a positive id are updated in place,
2. stored variants whose id was not submitted are deleted, in batches of
   DELETE_BATCH_SIZE ids,
3. variants without an id (or with id <= 0) are inserted under fresh ids.

The steps always run in this order.
"""

import sqlite3
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Sequence, Tuple

from catalog import queries
from catalog.db import format_timestamp
from catalog.ids import IdGenerator
from catalog.logging_config import get_logger
from catalog.models import Variant

__all__ = ["ReconcileResult", "VariantReconciler", "partition_variants"]

logger = get_logger("reconcile")

# Stays well under SQLITE_MAX_VARIABLE_NUMBER (999 on older builds)
DELETE_BATCH_SIZE = 500


@dataclass
class ReconcileResult:
    """Ids touched by a reconciliation, in statement order."""

    updated: List[int] = field(default_factory=list)
    deleted: List[int] = field(default_factory=list)
    inserted: List[int] = field(default_factory=list)


def partition_variants(variants: Sequence[Variant]) -> Tuple[List[Variant], List[Variant]]:
    """Split variants into (existing, new), preserving order within each."""
    existing = [v for v in variants if v.is_persisted]
    new = [v for v in variants if not v.is_persisted]
    return existing, new


class VariantReconciler:
    """Applies a product's incoming variant set to storage.

    Statements run on the connection handed in by the caller, which owns
    the surrounding transaction. Any sqlite3 error propagates untouched.
    """

    def __init__(self, id_generator: IdGenerator):
        self.id_generator = id_generator

    def reconcile(
        self,
        conn: sqlite3.Connection,
        product_id: int,
        incoming: Sequence[Variant],
        timestamp: datetime,
    ) -> ReconcileResult:
        existing, new = partition_variants(incoming)
        result = ReconcileResult()

        result.updated = self._update_existing(conn, product_id, existing, timestamp)
        result.deleted = self._delete_orphans(conn, product_id, [v.id for v in existing])
        result.inserted = self.insert_new(conn, product_id, new, timestamp)

        logger.debug(
            f"Reconciled variants of product {product_id}: "
            f"{len(result.updated)} updated, {len(result.deleted)} deleted, "
            f"{len(result.inserted)} inserted"
        )
        return result

    def insert_new(
        self,
        conn: sqlite3.Connection,
        product_id: int,
        variants: Sequence[Variant],
        timestamp: datetime,
    ) -> List[int]:
        """Insert variants as new rows, ignoring any id they carry."""
        stamp = format_timestamp(timestamp)
        inserted = []
        for variant in variants:
            variant_id = self.id_generator.next_id()
            conn.execute(queries.SAVE_VARIANT, (
                variant_id,
                product_id,
                variant.title,
                variant.sku,
                variant.price,
                variant.available,
                variant.option1,
                variant.option2,
                stamp,
                stamp,
            ))
            inserted.append(variant_id)
        return inserted

    def _update_existing(
        self,
        conn: sqlite3.Connection,
        product_id: int,
        variants: Sequence[Variant],
        timestamp: datetime,
    ) -> List[int]:
        stamp = format_timestamp(timestamp)
        updated = []
        for variant in variants:
            cursor = conn.execute(queries.UPDATE_VARIANT, (
                variant.title,
                variant.sku,
                variant.price,
                variant.option1,
                variant.option2,
                variant.available,
                stamp,
                variant.id,
                product_id,
            ))
            if cursor.rowcount:
                updated.append(variant.id)
            else:
                logger.warning(
                    f"Variant {variant.id} does not belong to product {product_id}; update skipped"
                )
        return updated

    def _delete_orphans(
        self,
        conn: sqlite3.Connection,
        product_id: int,
        keep_ids: Sequence[int],
    ) -> List[int]:
        stored_ids = [
            row["id"]
            for row in conn.execute(queries.GET_VARIANT_IDS_BY_PRODUCT_ID, (product_id,))
        ]
        keep = set(keep_ids)
        ids_to_delete = [variant_id for variant_id in stored_ids if variant_id not in keep]

        for start in range(0, len(ids_to_delete), DELETE_BATCH_SIZE):
            batch = ids_to_delete[start:start + DELETE_BATCH_SIZE]
            placeholders = ", ".join("?" for _ in batch)
            conn.execute(
                queries.DELETE_VARIANTS_BY_IDS.format(placeholders=placeholders),
                batch,
            )
        return ids_to_delete
