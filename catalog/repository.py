"""Data access for products and their variants.

ProductRepository is the only code that talks to the products/variants
tables. Writes (save, update, delete_by_id) each run in a single
transaction; reads use plain autocommit connections.
"""

import sqlite3
from datetime import datetime
from typing import Callable, List, Optional

from catalog import queries
from catalog.config import DEFAULT_REPOSITORY_CONFIG, RepositoryConfig
from catalog.db import DEFAULT_DB_PATH, format_timestamp, get_connection, transaction
from catalog.exceptions import ProductNotFoundError
from catalog.ids import ClockRandomIdGenerator, IdGenerator
from catalog.logging_config import get_logger
from catalog.mapping import map_product_row, map_product_rows, map_variant_rows
from catalog.models import Product, Variant
from catalog.reconcile import VariantReconciler

__all__ = ["ProductRepository"]

logger = get_logger("repository")


class ProductRepository:
    """Find/save/update/delete/count access to the catalog store.

    Args:
        db_path: SQLite database file.
        config: Sort allow-list and defaults.
        id_generator: Source of ids for new products and variants.
        clock: Returns the timestamp stamped on written rows.
    """

    def __init__(
        self,
        db_path: str = DEFAULT_DB_PATH,
        config: RepositoryConfig = DEFAULT_REPOSITORY_CONFIG,
        id_generator: Optional[IdGenerator] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.db_path = db_path
        self.config = config
        self.id_generator = id_generator or ClockRandomIdGenerator()
        self.clock = clock
        self.reconciler = VariantReconciler(self.id_generator)

    # ---------- READS ----------

    def find_all(self) -> List[Product]:
        """All products with their variants, most recently updated first."""
        logger.debug("Fetching all products")
        with get_connection(self.db_path) as conn:
            products = map_product_rows(conn.execute(queries.GET_ALL_PRODUCTS))
            return self._with_variants(conn, products)

    def find_all_sorted_by(self, sort_field: str, direction: str) -> List[Product]:
        """All products ordered by an allow-listed field.

        Unknown fields fall back to the configured default; any direction
        other than ``asc`` means descending.
        """
        field, order = self.config.resolve_sort(sort_field, direction)
        logger.debug(f"Fetching all products sorted by {field} {order}")

        sql = queries.GET_PRODUCTS_SORTED.format(
            columns=queries.PRODUCT_COLUMNS,
            sort_field=field,
            direction=order,
        )
        with get_connection(self.db_path) as conn:
            products = map_product_rows(conn.execute(sql))
            return self._with_variants(conn, products)

    def find_by_id(self, product_id: int) -> Product:
        """Raises ProductNotFoundError if no product has this id."""
        logger.debug(f"Finding product by ID: {product_id}")
        with get_connection(self.db_path) as conn:
            row = conn.execute(queries.FIND_PRODUCT_BY_ID, (product_id,)).fetchone()
            if row is None:
                raise ProductNotFoundError(product_id)
            product = map_product_row(row)
            product.variants = self._variants_of(conn, product_id)
            return product

    def find_by_title_containing_ignore_case(
        self,
        title: str,
        sort_field: Optional[str] = None,
        direction: Optional[str] = None,
    ) -> List[Product]:
        """Products whose title contains ``title``, ignoring case.

        Most recently updated first unless ``sort_field`` is given, which
        is resolved against the allow-list like find_all_sorted_by().
        """
        logger.debug(f"Searching products by title: {title!r}")
        pattern = f"%{title or ''}%"
        if sort_field is None:
            sql = queries.FIND_PRODUCTS_BY_TITLE_LIKE
        else:
            field, order = self.config.resolve_sort(sort_field, direction)
            sql = queries.FIND_PRODUCTS_BY_TITLE_LIKE_SORTED.format(
                columns=queries.PRODUCT_COLUMNS,
                sort_field=field,
                direction=order,
            )
        with get_connection(self.db_path) as conn:
            products = map_product_rows(conn.execute(sql, (pattern,)))
            return self._with_variants(conn, products)

    def count(self) -> int:
        with get_connection(self.db_path) as conn:
            return conn.execute(queries.PRODUCT_COUNT).fetchone()["count"]

    def count_variants(self) -> int:
        with get_connection(self.db_path) as conn:
            return conn.execute(queries.VARIANT_COUNT).fetchone()["count"]

    def exists_by_id(self, product_id: int) -> bool:
        with get_connection(self.db_path) as conn:
            row = conn.execute(queries.EXISTS_PRODUCT_BY_ID, (product_id,)).fetchone()
            return row is not None

    # ---------- WRITES ----------

    def save(self, product: Product) -> int:
        """Insert a product and all of its variants, returning the product id.

        Every variant is inserted as a new row under a generated id, even if
        it already carries one.
        """
        logger.debug(f"Saving product: {product.title}")
        now = self.clock()
        product_id = product.id if product.id and product.id > 0 else self.id_generator.next_id()
        stamp = format_timestamp(now)

        with get_connection(self.db_path) as conn, transaction(conn):
            conn.execute(queries.SAVE_PRODUCT, (
                product_id,
                product.title,
                product.vendor,
                product.type,
                stamp,
                stamp,
            ))
            variant_ids = self.reconciler.insert_new(conn, product_id, product.variants, now)

        logger.debug(f"Saved product {product_id} with {len(variant_ids)} variants")
        return product_id

    def update(self, product: Product, product_id: int) -> None:
        """Update a product's fields and reconcile its variant set."""
        logger.debug(f"Updating product with ID: {product_id}")
        now = self.clock()

        with get_connection(self.db_path) as conn, transaction(conn):
            conn.execute(queries.UPDATE_PRODUCT, (
                product.title,
                product.vendor,
                product.type,
                format_timestamp(now),
                product_id,
            ))
            self.reconciler.reconcile(conn, product_id, product.variants, now)

        logger.debug(f"Updated product {product_id}")

    def delete_by_id(self, product_id: int) -> None:
        """Delete a product and its variants. Unknown ids are a no-op."""
        logger.debug(f"Deleting product with ID: {product_id}")

        with get_connection(self.db_path) as conn, transaction(conn):
            # Variants before the product row they reference
            conn.execute(queries.DELETE_VARIANTS_BY_PRODUCT_ID, (product_id,))
            deleted = conn.execute(queries.DELETE_PRODUCT_BY_ID, (product_id,)).rowcount

        if deleted == 0:
            logger.debug(f"No product with ID {product_id} to delete")

    # ---------- HELPERS ----------

    def _variants_of(self, conn: sqlite3.Connection, product_id: int) -> List[Variant]:
        return map_variant_rows(conn.execute(queries.GET_ALL_VARIANTS_OF_A_PRODUCT, (product_id,)))

    def _with_variants(self, conn: sqlite3.Connection, products: List[Product]) -> List[Product]:
        for product in products:
            product.variants = self._variants_of(conn, product.id)
        return products
