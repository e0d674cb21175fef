"""Catalog service: the layer the web app talks to.

Mostly forwards to ProductRepository. It also owns the one-time sample
import that fills an empty store from the external feed.
"""

from typing import Any, Callable, Dict, List, Optional

from catalog.config import FEED_URL, IMPORT_LIMIT
from catalog.feed import fetch_feed, parse_feed_products
from catalog.logging_config import get_logger, log_catalog_event
from catalog.models import Product
from catalog.repository import ProductRepository

__all__ = ["CatalogService"]

logger = get_logger("service")

FeedFetcher = Callable[[str], Dict[str, Any]]


class CatalogService:
    def __init__(
        self,
        repository: ProductRepository,
        feed_url: str = FEED_URL,
        import_limit: int = IMPORT_LIMIT,
        feed_fetcher: Optional[FeedFetcher] = None,
    ):
        self.repository = repository
        self.feed_url = feed_url
        self.import_limit = import_limit
        self.feed_fetcher = feed_fetcher or fetch_feed

    def import_sample_products(self) -> int:
        """Fill an empty store with the first products of the sample feed.

        Does nothing when products already exist. Failures are logged and
        swallowed so the application can start with an empty catalog.

        Returns:
            Number of products imported
        """
        logger.info("Checking whether sample products need importing")
        imported = 0
        try:
            if self.repository.count() != 0:
                logger.info("Products already exist. Skipping import.")
                return 0

            logger.info(f"No products in DB. Fetching from {self.feed_url}")
            payload = self.feed_fetcher(self.feed_url)

            for product in parse_feed_products(payload, limit=self.import_limit):
                product_id = self.repository.save(product)
                imported += 1
                logger.info(f"Product saved: {product.title} (ID: {product_id})")

            log_catalog_event("import_completed", {
                "message": f"Imported {imported} sample products",
                "feed_url": self.feed_url,
                "count": imported,
            })
        except Exception as e:
            logger.error(f"Error during sample import: {e}", exc_info=True)
            log_catalog_event("import_failed", {
                "message": f"Sample import failed: {e}",
                "feed_url": self.feed_url,
                "imported_before_failure": imported,
                "error_type": type(e).__name__,
            })
        return imported

    def get_all_products(self) -> List[Product]:
        logger.info("Fetching all products")
        return self.repository.find_all()

    def find_all_sorted_by(self, sort_field: str, direction: str) -> List[Product]:
        logger.info(f"Fetching products sorted by {sort_field} {direction}")
        return self.repository.find_all_sorted_by(sort_field, direction)

    def save_product(self, product: Product) -> int:
        logger.info(f"Saving product: {product.title}")
        product_id = self.repository.save(product)
        log_catalog_event("product_saved", {
            "product_id": product_id,
            "title": product.title,
            "variants": len(product.variants),
        })
        return product_id

    def update_product(self, product: Product, product_id: int) -> None:
        logger.info(f"Updating product ID {product_id}")
        self.repository.update(product, product_id)
        log_catalog_event("product_updated", {
            "product_id": product_id,
            "title": product.title,
            "variants": len(product.variants),
        })

    def find_by_title_containing(
        self,
        title: str,
        sort_field: Optional[str] = None,
        direction: Optional[str] = None,
    ) -> List[Product]:
        logger.info(f"Searching for products with title containing: {title}")
        return self.repository.find_by_title_containing_ignore_case(title, sort_field, direction)

    def get_product_by_id(self, product_id: int) -> Product:
        """Raises ProductNotFoundError if the product does not exist."""
        logger.info(f"Fetching product by ID: {product_id}")
        return self.repository.find_by_id(product_id)

    def delete_by_id(self, product_id: int) -> None:
        logger.info(f"Deleting product ID: {product_id}")
        self.repository.delete_by_id(product_id)
        log_catalog_event("product_deleted", {"product_id": product_id})

    def product_exists(self, product_id: int) -> bool:
        return self.repository.exists_by_id(product_id)

    def count(self) -> int:
        return self.repository.count()
