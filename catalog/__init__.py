"""Product catalog: persistence, variant reconciliation and sample import."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from catalog.config import DB_PATH, DEFAULT_REPOSITORY_CONFIG, FEED_URL, RepositoryConfig
from catalog.db import init_db
from catalog.exceptions import CatalogError, FeedError, MappingError, ProductNotFoundError
from catalog.ids import ClockRandomIdGenerator, IdGenerator, SequentialIdGenerator
from catalog.models import Product, Variant
from catalog.reconcile import VariantReconciler
from catalog.repository import ProductRepository
from catalog.service import CatalogService

__all__ = [
    # Version
    "__version__",
    # Config
    "DB_PATH",
    "DEFAULT_REPOSITORY_CONFIG",
    "FEED_URL",
    "RepositoryConfig",
    # Models
    "Product",
    "Variant",
    # Errors
    "CatalogError",
    "FeedError",
    "MappingError",
    "ProductNotFoundError",
    # Core components
    "init_db",
    "IdGenerator",
    "ClockRandomIdGenerator",
    "SequentialIdGenerator",
    "VariantReconciler",
    "ProductRepository",
    "CatalogService",
]
