"""Command-line interface for the catalog store."""

import argparse
import logging
from typing import List, Optional

from catalog.config import DB_PATH, DEFAULT_SORT_FIELD, FEED_URL, IMPORT_LIMIT, SORTABLE_FIELDS
from catalog.db import init_db
from catalog.logging_config import setup_logging
from catalog.repository import ProductRepository
from catalog.service import CatalogService

__all__ = ["main", "parse_args", "show_stats", "list_products"]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Product catalog store maintenance",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create the tables
  python -m catalog.cli --init-db

  # Import the sample feed into an empty store
  python -m catalog.cli --import

  # Show database statistics
  python -m catalog.cli --stats

  # List products by title, A to Z
  python -m catalog.cli --list --sort title --direction asc
        """,
    )

    parser.add_argument(
        "--db",
        default=DB_PATH,
        help=f"SQLite database path (default: {DB_PATH})",
    )
    parser.add_argument(
        "--init-db",
        action="store_true",
        help="Create the products/variants tables if missing",
    )
    parser.add_argument(
        "--import",
        dest="run_import",
        action="store_true",
        help="Import sample products from the feed if the store is empty",
    )
    parser.add_argument(
        "--feed-url",
        default=FEED_URL,
        help=f"Feed URL for --import (default: {FEED_URL})",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=IMPORT_LIMIT,
        help=f"Number of feed products to import (default: {IMPORT_LIMIT})",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show database statistics and exit",
    )
    parser.add_argument(
        "--list",
        dest="list_products",
        action="store_true",
        help="List products with their variants",
    )
    parser.add_argument(
        "--sort",
        default=DEFAULT_SORT_FIELD,
        help=f"Sort field for --list, one of {sorted(SORTABLE_FIELDS)} (default: {DEFAULT_SORT_FIELD})",
    )
    parser.add_argument(
        "--direction",
        default="desc",
        help="Sort direction for --list: asc or desc (default: desc)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


def show_stats(repository: ProductRepository) -> None:
    """Display database statistics."""
    print(f"\n{'='*50}")
    print(f"Database: {repository.db_path}")
    print(f"{'='*50}")
    print(f"\nTotal products: {repository.count()}")
    print(f"Total variants: {repository.count_variants()}")
    print()


def list_products(repository: ProductRepository, sort_field: str, direction: str) -> None:
    products = repository.find_all_sorted_by(sort_field, direction)
    if not products:
        print("No products in the catalog.")
        return

    for product in products:
        print(f"[{product.id}] {product.title} ({product.vendor} / {product.type})")
        for variant in product.variants:
            status = "available" if variant.available else "sold out"
            print(f"    - {variant.title} sku={variant.sku} price={variant.price:.2f} {status}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_to_file=False)

    init_db(args.db)
    repository = ProductRepository(db_path=args.db)

    if args.init_db:
        print(f"Database ready: {args.db}")

    if args.run_import:
        service = CatalogService(repository, feed_url=args.feed_url, import_limit=args.limit)
        imported = service.import_sample_products()
        print(f"Imported {imported} products")

    if args.stats:
        show_stats(repository)

    if args.list_products:
        list_products(repository, args.sort, args.direction)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
