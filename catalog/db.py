"""SQLite database schema and connection helpers for the catalog."""

import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Generator, Optional

from catalog.config import DB_PATH

__all__ = [
    "DEFAULT_DB_PATH",
    "get_connection",
    "transaction",
    "init_db",
    "format_timestamp",
    "parse_timestamp",
]

DEFAULT_DB_PATH = DB_PATH


def _unicode_lower(value: Optional[str]) -> Optional[str]:
    return value.lower() if isinstance(value, str) else value


@contextmanager
def get_connection(db_path: str = DEFAULT_DB_PATH) -> Generator[sqlite3.Connection, None, None]:
    """Context manager for database connections.

    Connections run in autocommit mode; multi-statement writes go through
    transaction(). Foreign keys are enforced on every connection since
    SQLite leaves them off by default.
    """
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path, isolation_level=None)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    # SQLite's LOWER() only folds ASCII
    conn.create_function("unicode_lower", 1, _unicode_lower, deterministic=True)
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def transaction(conn: sqlite3.Connection) -> Generator[sqlite3.Connection, None, None]:
    """Run a block of statements atomically.

    Commits when the block exits normally. Any exception rolls back every
    statement issued inside the block and is re-raised unchanged.
    """
    if conn.in_transaction:
        raise RuntimeError("transaction() does not support nesting")
    conn.execute("BEGIN")
    try:
        yield conn
    except BaseException:
        conn.rollback()
        raise
    else:
        conn.commit()


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Initialize the database schema."""
    with get_connection(db_path) as conn:
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS products (
                id BIGINT PRIMARY KEY,
                title VARCHAR(255),
                vendor VARCHAR(255),
                type VARCHAR(255),
                created_at TIMESTAMP,
                updated_at TIMESTAMP
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS variants (
                id BIGINT PRIMARY KEY,
                product_id BIGINT,
                title VARCHAR(255),
                sku VARCHAR(255),
                price DOUBLE,
                available BOOLEAN,
                option1 VARCHAR(255),
                option2 VARCHAR(255),
                created_at TIMESTAMP,
                updated_at TIMESTAMP,
                FOREIGN KEY (product_id) REFERENCES products(id)
            )
        """)

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_variants_product_id ON variants(product_id)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_products_updated_at ON products(updated_at)")

        conn.commit()


def format_timestamp(value: datetime) -> str:
    """Serialize a timestamp so that text ordering matches time ordering."""
    return value.isoformat(sep=" ", timespec="microseconds")


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)
