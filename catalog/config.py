"""Configuration and constants for the catalog."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet

from dotenv import load_dotenv

__all__ = [
    "PROJECT_ROOT",
    "DB_PATH",
    "FEED_URL",
    "IMPORT_LIMIT",
    "IMPORT_ON_STARTUP",
    "HEADERS",
    "REQUEST_TIMEOUT",
    "MAX_RETRIES",
    "RETRY_BACKOFF_BASE",
    "MAX_RETRY_BACKOFF",
    "RETRY_STATUS_CODES",
    "SORTABLE_FIELDS",
    "DEFAULT_SORT_FIELD",
    "DEFAULT_SORT_DIRECTION",
    "RepositoryConfig",
    "DEFAULT_REPOSITORY_CONFIG",
]

# Determine project root (parent of 'catalog' directory)
PROJECT_ROOT = Path(__file__).resolve().parent.parent

load_dotenv(dotenv_path=PROJECT_ROOT / ".env")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


# Database
DB_PATH = os.getenv("CATALOG_DB_PATH", str(PROJECT_ROOT / "data" / "catalog.db"))

# External sample feed imported once when the store is empty
FEED_URL = os.getenv("CATALOG_FEED_URL", "https://famme.no/products.json")
IMPORT_LIMIT = int(os.getenv("CATALOG_IMPORT_LIMIT", "10"))
IMPORT_ON_STARTUP = _env_flag("CATALOG_IMPORT_ON_STARTUP", "True")

HEADERS = {
    "User-Agent": "catalog-manager sample importer",
    "Accept": "application/json",
}

# Request timeouts (seconds)
REQUEST_TIMEOUT = 15

# Retry settings with exponential backoff
MAX_RETRIES = 3
RETRY_BACKOFF_BASE = 2.0  # 2^attempt seconds
MAX_RETRY_BACKOFF = 30.0
RETRY_STATUS_CODES = {429, 500, 502, 503, 504}


# =============================================================================
# Sorting
# =============================================================================
# Sort field names are interpolated into ORDER BY, so only these are accepted.

SORTABLE_FIELDS: FrozenSet[str] = frozenset({"title", "vendor", "type", "updated_at"})
DEFAULT_SORT_FIELD = "updated_at"
DEFAULT_SORT_DIRECTION = "DESC"


@dataclass(frozen=True)
class RepositoryConfig:
    """Immutable settings handed to a ProductRepository at construction."""

    sortable_fields: FrozenSet[str] = SORTABLE_FIELDS
    default_sort_field: str = DEFAULT_SORT_FIELD
    default_sort_direction: str = DEFAULT_SORT_DIRECTION

    def __post_init__(self) -> None:
        if self.default_sort_field not in self.sortable_fields:
            raise ValueError(
                f"Default sort field '{self.default_sort_field}' must be one of "
                f"{sorted(self.sortable_fields)}"
            )
        if self.default_sort_direction not in ("ASC", "DESC"):
            raise ValueError(f"Invalid default sort direction: {self.default_sort_direction}")

    def resolve_sort(self, field: str, direction: str) -> tuple[str, str]:
        """Map caller-supplied sort input onto a safe (field, direction) pair.

        Unknown fields fall back to the default field. Any direction other
        than a case-insensitive ``asc`` becomes ``DESC``.
        """
        sort_field = field if field in self.sortable_fields else self.default_sort_field
        sort_direction = "ASC" if (direction or "").lower() == "asc" else "DESC"
        return sort_field, sort_direction


DEFAULT_REPOSITORY_CONFIG = RepositoryConfig()
