"""Client for the external products.json sample feed."""

import random
import re
import time
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import requests  # type: ignore[import-untyped]

from catalog.config import (
    FEED_URL,
    HEADERS,
    IMPORT_LIMIT,
    MAX_RETRIES,
    MAX_RETRY_BACKOFF,
    REQUEST_TIMEOUT,
    RETRY_BACKOFF_BASE,
    RETRY_STATUS_CODES,
)
from catalog.exceptions import FeedError
from catalog.logging_config import get_logger
from catalog.models import Product, Variant

__all__ = [
    "create_session",
    "validate_feed_url",
    "fetch_feed",
    "parse_feed_products",
]

logger = get_logger("feed")

# Dangerous URL schemes to reject
DANGEROUS_SCHEMES = {"javascript", "data", "vbscript", "file"}


def create_session() -> requests.Session:
    """Create a requests Session with the importer's headers."""
    session = requests.Session()
    session.headers.update(HEADERS)
    session.headers.setdefault("Accept-Encoding", "gzip, deflate")
    return session


def validate_feed_url(url: str) -> str:
    """Check that a feed URL is a plain http(s) URL with a host.

    Returns:
        The stripped URL

    Raises:
        FeedError: If the URL is empty, malformed or uses another scheme
    """
    if not url or not url.strip():
        raise FeedError("Feed URL is empty")

    url = re.sub(r"[\x00-\x1f\x7f-\x9f]", "", url.strip())
    parsed = urlparse(url)

    scheme = parsed.scheme.lower()
    if scheme in DANGEROUS_SCHEMES:
        raise FeedError(f"Dangerous URL scheme: {scheme}", url=url)
    if scheme not in ("http", "https"):
        raise FeedError(f"Invalid URL scheme: {scheme or '(none)'}", url=url)
    if not parsed.netloc:
        raise FeedError("Feed URL has no host", url=url)

    return url


def _backoff(attempt: int) -> float:
    return min(RETRY_BACKOFF_BASE ** attempt, MAX_RETRY_BACKOFF) + random.uniform(0, 1)


def fetch_feed(
    url: str = FEED_URL,
    session: Optional[requests.Session] = None,
    max_retries: int = MAX_RETRIES,
    sleep=time.sleep,
) -> Dict[str, Any]:
    """GET the feed and decode its JSON body.

    Retries with exponential backoff on throttling/server status codes,
    connection errors and timeouts.

    Args:
        url: Feed URL
        session: Optional requests.Session for connection reuse
        max_retries: Retries after the first attempt
        sleep: Sleep function (replaced in tests)

    Returns:
        Decoded JSON payload

    Raises:
        FeedError: If the request fails after all retries or the body is not JSON
    """
    url = validate_feed_url(url)
    sess = session or create_session()

    for attempt in range(max_retries + 1):
        try:
            resp = sess.get(url, timeout=REQUEST_TIMEOUT)

            if resp.status_code in RETRY_STATUS_CODES and attempt < max_retries:
                backoff = _backoff(attempt)
                logger.warning(
                    f"Received {resp.status_code}, backing off {backoff:.1f}s "
                    f"(attempt {attempt + 1}/{max_retries})"
                )
                sleep(backoff)
                continue

            resp.raise_for_status()

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else "unknown"
            raise FeedError(f"HTTP Error {status_code} fetching {url}", url=url) from e

        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            if attempt < max_retries:
                backoff = _backoff(attempt)
                logger.warning(
                    f"{type(e).__name__}, backing off {backoff:.1f}s "
                    f"(attempt {attempt + 1}/{max_retries})"
                )
                sleep(backoff)
                continue
            raise FeedError(f"Failed to fetch {url}: {e}", url=url) from e

        except requests.exceptions.RequestException as e:
            raise FeedError(f"Failed to fetch {url}: {e}", url=url) from e

        try:
            return resp.json()
        except ValueError as e:
            raise FeedError(f"Feed at {url} did not return valid JSON", url=url) from e

    raise FeedError(f"Failed to fetch {url} after {max_retries} retries", url=url)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _price(value: Any) -> float:
    # The feed sends prices as strings ("499.00")
    if value in (None, ""):
        return 0.0
    return float(value)


def _parse_variant(node: Dict[str, Any]) -> Variant:
    return Variant(
        id=node.get("id"),
        title=_text(node.get("title")),
        sku=_text(node.get("sku")),
        price=_price(node.get("price")),
        available=bool(node.get("available", False)),
        option1=_text(node.get("option1")),
        option2=_text(node.get("option2")),
    )


def parse_feed_products(payload: Dict[str, Any], limit: int = IMPORT_LIMIT) -> List[Product]:
    """Map the first ``limit`` feed entries to Product objects.

    The feed's ``product_type`` becomes ``type``. Feed ids are kept on the
    returned objects; the repository decides whether to reuse them.

    Raises:
        FeedError: If the payload has no ``products`` list or an entry is malformed
    """
    nodes = payload.get("products") if isinstance(payload, dict) else None
    if not isinstance(nodes, list):
        raise FeedError("Feed payload has no 'products' list")

    products = []
    for node in nodes[:limit]:
        try:
            variants = [_parse_variant(v) for v in node.get("variants") or []]
            product = Product(
                id=node.get("id"),
                title=_text(node.get("title")),
                vendor=_text(node.get("vendor")),
                type=_text(node.get("product_type")),
                variants=variants,
            )
        except (AttributeError, TypeError, ValueError) as e:
            raise FeedError(f"Malformed product entry in feed: {e}") from e
        for variant in variants:
            variant.product_id = product.id
        products.append(product)

    return products
