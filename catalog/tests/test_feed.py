"""Tests for the sample feed client, with the HTTP session mocked out."""

from unittest.mock import MagicMock

import pytest
import requests

from catalog.exceptions import FeedError
from catalog.feed import fetch_feed, parse_feed_products, validate_feed_url

FEED = "https://shop.example.com/products.json"


def _response(status_code=200, payload=None, json_error=None):
    resp = MagicMock()
    resp.status_code = status_code
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload if payload is not None else {"products": []}
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} error", response=resp
        )
    return resp


def _feed_product(product_id=1, variants=2, **overrides):
    node = {
        "id": product_id,
        "title": f"Product {product_id}",
        "vendor": "FAMME",
        "product_type": "Leggings",
        "variants": [
            {
                "id": product_id * 100 + i,
                "title": f"Size {i}",
                "sku": f"SKU-{product_id}-{i}",
                "price": "499.00",
                "available": i % 2 == 0,
                "option1": f"Size {i}",
                "option2": None,
            }
            for i in range(variants)
        ],
    }
    node.update(overrides)
    return node


class TestValidateFeedUrl:
    def test_accepts_https(self):
        assert validate_feed_url("  https://famme.no/products.json ") == "https://famme.no/products.json"

    @pytest.mark.parametrize(
        "url",
        ["", "   ", "javascript:alert(1)", "file:///etc/passwd", "ftp://example.com/feed.json", "https://"],
    )
    def test_rejects_bad_urls(self, url):
        with pytest.raises(FeedError):
            validate_feed_url(url)


class TestFetchFeed:
    def test_returns_json_payload(self):
        session = MagicMock()
        session.get.return_value = _response(payload={"products": [_feed_product()]})

        payload = fetch_feed(FEED, session=session, sleep=lambda _: None)

        assert payload["products"][0]["id"] == 1
        session.get.assert_called_once()
        assert session.get.call_args.args[0] == FEED

    def test_retries_on_server_error(self):
        session = MagicMock()
        session.get.side_effect = [_response(503), _response(payload={"products": []})]
        sleeps = []

        assert fetch_feed(FEED, session=session, sleep=sleeps.append) == {"products": []}
        assert session.get.call_count == 2
        assert len(sleeps) == 1

    def test_gives_up_after_retries(self):
        session = MagicMock()
        session.get.return_value = _response(503)

        with pytest.raises(FeedError, match="503"):
            fetch_feed(FEED, session=session, max_retries=2, sleep=lambda _: None)

        assert session.get.call_count == 3

    def test_client_error_is_not_retried(self):
        session = MagicMock()
        session.get.return_value = _response(404)

        with pytest.raises(FeedError, match="404"):
            fetch_feed(FEED, session=session, sleep=lambda _: None)

        assert session.get.call_count == 1

    def test_connection_errors_are_retried_then_raised(self):
        session = MagicMock()
        session.get.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(FeedError) as exc_info:
            fetch_feed(FEED, session=session, max_retries=1, sleep=lambda _: None)

        assert session.get.call_count == 2
        assert exc_info.value.url == FEED
        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)

    def test_invalid_json(self):
        session = MagicMock()
        session.get.return_value = _response(json_error=ValueError("not json"))

        with pytest.raises(FeedError, match="valid JSON"):
            fetch_feed(FEED, session=session, sleep=lambda _: None)

    def test_invalid_url_never_hits_network(self):
        session = MagicMock()

        with pytest.raises(FeedError):
            fetch_feed("javascript:alert(1)", session=session)

        session.get.assert_not_called()


class TestParseFeedProducts:
    def test_maps_products_and_variants(self):
        (product,) = parse_feed_products({"products": [_feed_product(7)]})

        assert product.id == 7
        assert product.title == "Product 7"
        assert product.vendor == "FAMME"
        assert product.type == "Leggings"
        assert len(product.variants) == 2

        first = product.variants[0]
        assert first.id == 700
        assert first.product_id == 7
        assert first.price == 499.0
        assert first.available is True
        assert first.option1 == "Size 0"
        assert first.option2 is None

    def test_respects_limit(self):
        payload = {"products": [_feed_product(i) for i in range(1, 13)]}

        products = parse_feed_products(payload, limit=10)

        assert [p.id for p in products] == list(range(1, 11))

    def test_missing_variants_gives_empty_list(self):
        node = _feed_product(3)
        del node["variants"]

        (product,) = parse_feed_products({"products": [node]})
        assert product.variants == []

    def test_empty_price_is_zero(self):
        node = _feed_product(4, variants=1)
        node["variants"][0]["price"] = ""

        (product,) = parse_feed_products({"products": [node]})
        assert product.variants[0].price == 0.0

    @pytest.mark.parametrize("payload", [{}, {"products": None}, {"products": "nope"}, []])
    def test_payload_without_products_list(self, payload):
        with pytest.raises(FeedError):
            parse_feed_products(payload)

    def test_malformed_price_raises_feed_error(self):
        node = _feed_product(5, variants=1)
        node["variants"][0]["price"] = "free"

        with pytest.raises(FeedError):
            parse_feed_products({"products": [node]})
