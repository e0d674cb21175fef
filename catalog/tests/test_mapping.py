"""Tests for row-to-entity mapping."""

from datetime import datetime

import pytest

from catalog.db import get_connection
from catalog.exceptions import MappingError
from catalog.mapping import (
    PRODUCT_FIELDS,
    VARIANT_FIELDS,
    map_product_row,
    map_variant_row,
    map_variant_rows,
)


def _product_row(**overrides):
    row = {
        "id": 7,
        "title": "Linen Shirt",
        "vendor": "Acme",
        "type": "Shirts",
        "created_at": "2024-03-01 10:00:00.000000",
        "updated_at": "2024-03-02 11:30:00.500000",
    }
    row.update(overrides)
    return row


def _variant_row(**overrides):
    row = {
        "id": 70,
        "product_id": 7,
        "title": "M / Blue",
        "sku": "LS-M-B",
        "price": 39.9,
        "available": 1,
        "option1": "M",
        "option2": "Blue",
        "created_at": "2024-03-01 10:00:00.000000",
        "updated_at": "2024-03-01 10:00:00.000000",
    }
    row.update(overrides)
    return row


class TestProductMapping:
    def test_maps_every_column(self):
        product = map_product_row(_product_row())

        assert product.id == 7
        assert product.title == "Linen Shirt"
        assert product.vendor == "Acme"
        assert product.type == "Shirts"
        assert product.created_at == datetime(2024, 3, 1, 10, 0, 0)
        assert product.updated_at == datetime(2024, 3, 2, 11, 30, 0, 500000)
        assert product.variants == []

    @pytest.mark.parametrize("column", PRODUCT_FIELDS)
    def test_missing_column_raises(self, column):
        row = _product_row()
        del row[column]

        with pytest.raises(MappingError) as exc_info:
            map_product_row(row)

        assert exc_info.value.entity == "Product"
        assert exc_info.value.missing == [column]

    def test_null_timestamps_stay_none(self):
        product = map_product_row(_product_row(created_at=None, updated_at=None))
        assert product.created_at is None
        assert product.updated_at is None


class TestVariantMapping:
    def test_maps_every_column(self):
        variant = map_variant_row(_variant_row())

        assert variant.id == 70
        assert variant.product_id == 7
        assert variant.title == "M / Blue"
        assert variant.sku == "LS-M-B"
        assert variant.price == pytest.approx(39.9)
        assert variant.available is True
        assert (variant.option1, variant.option2) == ("M", "Blue")
        assert variant.is_persisted

    def test_available_zero_is_false(self):
        assert map_variant_row(_variant_row(available=0)).available is False

    def test_null_price_maps_to_zero(self):
        assert map_variant_row(_variant_row(price=None)).price == 0.0

    def test_reports_all_missing_columns(self):
        row = _variant_row()
        del row["sku"]
        del row["available"]

        with pytest.raises(MappingError) as exc_info:
            map_variant_row(row)

        assert exc_info.value.missing == ["available", "sku"]
        assert "Variant" in str(exc_info.value)

    def test_maps_sqlite_rows(self, db_path):
        with get_connection(db_path) as conn:
            rows = conn.execute(
                "SELECT 1 AS id, 2 AS product_id, 'T' AS title, 'S' AS sku, 1.5 AS price, "
                "0 AS available, NULL AS option1, NULL AS option2, "
                "'2024-01-01 00:00:00.000000' AS created_at, '2024-01-01 00:00:00.000000' AS updated_at"
            ).fetchall()

        (variant,) = map_variant_rows(rows)
        assert variant.id == 1
        assert variant.option1 is None
        assert variant.price == 1.5

    def test_partial_select_fails_loudly(self, db_path):
        with get_connection(db_path) as conn:
            row = conn.execute("SELECT 1 AS id, 'T' AS title").fetchone()

        with pytest.raises(MappingError) as exc_info:
            map_variant_row(row)

        assert set(exc_info.value.missing) == set(VARIANT_FIELDS) - {"id", "title"}
