"""SQL statements for the products and variants tables.

All values are bound as parameters. The only interpolated fragments are the
ORDER BY clause, built from an allow-listed field, and the placeholder list
of DELETE_VARIANTS_BY_IDS.
"""

# ========== PRODUCT QUERIES ==========

PRODUCT_COLUMNS = "id, title, vendor, type, created_at, updated_at"

GET_ALL_PRODUCTS = f"""
    SELECT {PRODUCT_COLUMNS}
    FROM products
    ORDER BY updated_at DESC
"""

GET_PRODUCTS_SORTED = """
    SELECT {columns}
    FROM products
    ORDER BY {sort_field} {direction}
"""

FIND_PRODUCT_BY_ID = f"""
    SELECT {PRODUCT_COLUMNS}
    FROM products
    WHERE id = ?
"""

FIND_PRODUCTS_BY_TITLE_LIKE = f"""
    SELECT {PRODUCT_COLUMNS}
    FROM products
    WHERE unicode_lower(title) LIKE unicode_lower(?)
    ORDER BY updated_at DESC
"""

FIND_PRODUCTS_BY_TITLE_LIKE_SORTED = """
    SELECT {columns}
    FROM products
    WHERE unicode_lower(title) LIKE unicode_lower(?)
    ORDER BY {sort_field} {direction}
"""

SAVE_PRODUCT = """
    INSERT INTO products (id, title, vendor, type, created_at, updated_at)
    VALUES (?, ?, ?, ?, ?, ?)
"""

UPDATE_PRODUCT = """
    UPDATE products
    SET title = ?,
        vendor = ?,
        type = ?,
        updated_at = ?
    WHERE id = ?
"""

DELETE_PRODUCT_BY_ID = "DELETE FROM products WHERE id = ?"

EXISTS_PRODUCT_BY_ID = "SELECT 1 FROM products WHERE id = ? LIMIT 1"

PRODUCT_COUNT = "SELECT COUNT(*) AS count FROM products"

# ========== VARIANT QUERIES ==========

VARIANT_COLUMNS = (
    "id, product_id, title, sku, price, available, "
    "option1, option2, created_at, updated_at"
)

GET_ALL_VARIANTS_OF_A_PRODUCT = f"""
    SELECT {VARIANT_COLUMNS}
    FROM variants
    WHERE product_id = ?
    ORDER BY created_at, rowid
"""

GET_VARIANT_IDS_BY_PRODUCT_ID = "SELECT id FROM variants WHERE product_id = ? ORDER BY id"

SAVE_VARIANT = """
    INSERT INTO variants (
        id, product_id, title, sku, price, available,
        option1, option2, created_at, updated_at
    )
    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
"""

# Scoped by product_id so a variant id from another product is never touched
UPDATE_VARIANT = """
    UPDATE variants
    SET title = ?,
        sku = ?,
        price = ?,
        option1 = ?,
        option2 = ?,
        available = ?,
        updated_at = ?
    WHERE id = ? AND product_id = ?
"""

DELETE_VARIANTS_BY_PRODUCT_ID = "DELETE FROM variants WHERE product_id = ?"

DELETE_VARIANTS_BY_IDS = "DELETE FROM variants WHERE id IN ({placeholders})"

VARIANT_COUNT = "SELECT COUNT(*) AS count FROM variants"
