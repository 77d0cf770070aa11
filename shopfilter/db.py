"""SQLite database schema and helpers for the product catalog."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

from shopfilter.models import Product

__all__ = [
    "DEFAULT_DB_PATH",
    "get_connection",
    "init_db",
    "upsert_product",
    "upsert_products",
    "get_all_products",
    "get_products_by_category",
    "search_products",
    "get_product_count",
    "row_to_product",
]

# Default database path
DEFAULT_DB_PATH = "data/products.db"

# Columns searched by search_products
_SEARCH_COLUMNS = ("name", "description", "brand", "category", "subcategory")


@contextmanager
def get_connection(db_path: str = DEFAULT_DB_PATH) -> Generator[sqlite3.Connection, None, None]:
    """Context manager for database connections."""
    # Ensure directory exists
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Initialize the database schema."""
    with get_connection(db_path) as conn:
        cursor = conn.cursor()

        # Position order is the catalog's natural order
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS products (
                position INTEGER PRIMARY KEY AUTOINCREMENT,
                id TEXT UNIQUE NOT NULL,
                category TEXT NOT NULL,
                subcategory TEXT,
                name TEXT NOT NULL DEFAULT '',
                description TEXT,
                brand TEXT,
                image_url TEXT,
                price REAL NOT NULL CHECK (price >= 0),
                discount INTEGER NOT NULL DEFAULT 0,
                discount_price REAL,
                rating REAL NOT NULL DEFAULT 0,
                is_new INTEGER NOT NULL DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_products_category ON products(category)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_products_subcategory ON products(subcategory)")

        conn.commit()


def _product_params(product: Product) -> Dict[str, Any]:
    return {
        "id": product.id,
        "category": product.category,
        "subcategory": product.subcategory,
        "name": product.name,
        "description": product.description,
        "brand": product.brand,
        "image_url": product.image_url,
        "price": product.price,
        "discount": int(product.discount),
        "discount_price": product.discount_price,
        "rating": product.rating,
        "is_new": int(product.is_new),
    }


_UPSERT_SQL = """
    INSERT INTO products (id, category, subcategory, name, description, brand,
                          image_url, price, discount, discount_price, rating, is_new)
    VALUES (:id, :category, :subcategory, :name, :description, :brand,
            :image_url, :price, :discount, :discount_price, :rating, :is_new)
    ON CONFLICT(id) DO UPDATE SET
        category = excluded.category,
        subcategory = excluded.subcategory,
        name = excluded.name,
        description = excluded.description,
        brand = excluded.brand,
        image_url = excluded.image_url,
        price = excluded.price,
        discount = excluded.discount,
        discount_price = excluded.discount_price,
        rating = excluded.rating,
        is_new = excluded.is_new,
        updated_at = CURRENT_TIMESTAMP
"""


def upsert_product(db_path: str, product: Product) -> None:
    """Insert or update a product by its identifier.

    Updating keeps the product's original position in the catalog.
    """
    with get_connection(db_path) as conn:
        conn.execute(_UPSERT_SQL, _product_params(product))
        conn.commit()


def upsert_products(db_path: str, products: List[Product]) -> int:
    """Insert or update many products in one transaction. Returns the count."""
    with get_connection(db_path) as conn:
        conn.executemany(_UPSERT_SQL, [_product_params(p) for p in products])
        conn.commit()
    return len(products)


def row_to_product(row: sqlite3.Row) -> Product:
    """Convert a products table row into a Product."""
    return Product(
        id=row["id"],
        category=row["category"],
        subcategory=row["subcategory"],
        name=row["name"] or "",
        description=row["description"],
        brand=row["brand"],
        image_url=row["image_url"],
        price=row["price"],
        discount=bool(row["discount"]),
        discount_price=row["discount_price"],
        rating=row["rating"],
        is_new=bool(row["is_new"]),
    )


def get_all_products(db_path: str = DEFAULT_DB_PATH) -> List[Product]:
    """Retrieve the whole catalog in insertion order."""
    with get_connection(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM products ORDER BY position")
        return [row_to_product(row) for row in cursor.fetchall()]


def get_products_by_category(db_path: str, slug: str) -> List[Product]:
    """Get products whose category or subcategory equals ``slug``.

    Args:
        db_path: Path to database.
        slug: Category or subcategory identifier.

    Returns:
        Matching products in insertion order; empty for an unknown slug.
    """
    with get_connection(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            "SELECT * FROM products WHERE category = ? OR subcategory = ? ORDER BY position",
            (slug, slug),
        )
        return [row_to_product(row) for row in cursor.fetchall()]


def search_products(db_path: str, query: str) -> List[Product]:
    """Case-insensitive substring search over the text columns.

    Args:
        db_path: Path to database.
        query: Free text; surrounding whitespace is ignored.

    Returns:
        Matching products in insertion order.
    """
    pattern = query.strip().lower()
    if not pattern:
        return []

    # Escape LIKE wildcards so the query is matched literally
    escaped = pattern.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    where = " OR ".join(
        f"LOWER(COALESCE({col}, '')) LIKE ? ESCAPE '\\'" for col in _SEARCH_COLUMNS
    )
    params = [f"%{escaped}%"] * len(_SEARCH_COLUMNS)

    with get_connection(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT * FROM products WHERE {where} ORDER BY position", params)
        return [row_to_product(row) for row in cursor.fetchall()]


def get_product_count(db_path: str = DEFAULT_DB_PATH, category: Optional[str] = None) -> int:
    """Get the number of products, optionally for one category or subcategory."""
    with get_connection(db_path) as conn:
        cursor = conn.cursor()
        if category:
            cursor.execute(
                "SELECT COUNT(*) as count FROM products WHERE category = ? OR subcategory = ?",
                (category, category),
            )
        else:
            cursor.execute("SELECT COUNT(*) as count FROM products")
        return cursor.fetchone()["count"]
