"""CSV import and export of catalog products."""

import csv
import logging
import os
from dataclasses import asdict
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from shopfilter.models import Product

__all__ = [
    "CSV_FIELDS",
    "load_products_from_csv",
    "product_to_row",
    "save_products_to_csv",
    "import_csv_to_db",
]

logger = logging.getLogger(__name__)

CSV_FIELDS = [
    "id", "category", "subcategory", "name", "description", "brand", "image_url",
    "price", "discount", "discount_price", "rating", "is_new",
]

_TRUE_VALUES = {"1", "true", "yes", "y", "t"}


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_bool(value: Any) -> bool:
    text = _clean(value)
    return text is not None and text.lower() in _TRUE_VALUES


def _parse_price(value: Any, field: str, line: int) -> Optional[float]:
    text = _clean(value)
    if text is None:
        return None
    try:
        price = float(text)
    except ValueError:
        raise ValueError(f"Line {line}: invalid {field} {text!r}") from None
    if price < 0:
        raise ValueError(f"Line {line}: {field} must be non-negative, got {price}")
    return price


def _row_to_product(row: Dict[str, Any], line: int) -> Product:
    product_id = _clean(row.get("id"))
    category = _clean(row.get("category"))
    if not product_id or not category:
        raise ValueError(f"Line {line}: 'id' and 'category' are required")

    price = _parse_price(row.get("price"), "price", line)
    if price is None:
        raise ValueError(f"Line {line}: 'price' is required")

    rating_text = _clean(row.get("rating"))
    try:
        rating = float(rating_text) if rating_text else 0.0
    except ValueError:
        raise ValueError(f"Line {line}: invalid rating {rating_text!r}") from None

    return Product(
        id=product_id,
        category=category,
        subcategory=_clean(row.get("subcategory")),
        name=_clean(row.get("name")) or "",
        description=_clean(row.get("description")),
        brand=_clean(row.get("brand")),
        image_url=_clean(row.get("image_url")),
        price=price,
        discount=_parse_bool(row.get("discount")),
        discount_price=_parse_price(row.get("discount_price"), "discount_price", line),
        rating=rating,
        is_new=_parse_bool(row.get("is_new")),
    )


def load_products_from_csv(path: str) -> List[Product]:
    """Load products from a CSV file, keeping file order.

    Only 'id', 'category' and 'price' are required columns; everything else
    falls back to the Product defaults.

    Raises:
        ValueError: On a missing required column or an unparseable value.
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False)

    missing = {"id", "category", "price"} - set(df.columns)
    if missing:
        raise ValueError(f"{path}: missing required columns {sorted(missing)}")

    # Line 1 is the header
    products = [
        _row_to_product(row, line)
        for line, row in enumerate(df.to_dict(orient="records"), start=2)
    ]
    logger.info(f"Loaded {len(products)} products from {path}")
    return products


def product_to_row(product: Product) -> Dict[str, Any]:
    """Convert a Product into a CSV-ready row."""
    row = asdict(product)
    for key in ("discount", "is_new"):
        row[key] = "true" if row[key] else "false"
    return {key: ("" if row[key] is None else row[key]) for key in CSV_FIELDS}


def save_products_to_csv(products: Iterable[Product], path: str) -> int:
    """Write products to CSV in the given order. Returns the row count."""
    rows = [product_to_row(p) for p in products]

    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        writer.writerows(rows)

    logger.info(f"Saved {len(rows)} products to {path}")
    return len(rows)


def import_csv_to_db(csv_path: str, db_path: str) -> int:
    """Load a CSV catalog into the SQLite database. Returns the product count."""
    from shopfilter.db import init_db, upsert_products

    products = load_products_from_csv(csv_path)
    init_db(db_path)
    return upsert_products(db_path, products)
