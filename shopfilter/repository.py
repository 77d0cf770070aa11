"""Product repositories consumed by the catalog selector and session.

A repository supplies the full catalog plus category and free-text lookups.
Both implementations return products in the catalog's natural order.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from shopfilter.db import (
    DEFAULT_DB_PATH,
    get_all_products,
    get_products_by_category,
    init_db,
    search_products,
)
from shopfilter.models import Product

__all__ = [
    "ProductRepository",
    "InMemoryProductRepository",
    "SQLiteProductRepository",
    "matches_text",
]

logger = logging.getLogger(__name__)


def matches_text(product: Product, query: str) -> bool:
    """Case-insensitive substring match over a product's text fields."""
    pattern = query.strip().lower()
    if not pattern:
        return False

    fields = (product.name, product.description, product.brand, product.category, product.subcategory)
    return any(pattern in value.lower() for value in fields if value)


class ProductRepository(ABC):
    """Source of catalog products."""

    @abstractmethod
    def get_all(self) -> List[Product]:
        """Return the full catalog in insertion order."""

    @abstractmethod
    def get_by_category(self, slug: str) -> List[Product]:
        """Return products whose category or subcategory equals ``slug``."""

    @abstractmethod
    def search_by_text(self, query: str) -> List[Product]:
        """Return products matching a free-text query."""


class InMemoryProductRepository(ProductRepository):
    """Repository over a list of products, kept in insertion order."""

    def __init__(self, products: Optional[Iterable[Product]] = None) -> None:
        self._products: List[Product] = list(products or [])

    def __len__(self) -> int:
        return len(self._products)

    def add(self, product: Product) -> None:
        self._products.append(product)

    def get_all(self) -> List[Product]:
        return list(self._products)

    def get_by_category(self, slug: str) -> List[Product]:
        return [p for p in self._products if p.category == slug or p.subcategory == slug]

    def search_by_text(self, query: str) -> List[Product]:
        return [p for p in self._products if matches_text(p, query)]


class SQLiteProductRepository(ProductRepository):
    """Repository backed by the SQLite catalog database.

    Queries run on demand, so the database is the single source of truth.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH) -> None:
        self.db_path = db_path
        init_db(db_path)

    def get_all(self) -> List[Product]:
        return get_all_products(self.db_path)

    def get_by_category(self, slug: str) -> List[Product]:
        products = get_products_by_category(self.db_path, slug)
        if not products:
            logger.info(f"No products found for category: {slug}")
        return products

    def search_by_text(self, query: str) -> List[Product]:
        products = search_products(self.db_path, query)
        logger.debug(f"Search {query!r}: {len(products)} products")
        return products
