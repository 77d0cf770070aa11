"""Shared fixtures for the shopfilter test suite."""

import logging

import pytest

from shopfilter.models import Product
from shopfilter.repository import InMemoryProductRepository


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging between tests."""
    yield
    logger = logging.getLogger("shopfilter")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def product_a():
    return Product(id="A", category="electronics", price=1000, name="Phone charger")


@pytest.fixture
def product_b():
    return Product(
        id="B",
        category="fashion",
        price=500,
        discount=True,
        discount_price=250,
        name="Linen shirt",
    )


@pytest.fixture
def product_c():
    return Product(
        id="C",
        category="electronics",
        subcategory="laptops",
        price=2000,
        name="Ultrabook 14",
        brand="Acme",
    )


@pytest.fixture
def catalog(product_a, product_b, product_c):
    """The three-product catalog used by the scenario tests."""
    return [product_a, product_b, product_c]


@pytest.fixture
def repository(catalog):
    return InMemoryProductRepository(catalog)


@pytest.fixture
def mixed_catalog():
    """A larger catalog with ties on price, rating and the new flag."""
    return [
        Product(id="p1", category="electronics", subcategory="audio", price=3000, rating=4.5, is_new=False, name="Earbuds"),
        Product(id="p2", category="beauty", subcategory="skincare", price=1500, rating=4.0, is_new=True, name="Serum"),
        Product(id="p3", category="electronics", subcategory="smartphones", price=3000, rating=4.5, is_new=True,
                discount=True, discount_price=2400, name="Phone X"),
        Product(id="p4", category="home-living", subcategory="kitchen", price=1500, rating=3.5, is_new=False, name="Kettle"),
        Product(id="p5", category="fashion", subcategory="men", price=800, rating=4.0, is_new=False,
                discount=True, discount_price=400, name="Jacket"),
        Product(id="p6", category="beauty", subcategory="makeup", price=0, rating=2.0, is_new=True,
                discount=True, discount_price=0, name="Free sample"),
        Product(id="p7", category="fashion", subcategory="women", price=1500, rating=5.0, is_new=False,
                discount=True, name="Dress"),
    ]


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "data" / "products.db")
