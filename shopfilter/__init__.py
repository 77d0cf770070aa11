"""Product catalog filtering and sorting package."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from shopfilter.config import (
    CATEGORIES,
    DEFAULT_CONFIG,
    FEATURED_SLUG,
    MAX_PRICE,
    PRICE_STEP,
    SORT_OPTIONS,
    SUBCATEGORIES,
    CatalogConfig,
    load_config,
)
from shopfilter.engine import apply_filters, discount_fraction, effective_price, toggle_selection
from shopfilter.models import Category, FilterState, Product, Subcategory
from shopfilter.repository import (
    InMemoryProductRepository,
    ProductRepository,
    SQLiteProductRepository,
)
from shopfilter.selector import page_title, seed_selection, select_initial
from shopfilter.session import CatalogSession, Navigation

__all__ = [
    # Version
    "__version__",
    # Config
    "CATEGORIES",
    "SUBCATEGORIES",
    "MAX_PRICE",
    "PRICE_STEP",
    "FEATURED_SLUG",
    "SORT_OPTIONS",
    "CatalogConfig",
    "DEFAULT_CONFIG",
    "load_config",
    # Models
    "Product",
    "Category",
    "Subcategory",
    "FilterState",
    # Repositories
    "ProductRepository",
    "InMemoryProductRepository",
    "SQLiteProductRepository",
    # Core functions
    "apply_filters",
    "effective_price",
    "discount_fraction",
    "toggle_selection",
    "select_initial",
    "seed_selection",
    "page_title",
    "CatalogSession",
    "Navigation",
]
