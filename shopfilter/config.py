"""Configuration and reference data for the catalog filters."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv

from shopfilter.models import MAX_PRICE, Category, Subcategory

__all__ = [
    "MAX_PRICE",
    "PRICE_STEP",
    "FEATURED_SLUG",
    "DEFAULT_SORT",
    "SORT_OPTIONS",
    "CATEGORIES",
    "SUBCATEGORIES",
    "DB_PATH",
    "CatalogConfig",
    "DEFAULT_CONFIG",
    "load_config",
]

# Slider increment. Display only: set_price_range keeps exact values.
PRICE_STEP = 5000

# Navigation slug that means "no category constraint"
FEATURED_SLUG = "featured"

# Sort keys mapped to their display labels, in dropdown order
SORT_OPTIONS: Dict[str, str] = {
    "featured": "Featured",
    "price-asc": "Price: Low to High",
    "price-desc": "Price: High to Low",
    "newest": "Newest First",
    "popular": "Most Popular",
    "discount": "Biggest Discount",
}
DEFAULT_SORT = "featured"

# Storage path
DB_PATH = "data/products.db"


# =============================================================================
# Reference Data
# =============================================================================
# Fixed category tree shown in the filter sidebar. Not derived from products;
# identifiers must stay in sync with product category/subcategory values.

CATEGORIES: Tuple[Category, ...] = (
    Category("electronics", "Electronics"),
    Category("fashion", "Fashion"),
    Category("home-living", "Home & Living"),
    Category("beauty", "Beauty"),
)

SUBCATEGORIES: Tuple[Subcategory, ...] = (
    Subcategory("smartphones", "Smartphones", "electronics"),
    Subcategory("laptops", "Laptops", "electronics"),
    Subcategory("audio", "Audio & Headphones", "electronics"),
    Subcategory("wearables", "Wearables", "electronics"),
    Subcategory("men", "Men's Fashion", "fashion"),
    Subcategory("women", "Women's Fashion", "fashion"),
    Subcategory("accessories", "Accessories", "fashion"),
    Subcategory("furniture", "Furniture", "home-living"),
    Subcategory("kitchen", "Kitchen", "home-living"),
    Subcategory("lighting", "Lighting", "home-living"),
    Subcategory("skincare", "Skincare", "beauty"),
    Subcategory("makeup", "Makeup", "beauty"),
)


@dataclass(frozen=True)
class CatalogConfig:
    """Immutable reference data injected into selectors and sessions.

    ``price_step`` is the slider increment offered to front-ends; prices
    passed to the session are kept as given, only clamped to ``max_price``.

    Raises:
        ValueError: If a subcategory points at an unknown parent, or the
            price bounds are not positive.
    """

    categories: Tuple[Category, ...] = CATEGORIES
    subcategories: Tuple[Subcategory, ...] = SUBCATEGORIES
    max_price: float = MAX_PRICE
    price_step: float = PRICE_STEP
    featured_slug: str = FEATURED_SLUG

    def __post_init__(self) -> None:
        if self.max_price <= 0:
            raise ValueError(f"max_price must be positive, got {self.max_price}")
        if self.price_step <= 0:
            raise ValueError(f"price_step must be positive, got {self.price_step}")

        known = {c.id for c in self.categories}
        for sub in self.subcategories:
            if sub.parent_id not in known:
                raise ValueError(
                    f"Subcategory '{sub.id}' references unknown category '{sub.parent_id}'"
                )

    def get_category(self, category_id: str) -> Optional[Category]:
        """Look up a top-level category by identifier."""
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def get_subcategory(self, subcategory_id: str) -> Optional[Subcategory]:
        """Look up a subcategory by identifier."""
        for sub in self.subcategories:
            if sub.id == subcategory_id:
                return sub
        return None

    def subcategories_of(self, category_id: str) -> Tuple[Subcategory, ...]:
        return tuple(s for s in self.subcategories if s.parent_id == category_id)

    def is_known_id(self, identifier: str) -> bool:
        return self.get_category(identifier) is not None or self.get_subcategory(identifier) is not None

    def display_name(self, identifier: str) -> Optional[str]:
        """Display name of a category or subcategory, if the id is known."""
        item = self.get_category(identifier) or self.get_subcategory(identifier)
        return item.name if item else None


DEFAULT_CONFIG = CatalogConfig()


def load_config(env_path: Optional[Path] = None) -> CatalogConfig:
    """Build a config from the defaults plus environment overrides.

    Reads SHOPFILTER_MAX_PRICE and SHOPFILTER_PRICE_STEP, loading a .env file
    first when one is present.
    """
    load_dotenv(dotenv_path=env_path)

    max_price = float(os.getenv("SHOPFILTER_MAX_PRICE", str(MAX_PRICE)))
    price_step = float(os.getenv("SHOPFILTER_PRICE_STEP", str(PRICE_STEP)))
    return CatalogConfig(max_price=max_price, price_step=price_step)
