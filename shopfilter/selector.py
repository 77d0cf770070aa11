"""Initial product set for a navigation context.

Runs once per navigation change. The filter engine later works over the
full catalog, so this output is only what the page shows before any filter
control has been touched.
"""

import logging
from typing import FrozenSet, List, Optional

from shopfilter.config import DEFAULT_CONFIG, CatalogConfig
from shopfilter.models import Product
from shopfilter.repository import ProductRepository

__all__ = ["select_initial", "seed_selection", "page_title"]

logger = logging.getLogger(__name__)


def select_initial(
    repository: ProductRepository,
    category_slug: Optional[str] = None,
    search_query: Optional[str] = None,
    config: CatalogConfig = DEFAULT_CONFIG,
) -> List[Product]:
    """Resolve the initial product list.

    A non-empty search query wins over the category slug; without either,
    or with the featured slug, the full catalog is returned. Unknown slugs
    and unmatched queries give an empty list.

    Args:
        repository: Product repository.
        category_slug: Category or subcategory identifier from the route.
        search_query: Free-text query from the route.
        config: Reference data naming the featured slug.

    Returns:
        Products in the order the repository supplies them.
    """
    if search_query:
        products = repository.search_by_text(search_query)
        logger.info(f"Search {search_query!r} returned {len(products)} products")
        return products

    if category_slug and category_slug != config.featured_slug:
        products = repository.get_by_category(category_slug)
        logger.info(f"Category {category_slug!r} returned {len(products)} products")
        return products

    return repository.get_all()


def seed_selection(
    category_slug: Optional[str],
    config: CatalogConfig = DEFAULT_CONFIG,
) -> FrozenSet[str]:
    """Default selection for a navigation category.

    The featured slug means no constraint.
    """
    if category_slug and category_slug != config.featured_slug:
        return frozenset({category_slug})
    return frozenset()


def page_title(
    category_slug: Optional[str] = None,
    search_query: Optional[str] = None,
    config: CatalogConfig = DEFAULT_CONFIG,
) -> str:
    if search_query:
        return f'Search Results for "{search_query}"'

    if category_slug:
        category = config.get_category(category_slug)
        return category.name if category else "Products"

    return "All Products"
