"""Filter and sort engine for the product listing.

Every call rebuilds its working frame from the products it is given, so
``apply_filters`` can be re-run on each filter change without carrying
state between calls. Filtering and ordering happen on a pandas frame of the
relevant keys; the original ``Product`` objects are returned in the
resulting order.
"""

import logging
from typing import AbstractSet, Dict, Iterable, List, Sequence, Tuple

import pandas as pd

from shopfilter.models import FilterState, Product

__all__ = [
    "effective_price",
    "discount_fraction",
    "products_to_frame",
    "filter_by_selection",
    "filter_by_price",
    "sort_products",
    "apply_filters",
    "toggle_selection",
]

logger = logging.getLogger(__name__)

# sort key -> (frame column, ascending); "featured" keeps input order
_SORT_COLUMNS: Dict[str, Tuple[str, bool]] = {
    "price-asc": ("effective_price", True),
    "price-desc": ("effective_price", False),
    "newest": ("is_new", False),
    "popular": ("rating", False),
    "discount": ("discount_fraction", False),
}


def effective_price(product: Product) -> float:
    """Discounted price when a discount is active and priced, else base price."""
    return product.effective_price


def discount_fraction(product: Product) -> float:
    """Share of the base price taken off by an active discount.

    Returns 0 for products without a discount and for zero-priced products.
    """
    if not product.discount or product.price <= 0:
        return 0.0
    return (product.price - effective_price(product)) / product.price


def products_to_frame(products: Sequence[Product]) -> pd.DataFrame:
    """Build a frame of filter/sort keys, indexed by position in ``products``."""
    return pd.DataFrame(
        {
            "category": [p.category for p in products],
            "subcategory": [p.subcategory for p in products],
            "effective_price": [float(effective_price(p)) for p in products],
            "is_new": [bool(p.is_new) for p in products],
            "rating": [float(p.rating) for p in products],
            "discount_fraction": [discount_fraction(p) for p in products],
        },
        index=pd.RangeIndex(len(products)),
    )


def filter_by_selection(df: pd.DataFrame, selected: AbstractSet[str]) -> pd.DataFrame:
    """Keep rows whose category OR subcategory is selected.

    An empty selection means no constraint.
    """
    if not selected or df.empty:
        return df

    values = list(selected)
    mask = df["category"].isin(values) | df["subcategory"].isin(values)
    return df[mask]


def filter_by_price(df: pd.DataFrame, low: float, high: float) -> pd.DataFrame:
    """Keep rows whose effective price lies in the inclusive [low, high]."""
    if df.empty:
        return df
    return df[df["effective_price"].between(low, high, inclusive="both")]


def sort_products(df: pd.DataFrame, sort: str) -> pd.DataFrame:
    """Order rows by ``sort``; ties keep their incoming relative order."""
    if sort == "featured" or df.empty:
        return df

    try:
        column, ascending = _SORT_COLUMNS[sort]
    except KeyError:
        raise ValueError(f"Unknown sort key: {sort!r}") from None

    return df.sort_values(column, ascending=ascending, kind="stable")


def apply_filters(products: Sequence[Product], state: FilterState) -> List[Product]:
    """Derive the displayed product list from the full catalog and a filter state.

    Steps run in a fixed order: selection filter, price filter, sort.

    Args:
        products: Full catalog, in its natural order.
        state: Active filter state.

    Returns:
        New list of the surviving products, possibly empty.
    """
    products = list(products)
    df = products_to_frame(products)

    before_count = len(df)
    df = filter_by_selection(df, state.selected)
    after_selection = len(df)

    low, high = state.price_range
    df = filter_by_price(df, low, high)
    df = sort_products(df, state.sort)

    logger.debug(
        f"Filters {sorted(state.selected)} price={state.price_range} sort={state.sort}: "
        f"{before_count} -> {after_selection} -> {len(df)}"
    )

    return [products[i] for i in df.index]


def toggle_selection(selected: Iterable[str], identifier: str) -> frozenset:
    """Remove ``identifier`` if selected, add it otherwise.

    Categories and subcategories share one flat set; selecting a category
    does not select its subcategories.
    """
    current = frozenset(selected)
    return current ^ {identifier}
