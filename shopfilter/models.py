"""Data models for products, reference categories and filter state."""

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Optional, Tuple

__all__ = ["Product", "Category", "Subcategory", "FilterState", "SORT_KEYS", "MAX_PRICE"]

# Upper bound of the price slider (smallest currency unit of the storefront)
MAX_PRICE = 250000

# Closed set of sort criteria, in dropdown order
SORT_KEYS: Tuple[str, ...] = (
    "featured",
    "price-asc",
    "price-desc",
    "newest",
    "popular",
    "discount",
)


@dataclass(frozen=True)
class Product:
    """A single catalog entry as supplied by the product repository.

    Prices are in the storefront's currency unit. ``discount_price`` only
    counts when ``discount`` is set.
    """

    # Required fields
    id: str
    category: str
    price: float

    # Optional classification and pricing
    subcategory: Optional[str] = None
    discount: bool = False
    discount_price: Optional[float] = None
    rating: float = 0.0
    is_new: bool = False

    # Display / search fields
    name: str = ""
    description: Optional[str] = None
    brand: Optional[str] = None
    image_url: Optional[str] = None

    @property
    def effective_price(self) -> float:
        if self.discount and self.discount_price is not None:
            return self.discount_price
        return self.price


@dataclass(frozen=True)
class Category:
    id: str
    name: str


@dataclass(frozen=True)
class Subcategory:
    id: str
    name: str
    parent_id: str


@dataclass(frozen=True)
class FilterState:
    """Active filters of one catalog session.

    ``selected`` mixes category and subcategory identifiers in one flat set.
    Instances are immutable; the ``with_*`` helpers return updated copies.
    """

    selected: FrozenSet[str] = field(default_factory=frozenset)
    price_range: Tuple[float, float] = (0, MAX_PRICE)
    sort: str = "featured"

    def __post_init__(self) -> None:
        if not isinstance(self.selected, frozenset):
            object.__setattr__(self, "selected", frozenset(self.selected))
        if self.sort not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {self.sort!r}. Must be one of {SORT_KEYS}")
        low, high = self.price_range
        if low < 0:
            raise ValueError(f"Invalid price range: low {low} is negative")
        if low > high:
            raise ValueError(f"Invalid price range: low {low} exceeds high {high}")
        object.__setattr__(self, "price_range", (low, high))

    def with_selected(self, selected: Iterable[str]) -> "FilterState":
        return replace(self, selected=frozenset(selected))

    def with_price_range(self, low: float, high: float) -> "FilterState":
        return replace(self, price_range=(low, high))

    def with_sort(self, sort: str) -> "FilterState":
        return replace(self, sort=sort)
