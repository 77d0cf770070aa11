"""Catalog page session: owns the filter state and the displayed products.

Usage:
    session = CatalogSession(repository, Navigation(category_slug="electronics"))
    session.set_sort("price-asc")
    session.toggle_category("laptops")
    for product in session.results:
        ...

Every mutator recomputes the displayed list synchronously from the full
catalog and the new state, then notifies subscribers.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from shopfilter.config import DEFAULT_CONFIG, DEFAULT_SORT, CatalogConfig
from shopfilter.engine import apply_filters, toggle_selection
from shopfilter.logging_config import log_filter_event
from shopfilter.models import FilterState, Product, Subcategory
from shopfilter.repository import ProductRepository
from shopfilter.selector import page_title, seed_selection, select_initial

__all__ = ["Navigation", "CatalogSession"]

logger = logging.getLogger(__name__)

Listener = Callable[[List[Product]], None]


@dataclass(frozen=True)
class Navigation:
    """Route parameters read once per navigation."""

    category_slug: Optional[str] = None
    search_query: Optional[str] = None


class CatalogSession:
    """Filter state and working result for one catalog page.

    Right after navigation the displayed list is the selector's output. The
    first filter or sort change switches to the engine's output over the
    full catalog.
    """

    def __init__(
        self,
        repository: ProductRepository,
        navigation: Optional[Navigation] = None,
        config: CatalogConfig = DEFAULT_CONFIG,
    ) -> None:
        self.repository = repository
        self.config = config
        self._listeners: List[Listener] = []
        self._navigation = Navigation()
        self._catalog: List[Product] = []
        self._initial: List[Product] = []
        self._results: List[Product] = []
        self._state = self.default_state()
        self.navigate(navigation or Navigation())

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def navigation(self) -> Navigation:
        return self._navigation

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def results(self) -> List[Product]:
        return list(self._results)

    @property
    def initial_products(self) -> List[Product]:
        return list(self._initial)

    @property
    def result_count(self) -> int:
        return len(self._results)

    @property
    def is_empty(self) -> bool:
        return not self._results

    @property
    def title(self) -> str:
        return page_title(
            self._navigation.category_slug,
            self._navigation.search_query,
            self.config,
        )

    @property
    def visible_subcategories(self) -> List[Subcategory]:
        """Subcategories of the selected top-level categories, in config order."""
        return [
            sub
            for category in self.config.categories
            if category.id in self._state.selected
            for sub in self.config.subcategories_of(category.id)
        ]

    def default_state(self) -> FilterState:
        """Seeded state for the current navigation."""
        return FilterState(
            selected=seed_selection(self._navigation.category_slug, self.config),
            price_range=(0, self.config.max_price),
            sort=DEFAULT_SORT,
        )

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def navigate(self, navigation: Navigation) -> None:
        """Enter a new navigation context, resetting filters to its seed."""
        self._navigation = navigation
        self._catalog = self.repository.get_all()
        self._initial = select_initial(
            self.repository,
            category_slug=navigation.category_slug,
            search_query=navigation.search_query,
            config=self.config,
        )
        self._state = self.default_state()
        self._results = list(self._initial)

        log_filter_event("navigate", {
            "category_slug": navigation.category_slug,
            "search_query": navigation.search_query,
            "catalog_size": len(self._catalog),
            "initial_count": len(self._initial),
        })
        self._notify()

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def toggle_category(self, identifier: str) -> None:
        if not self.config.is_known_id(identifier):
            logger.warning(f"Toggling identifier not in reference data: {identifier}")
        self._set_state(self._state.with_selected(toggle_selection(self._state.selected, identifier)))

    def set_price_range(self, low: float, high: float) -> None:
        """Set the price interval, clamped to [0, max_price].

        Crossed endpoints are swapped so that low <= high holds.
        """
        low, high = self._clamp_price(low), self._clamp_price(high)
        if low > high:
            low, high = high, low
        self._set_state(self._state.with_price_range(low, high))

    def set_sort(self, sort: str) -> None:
        """Choose the sort key.

        Raises:
            ValueError: If ``sort`` is not one of the known sort keys.
        """
        self._set_state(self._state.with_sort(sort))

    def clear_filters(self) -> None:
        """Reset price, sort and selection to the navigation's defaults."""
        state = self.default_state()
        log_filter_event("clear", {"selected": sorted(state.selected)}, level=logging.DEBUG)
        self._set_state(state)

    def recompute(self) -> List[Product]:
        """Re-derive the displayed list from the full catalog and current state."""
        self._results = apply_filters(self._catalog, self._state)

        log_filter_event("recompute", {
            "selected": sorted(self._state.selected),
            "price_range": list(self._state.price_range),
            "sort": self._state.sort,
            "result_count": len(self._results),
        }, level=logging.DEBUG)
        self._notify()
        return self.results

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback for result changes. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _set_state(self, state: FilterState) -> None:
        self._state = state
        self.recompute()

    def _clamp_price(self, value: float) -> float:
        return min(max(value, 0), self.config.max_price)

    def _notify(self) -> None:
        results = self.results
        for listener in list(self._listeners):
            listener(results)

    def __repr__(self) -> str:
        return (
            f"CatalogSession(navigation={self._navigation!r}, "
            f"state={self._state!r}, results={len(self._results)})"
        )
