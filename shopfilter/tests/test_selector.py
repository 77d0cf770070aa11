"""Tests for initial product selection."""

from unittest.mock import MagicMock

from shopfilter.config import CatalogConfig
from shopfilter.repository import ProductRepository
from shopfilter.selector import page_title, seed_selection, select_initial


class TestSelectInitial:
    def test_no_navigation_returns_full_catalog(self, repository, catalog):
        assert select_initial(repository) == catalog

    def test_featured_slug_returns_full_catalog(self, repository, catalog):
        assert select_initial(repository, category_slug="featured") == catalog

    def test_custom_featured_slug_returns_full_catalog(self, repository, catalog):
        config = CatalogConfig(featured_slug="all")
        assert select_initial(repository, category_slug="all", config=config) == catalog
        assert select_initial(repository, category_slug="featured", config=config) == []

    def test_category_slug_matches_category(self, repository, product_a, product_c):
        assert select_initial(repository, category_slug="electronics") == [product_a, product_c]

    def test_category_slug_matches_subcategory(self, repository, product_c):
        assert select_initial(repository, category_slug="laptops") == [product_c]

    def test_unknown_slug_is_empty(self, repository):
        assert select_initial(repository, category_slug="garden") == []

    def test_search_query_wins_over_slug(self, repository, product_b):
        assert select_initial(repository, category_slug="electronics", search_query="linen") == [product_b]

    def test_empty_search_query_falls_back_to_slug(self, repository, product_b):
        assert select_initial(repository, category_slug="fashion", search_query="") == [product_b]

    def test_unmatched_query_is_empty(self, repository):
        assert select_initial(repository, search_query="telescope") == []

    def test_search_result_returned_verbatim(self, product_c, product_a):
        repo = MagicMock(spec=ProductRepository)
        repo.search_by_text.return_value = [product_c, product_a]

        result = select_initial(repo, category_slug="fashion", search_query="anything")

        assert result == [product_c, product_a]
        repo.search_by_text.assert_called_once_with("anything")
        repo.get_by_category.assert_not_called()
        repo.get_all.assert_not_called()

    def test_slug_delegates_to_repository(self):
        repo = MagicMock(spec=ProductRepository)
        repo.get_by_category.return_value = []

        assert select_initial(repo, category_slug="beauty") == []
        repo.get_by_category.assert_called_once_with("beauty")


class TestSeedSelection:
    def test_category_slug_is_seeded(self):
        assert seed_selection("electronics") == {"electronics"}

    def test_featured_slug_is_not_seeded(self):
        assert seed_selection("featured") == frozenset()

    def test_missing_slug_is_not_seeded(self):
        assert seed_selection(None) == frozenset()
        assert seed_selection("") == frozenset()

    def test_unknown_slug_is_still_seeded(self):
        assert seed_selection("garden") == {"garden"}

    def test_custom_featured_slug(self):
        config = CatalogConfig(featured_slug="all")
        assert seed_selection("all", config) == frozenset()
        assert seed_selection("featured", config) == {"featured"}


class TestPageTitle:
    def test_search_title(self):
        assert page_title("electronics", "usb cable") == 'Search Results for "usb cable"'

    def test_category_title(self):
        assert page_title("home-living") == "Home & Living"

    def test_unknown_category_title(self):
        assert page_title("garden") == "Products"

    def test_subcategory_slug_uses_generic_title(self):
        assert page_title("laptops") == "Products"

    def test_all_products_title(self):
        assert page_title() == "All Products"
