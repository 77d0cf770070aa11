"""Tests for the command-line interface."""

import pytest

from shopfilter import cli
from shopfilter.cli import format_price, list_categories, main, parse_args
from shopfilter.config import CatalogConfig
from shopfilter.csv_utils import load_products_from_csv, save_products_to_csv
from shopfilter.db import get_all_products


@pytest.fixture
def imported_db(tmp_path, db_path, catalog):
    csv_path = str(tmp_path / "catalog.csv")
    save_products_to_csv(catalog, csv_path)
    main(["--no-log-file", "--db", db_path, "--import-csv", csv_path])
    return db_path


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.category is None
        assert args.query is None
        assert args.select == []
        assert args.sort is None

    def test_query_options(self):
        args = parse_args(["--category", "electronics", "--select", "laptops", "audio", "--sort", "newest"])
        assert args.category == "electronics"
        assert args.select == ["laptops", "audio"]
        assert args.sort == "newest"

    def test_unknown_sort_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["--sort", "random"])


class TestMain:
    def test_import_csv(self, imported_db, catalog, capsys):
        assert get_all_products(imported_db) == catalog

    def test_category_query(self, imported_db, capsys):
        capsys.readouterr()
        main(["--no-log-file", "--db", imported_db, "--category", "electronics", "--sort", "price-desc"])
        out = capsys.readouterr().out

        assert "Electronics" in out
        assert "2 products found" in out
        assert out.index("Ultrabook 14") < out.index("Phone charger")

    def test_price_filter_and_export(self, imported_db, tmp_path, capsys):
        export_path = str(tmp_path / "result.csv")
        main([
            "--no-log-file", "--db", imported_db,
            "--max-price", "1500", "--sort", "price-asc",
            "--export-csv", export_path,
        ])

        assert [p.id for p in load_products_from_csv(export_path)] == ["B", "A"]
        out = capsys.readouterr().out
        assert "250 (was 500)" in out

    def test_empty_result(self, imported_db, capsys):
        main(["--no-log-file", "--db", imported_db, "--q", "telescope"])
        out = capsys.readouterr().out

        assert '0 products found' in out
        assert "Try adjusting your filters" in out

    def test_list_categories(self, capsys):
        main(["--no-log-file", "--list-categories"])
        out = capsys.readouterr().out

        assert "electronics: Electronics" in out
        assert "laptops: Laptops" in out

    def test_stats(self, imported_db, capsys):
        main(["--no-log-file", "--db", imported_db, "--stats"])
        out = capsys.readouterr().out

        assert "Total products: 3" in out
        assert "electronics: 2" in out
        assert "laptops: 1" in out


@pytest.mark.parametrize(
    "value, expected",
    [(250000, "250,000"), (1000.0, "1,000"), (12.5, "12.50"), (0, "0")],
)
def test_format_price(value, expected):
    assert format_price(value) == expected


class TestListCategories:
    def test_public_commands_exported(self):
        assert {"list_categories", "show_stats", "run_query", "main"} <= set(cli.__all__)

    def test_prints_price_bounds(self, capsys):
        list_categories(CatalogConfig(max_price=10000, price_step=500))
        out = capsys.readouterr().out

        assert "beauty: Beauty" in out
        assert "Price range: 0 - 10,000 (step 500)" in out
