"""Command-line interface for browsing the filtered catalog."""

import argparse
import logging
from typing import List, Optional

from shopfilter.config import DB_PATH, SORT_OPTIONS, CatalogConfig, load_config
from shopfilter.csv_utils import import_csv_to_db, save_products_to_csv
from shopfilter.db import get_product_count, init_db
from shopfilter.logging_config import setup_logging
from shopfilter.models import Product
from shopfilter.repository import SQLiteProductRepository
from shopfilter.session import CatalogSession, Navigation

__all__ = ["main", "parse_args", "run_query", "show_stats", "list_categories", "format_price"]


def format_price(value: float) -> str:
    """Format a price with thousands separators, dropping a zero fraction."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Filter and sort the product catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Load a catalog CSV into the database
  python -m shopfilter.cli --import-csv data/catalog.csv

  # Electronics page, cheapest first
  python -m shopfilter.cli --category electronics --sort price-asc

  # All products, laptops only, up to 150000
  python -m shopfilter.cli --select laptops --max-price 150000

  # Search and export the result
  python -m shopfilter.cli --q headphones --export-csv data/headphones.csv

  # Show database statistics
  python -m shopfilter.cli --stats
        """,
    )

    # Navigation
    parser.add_argument("--category", metavar="SLUG", help="Navigation category slug")
    parser.add_argument("--q", dest="query", metavar="TEXT", help="Free-text search query")

    # Filter controls
    parser.add_argument(
        "--select",
        nargs="+",
        default=[],
        metavar="ID",
        help="Toggle category/subcategory identifiers (applied in order)",
    )
    parser.add_argument("--min-price", type=float, help="Lower price bound")
    parser.add_argument("--max-price", type=float, help="Upper price bound")
    parser.add_argument(
        "--sort",
        choices=list(SORT_OPTIONS.keys()),
        default=None,
        help=f"Sort order. Choices: {list(SORT_OPTIONS.keys())}",
    )

    # Database options
    parser.add_argument(
        "--db",
        default=DB_PATH,
        help=f"SQLite database path (default: {DB_PATH})",
    )
    parser.add_argument(
        "--import-csv",
        metavar="PATH",
        help="Import products from a CSV file into the database and exit",
    )
    parser.add_argument(
        "--export-csv",
        metavar="PATH",
        help="Write the filtered result to a CSV file",
    )

    # Info commands
    parser.add_argument("--stats", action="store_true", help="Show database statistics and exit")
    parser.add_argument(
        "--list-categories",
        action="store_true",
        help="List reference categories and subcategories and exit",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--no-log-file", action="store_true", help="Don't write JSONL log files")

    return parser.parse_args(argv)


def show_stats(db_path: str, config: CatalogConfig) -> None:
    """Display database statistics."""
    init_db(db_path)

    print(f"\n{'='*50}")
    print(f"Database: {db_path}")
    print(f"{'='*50}")

    print(f"\nTotal products: {get_product_count(db_path)}")

    print("\nProducts by category:")
    for category in config.categories:
        print(f"  {category.id}: {get_product_count(db_path, category=category.id)}")
        for sub in config.subcategories_of(category.id):
            print(f"    {sub.id}: {get_product_count(db_path, category=sub.id)}")

    print()


def list_categories(config: CatalogConfig) -> None:
    print("Available categories:")
    for category in config.categories:
        print(f"  {category.id}: {category.name}")
        for sub in config.subcategories_of(category.id):
            print(f"    {sub.id}: {sub.name}")
    print(
        f"\nPrice range: 0 - {format_price(config.max_price)}"
        f" (step {format_price(config.price_step)})"
    )


def run_query(args: argparse.Namespace, config: CatalogConfig) -> List[Product]:
    """Replay the CLI options as session events and return the result."""
    session = CatalogSession(
        SQLiteProductRepository(args.db),
        Navigation(category_slug=args.category, search_query=args.query),
        config=config,
    )

    for identifier in args.select:
        session.toggle_category(identifier)

    if args.min_price is not None or args.max_price is not None:
        low, high = session.state.price_range
        session.set_price_range(
            low if args.min_price is None else args.min_price,
            high if args.max_price is None else args.max_price,
        )

    if args.sort:
        session.set_sort(args.sort)

    print(f"\n{session.title}")
    print(f"{session.result_count} products found")
    if session.is_empty:
        print("Try adjusting your filters or search criteria")
        return []

    for product in session.results:
        price = format_price(product.effective_price)
        if product.discount and product.discount_price is not None:
            price += f" (was {format_price(product.price)})"
        flags = " [new]" if product.is_new else ""
        print(f"  {product.id:<12} {product.name[:40]:<40} {price:>24}  {product.rating:.1f}{flags}")

    return session.results


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for CLI."""
    args = parse_args(argv)
    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_to_file=not args.no_log_file,
    )
    config = load_config()

    if args.list_categories:
        list_categories(config)
        return

    if args.stats:
        show_stats(args.db, config)
        return

    if args.import_csv:
        count = import_csv_to_db(args.import_csv, args.db)
        print(f"Imported {count} products into {args.db}")
        return

    results = run_query(args, config)

    if args.export_csv:
        save_products_to_csv(results, args.export_csv)
        print(f"\nExported {len(results)} products to {args.export_csv}")


if __name__ == "__main__":
    main()
