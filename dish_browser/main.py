"""Entry point for the dish-browser Textual app."""

from __future__ import annotations

import argparse

from dish_browser.api import CatalogApi
from dish_browser.catalog_app import CatalogBrowserApp
from dish_browser.config import API_BASE_URL, REQUEST_TIMEOUT_SECONDS
from dish_browser.debug_log import set_debug_log_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dish-browser", description="Browse a restaurant's dish catalog.")
    parser.add_argument("restaurant_id", help="Restaurant identifier to open")
    parser.add_argument("--base-url", default=API_BASE_URL, help="Catalog service base URL (default: %(default)s)")
    parser.add_argument(
        "--timeout",
        type=float,
        default=REQUEST_TIMEOUT_SECONDS,
        help="Per-request timeout in seconds (default: %(default)s)",
    )
    parser.add_argument("--debug-log", help="Write the debug log to this file")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the Textual application."""
    args = build_parser().parse_args(argv)
    if args.debug_log:
        set_debug_log_path(args.debug_log)
    api = CatalogApi(base_url=args.base_url, timeout_seconds=args.timeout)
    CatalogBrowserApp(args.restaurant_id, api=api, owns_api=True).run()


if __name__ == "__main__":
    main()
