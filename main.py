# main.py

"""Entry point for price_scraper (TUI, headless CLI or HTTP server)."""

import argparse
import asyncio
import logging
import sys

from price_scraper.config.logging_config import setup_logging
from price_scraper.config.settings import Settings

logger = logging.getLogger("price_scraper.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    countries = ", ".join(c["code"] for c in Settings.SUPPORTED_COUNTRIES)

    parser = argparse.ArgumentParser(
        prog="price_scraper",
        description="Multi-retailer product price comparison.",
        epilog=f"Supported countries: {countries}",
    )
    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Product search query. Omit to launch the interactive TUI.",
    )
    parser.add_argument(
        "-c",
        "--country",
        default=Settings.DEFAULT_COUNTRY,
        help=f"Country code (default: {Settings.DEFAULT_COUNTRY}).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        default=False,
        help="Start the HTTP API server.",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=None,
        help=f"Port for --serve (default: {Settings.PORT}).",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Run a connectivity health check on the country's retailers.",
    )
    return parser


def _run_tui() -> None:
    """Launch the interactive Textual TUI."""
    from price_scraper.ui.app import PriceSearchApp

    try:
        app = PriceSearchApp()
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("price_scraper TUI shutting down")


def _run_cli(args: argparse.Namespace) -> None:
    """Run headless CLI search and exit."""
    from price_scraper.cli.runner import cli_search

    exit_code = asyncio.run(
        cli_search(
            query=args.query,
            country=args.country,
            output_format=args.output_format,
        )
    )
    sys.exit(exit_code)


def _run_server(args: argparse.Namespace) -> None:
    """Serve the HTTP API until interrupted."""
    from price_scraper.server.app import run_server

    run_server(args.port)


def _run_health_check(args: argparse.Namespace) -> None:
    """Run retailer connectivity health check."""
    from price_scraper.cli.runner import run_health_check

    exit_code = asyncio.run(run_health_check(args.country))
    sys.exit(exit_code)


def main() -> None:
    """Route to server, health check, TUI (no query) or headless CLI."""
    log_file = setup_logging()
    logger.info("price_scraper starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    if args.serve:
        _run_server(args)
    elif args.health:
        _run_health_check(args)
    elif args.query is None:
        _run_tui()
    else:
        _run_cli(args)


if __name__ == "__main__":
    main()
