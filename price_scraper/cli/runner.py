# price_scraper/cli/runner.py

"""Headless CLI search runner; reuses the async search service."""

import json
import logging
import sys

from rich.console import Console
from rich.table import Table

from price_scraper.models.product import Product
from price_scraper.services.search_service import (
    SearchService,
    normalise_country,
)

logger = logging.getLogger("price_scraper.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _print_table(products: list[Product]) -> None:
    """Render a Rich table of already price-ordered products."""
    table = Table(
        title="Price Comparison",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Product", max_width=60)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Currency", justify="center")
    table.add_column("Retailer", style="magenta")
    table.add_column("Link", overflow="fold", style="dim")

    for idx, p in enumerate(products, 1):
        table.add_row(
            str(idx),
            p.product_name[:60],
            p.price,
            p.currency,
            p.retailer,
            p.link,
        )

    Console().print(table)


async def cli_search(
    query: str,
    country: str | None,
    output_format: str,
    service: SearchService | None = None,
) -> int:
    """Run a headless search and return an exit code (0=ok, 1=none)."""
    country_code = normalise_country(country)
    search_service = service or SearchService()

    _err.print(
        f"[bold]Searching:[/bold] {query}  "
        f"[dim]country={country_code}[/dim]"
    )

    result = await search_service.search(query, country_code)

    if not result.products:
        _err.print("[yellow]No products found.[/yellow]")
        return 1

    priced = sum(1 for p in result.products if p.has_price)
    _err.print(
        f"[green]✓ {len(result.products)} products"
        f" ({priced} priced) from {result.candidate_count}"
        " candidate links[/green]"
    )

    if output_format == "table":
        _print_table(result.products)
    else:
        json.dump(
            [p.to_dict() for p in result.products],
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    return 0


async def run_health_check(country: str | None) -> int:
    """Run connectivity health check on a country's retailers."""
    from price_scraper.services.health_checker import HealthChecker

    country_code = normalise_country(country)
    _err.print(
        f"[bold]Running retailer health check ({country_code})...[/bold]"
    )
    checker = HealthChecker(country_code)
    results = await checker.check_all()

    table = Table(
        title="Retailer Health Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Retailer", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    any_down = False
    for r in results:
        if r.status == "ok":
            status = "[green]✅ OK[/green]"
        elif r.status == "slow":
            status = "[yellow]⚠️  SLOW[/yellow]"
        else:
            status = "[red]❌ DOWN[/red]"
            any_down = True

        latency = (
            f"{r.latency_ms:.0f}ms"
            if r.latency_ms > 0
            else "—"
        )
        table.add_row(
            r.source_id, status, latency, r.message,
        )

    Console().print(table)
    return 1 if any_down else 0
