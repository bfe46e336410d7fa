# price_scraper/ui/app.py

"""Terminal UI for the price_scraper comparison service."""

import logging
import webbrowser
from typing import cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Select,
    Static,
)

from price_scraper.config.settings import Settings
from price_scraper.models.product import Product
from price_scraper.pricing.price_normalizer import (
    PRICE_SENTINEL,
    numeric_value,
)
from price_scraper.services.result_aggregator import sort_by_price
from price_scraper.services.search_service import SearchService

logger = logging.getLogger("price_scraper.ui")


class PriceSearchApp(App[object]):
    """Terminal UI for the price_scraper comparison service."""

    CSS_PATH = "styles.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("p", "sort_price", "Price Sort"),
    ]

    def __init__(self, service: SearchService | None = None) -> None:
        super().__init__()
        self.products: list[Product] = []
        self.settings = Settings()
        self._service = service

    @property
    def service(self) -> SearchService:
        """Search service, created on first search."""
        if self._service is None:
            self._service = SearchService()
        return self._service

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        country_options = [
            (c["label"], c["code"])
            for c in self.settings.SUPPORTED_COUNTRIES
        ]

        yield Header()
        yield Container(
            Static("🛒 Product Price Comparison", id="title"),

            Horizontal(
                Input(
                    placeholder="e.g. iPhone 16 Pro, 128GB",
                    id="search_input",
                ),
                Select(
                    country_options,
                    value=self.settings.DEFAULT_COUNTRY,
                    allow_blank=False,
                    id="country_select",
                ),
                Button("Search", variant="primary", id="search_btn"),
                id="search_bar",
            ),

            Static("Ready", id="status"),
            cast(
                DataTable[str | Text],
                DataTable(
                    id="results_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            id="main_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Configure the results table columns on startup."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#results_table", DataTable),
        )
        table.add_columns("Product", "Price", "Currency", "Retailer")

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button click events."""
        if event.button.id == "search_btn":
            await self.perform_search()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle Enter key in the search input."""
        if event.input.id == "search_input":
            await self.perform_search()

    def _selected_country(self) -> str:
        select = cast(
            Select[str], self.query_one("#country_select", Select)
        )
        value = select.value
        if isinstance(value, str):
            return value
        return self.settings.DEFAULT_COUNTRY

    async def perform_search(self) -> None:
        """Run a price search for the current query and country."""
        search_input = self.query_one("#search_input", Input)
        query = search_input.value.strip()
        if not query:
            self.notify(
                "Please enter a search term", severity="warning"
            )
            return

        country = self._selected_country()
        self.products = []
        status = self.query_one("#status", Static)
        self.populate_table()
        status.update(f"🔍 Searching '{query}' ({country})...")

        try:
            result = await self.service.search(query, country)
        except Exception as exc:
            logger.error(
                "Search failed for query '%s': %s",
                query,
                exc,
                exc_info=True,
            )
            self.notify(f"Error: {exc}", severity="error")
            status.update("❌ Search failed")
            return

        self.products = list(result.products)
        self.populate_table()

        if not self.products:
            status.update("❌ No products found")
        else:
            status.update(f"✅ Found {len(self.products)} products")

    def populate_table(self) -> None:
        """Fill the DataTable with current product results."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#results_table", DataTable),
        )
        table.clear()
        if not self.products:
            return

        min_price = min(numeric_value(p.price) for p in self.products)

        for p in self.products:
            value = numeric_value(p.price)
            is_cheapest = value == min_price and value < PRICE_SENTINEL
            price_style = "bold green" if is_cheapest else ""
            table.add_row(
                p.product_name[:60],
                Text(p.price, style=price_style),
                p.currency,
                p.retailer,
            )

    def on_data_table_row_selected(
        self, event: DataTable.RowSelected
    ) -> None:
        """Open the selected product's link in the default browser."""
        if 0 <= event.cursor_row < len(self.products):
            webbrowser.open(self.products[event.cursor_row].link)

    def action_sort_price(self) -> None:
        """Sort products by price, ascending."""
        self.products = sort_by_price(self.products)
        self.populate_table()
