# tests/test_price_normalizer.py

"""Tests for numeric price normalisation."""

import unittest

from price_scraper.models.product import PRICE_NOT_AVAILABLE, Product
from price_scraper.pricing.price_normalizer import (
    PRICE_SENTINEL,
    numeric_value,
)
from price_scraper.services.result_aggregator import sort_by_price


class TestNumericValue(unittest.TestCase):
    """numeric_value behaviour."""

    def test_well_formed_tokens(self) -> None:
        """Symbols and thousands separators are stripped."""
        cases = {
            "$19.99": 19.99,
            "₹82,999": 82999.0,
            "£1,299.50": 1299.5,
            "C$1,299.99": 1299.99,
            "INR1,299": 1299.0,
            "$10": 10.0,
        }
        for price, expected in cases.items():
            with self.subTest(price=price):
                self.assertAlmostEqual(numeric_value(price), expected)

    def test_missing_values_share_the_sentinel(self) -> None:
        """Empty, unavailable and garbage all map to the sentinel."""
        self.assertEqual(numeric_value(""), PRICE_SENTINEL)
        self.assertEqual(
            numeric_value(PRICE_NOT_AVAILABLE), PRICE_SENTINEL
        )
        self.assertEqual(numeric_value("not-a-number"), PRICE_SENTINEL)
        self.assertEqual(numeric_value(None), PRICE_SENTINEL)

    def test_multiple_decimal_points(self) -> None:
        """An unparseable remainder maps to the sentinel."""
        self.assertEqual(numeric_value("1.2.3"), PRICE_SENTINEL)

    def test_sentinel_sorts_after_real_prices(self) -> None:
        """The sentinel is above any realistic parsed price."""
        for price in ("$0.99", "₹1,19,900", "$99,999.99"):
            with self.subTest(price=price):
                self.assertLess(numeric_value(price), PRICE_SENTINEL)

    def test_lakh_scale_prices_sort_before_missing(self) -> None:
        """Rupee prices above a million still beat the unavailable marker."""
        self.assertLess(numeric_value("₹10,00,000"), PRICE_SENTINEL)
        products = [
            Product("Widget", PRICE_NOT_AVAILABLE, "INR", "https://a.in/1"),
            Product("Car", "₹12,50,000", "INR", "https://b.in/2"),
        ]
        self.assertEqual(
            [p.price for p in sort_by_price(products)],
            ["₹12,50,000", PRICE_NOT_AVAILABLE],
        )


if __name__ == "__main__":
    unittest.main()
