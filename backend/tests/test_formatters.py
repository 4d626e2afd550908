"""Tests for display formatting of money and dates"""

from datetime import date
from decimal import Decimal

import pytest

from app.services.formatters import (
    NBSP,
    format_currency,
    format_date,
    format_rate,
    format_short_date,
)


class TestCurrency:

    @pytest.mark.parametrize("amount,currency,locale,expected", [
        (Decimal("1050"), "AED", "en-AE", f"AED{NBSP}1,050.00"),
        (Decimal("123456.5"), "INR", "en-IN", "₹1,23,456.50"),
        (Decimal("12345678"), "INR", "en-IN", "₹1,23,45,678.00"),
        (Decimal("1234.5"), "GBP", "en-GB", "£1,234.50"),
        (Decimal("1234.5"), "EUR", "hu-HU", f"1{NBSP}234,50{NBSP}€"),
        (Decimal("999"), "GBP", "en-GB", "£999.00"),
    ])
    def test_locale_conventions(self, amount, currency, locale, expected):
        assert format_currency(amount, currency, locale) == expected

    def test_always_two_fraction_digits(self):
        assert format_currency(Decimal("2.49975"), "GBP", "en-GB") == "£2.50"
        assert format_currency(0, "GBP", "en-GB") == "£0.00"

    def test_half_up_rounding(self):
        assert format_currency(Decimal("0.125"), "GBP", "en-GB") == "£0.13"

    def test_negative_amount(self):
        assert format_currency(Decimal("-5"), "GBP", "en-GB") == "-£5.00"

    def test_unknown_locale_uses_us_style(self):
        assert format_currency(Decimal("1000"), "USD", "fr-CA") == "$1,000.00"

    def test_does_not_change_input(self):
        amount = Decimal("10.005")
        format_currency(amount, "GBP", "en-GB")

        assert amount == Decimal("10.005")


class TestDates:

    def test_long_date_us_order(self):
        assert format_date(date(2025, 1, 5), "en-US") == "January 5, 2025"

    def test_long_date_day_first(self):
        assert format_date(date(2025, 1, 5), "en-GB") == "5 January 2025"
        assert format_date(date(2025, 1, 5), "en-IN") == "5 January 2025"

    def test_long_date_hungarian(self):
        assert format_date(date(2025, 3, 9), "hu-HU") == "2025. március 9."

    def test_short_dates(self):
        assert format_short_date(date(2025, 1, 5), "en-US") == "01/05/2025"
        assert format_short_date(date(2025, 1, 5), "en-AE") == "05/01/2025"
        assert format_short_date(date(2025, 1, 5), "hu-HU") == "2025. 01. 05."


@pytest.mark.parametrize("rate,expected", [
    (Decimal("18"), "18%"),
    (Decimal("20"), "20%"),
    (Decimal("5.50"), "5.5%"),
])
def test_format_rate(rate, expected):
    assert format_rate(rate) == expected
