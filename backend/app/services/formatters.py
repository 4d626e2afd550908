"""Display formatting for amounts and dates.

Output follows the conventions of the four locales we invoice in
(en-AE, en-IN, en-GB, hu-HU) plus en-US as the fallback. Presentation only:
nothing formatted here feeds back into a calculation.
"""
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

NBSP = "\u00a0"

CURRENCY_SYMBOLS = {
    "AED": "AED" + NBSP,
    "INR": "₹",
    "EUR": "€",
    "GBP": "£",
    "USD": "$",
}

EN_MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

HU_MONTHS = [
    "január", "február", "március", "április", "május", "június",
    "július", "augusztus", "szeptember", "október", "november", "december",
]

# group: separator between digit groups; decimal: fraction mark;
# indian: 3-then-2 grouping; symbol_after: "1 234,56 €" style
LOCALE_RULES = {
    "en-US": {"group": ",", "decimal": ".", "indian": False, "symbol_after": False, "day_first": False},
    "en-GB": {"group": ",", "decimal": ".", "indian": False, "symbol_after": False, "day_first": True},
    "en-AE": {"group": ",", "decimal": ".", "indian": False, "symbol_after": False, "day_first": True},
    "en-IN": {"group": ",", "decimal": ".", "indian": True, "symbol_after": False, "day_first": True},
    "hu-HU": {"group": NBSP, "decimal": ",", "indian": False, "symbol_after": True, "day_first": False},
}

CENT = Decimal("0.01")


def _rules(locale: str) -> dict:
    return LOCALE_RULES.get(locale or "", LOCALE_RULES["en-US"])


def _group_digits(digits: str, separator: str, indian: bool) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    size = 2 if indian else 3
    groups = []
    while len(head) > size:
        groups.insert(0, head[-size:])
        head = head[:-size]
    groups.insert(0, head)
    return separator.join(groups + [tail])


def format_currency(amount: Union[Decimal, float, int], currency: str, locale: str) -> str:
    """Render an amount with exactly two fraction digits.

    >>> format_currency(Decimal("123456.5"), "INR", "en-IN")
    '₹1,23,456.50'
    """
    rules = _rules(locale)
    value = Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    whole, fraction = f"{abs(value):.2f}".split(".")
    number = _group_digits(whole, rules["group"], rules["indian"]) + rules["decimal"] + fraction

    if rules["symbol_after"]:
        symbol = CURRENCY_SYMBOLS.get(currency, currency).strip()
        return f"{sign}{number}{NBSP}{symbol}"
    symbol = CURRENCY_SYMBOLS.get(currency, currency + NBSP)
    return f"{sign}{symbol}{number}"


def format_date(value: Union[date, datetime], locale: str) -> str:
    """Long form for documents, e.g. "January 5, 2025" (en-US) or "5 January 2025" (en-GB)."""
    if locale == "hu-HU":
        return f"{value.year}. {HU_MONTHS[value.month - 1]} {value.day}."
    month = EN_MONTHS[value.month - 1]
    if _rules(locale)["day_first"]:
        return f"{value.day} {month} {value.year}"
    return f"{month} {value.day}, {value.year}"


def format_short_date(value: Union[date, datetime], locale: str) -> str:
    """Numeric form, e.g. "05/01/2025" (en-GB) or "2025. 01. 05." (hu-HU)."""
    if locale == "hu-HU":
        return f"{value.year}. {value.month:02d}. {value.day:02d}."
    if _rules(locale)["day_first"]:
        return f"{value.day:02d}/{value.month:02d}/{value.year}"
    return f"{value.month:02d}/{value.day:02d}/{value.year}"


def format_rate(rate: Union[Decimal, float, int]) -> str:
    """18 -> "18%", 5.5 -> "5.5%"."""
    return f"{Decimal(str(rate)).normalize():f}%"
