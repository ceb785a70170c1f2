"""Locale-aware number and currency formatting.

Only the handful of conventions the calculator is used with are known; each
locale defines its group separator, decimal separator and where the currency
symbol goes. Amounts are rounded with ROUND_HALF_UP, the way invoices round
cents.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Union

Number = Union[Decimal, int, float, str]


@dataclass(frozen=True)
class LocaleConvention:
    """Separators and currency layout for one locale.

    Attributes:
        group_separator: Thousands separator
        decimal_separator: Separator between integer and fraction
        symbol_first: Whether the currency symbol precedes the amount
        symbol_space: Whether a space separates symbol and amount
    """

    group_separator: str
    decimal_separator: str
    symbol_first: bool
    symbol_space: bool


SUPPORTED_LOCALES: Dict[str, LocaleConvention] = {
    "nl_BE": LocaleConvention(".", ",", symbol_first=True, symbol_space=True),
    "nl_NL": LocaleConvention(".", ",", symbol_first=True, symbol_space=True),
    "fr_BE": LocaleConvention(" ", ",", symbol_first=False, symbol_space=True),
    "fr_FR": LocaleConvention(" ", ",", symbol_first=False, symbol_space=True),
    "de_DE": LocaleConvention(".", ",", symbol_first=False, symbol_space=True),
    "en_GB": LocaleConvention(",", ".", symbol_first=True, symbol_space=False),
    "en_US": LocaleConvention(",", ".", symbol_first=True, symbol_space=False),
}

CURRENCY_SYMBOLS: Dict[str, str] = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "CHF": "CHF",
}


def get_convention(locale: str) -> LocaleConvention:
    """Look up the convention for a locale identifier.

    Both ``nl_BE`` and ``nl-BE`` spellings are accepted.

    Raises:
        ValueError: If the locale is not supported
    """
    key = locale.replace("-", "_")
    try:
        return SUPPORTED_LOCALES[key]
    except KeyError:
        raise ValueError(
            f"Unsupported locale '{locale}'. "
            f"Must be one of {', '.join(sorted(SUPPORTED_LOCALES))}"
        )


def format_number(value: Number, places: int = 2, locale: str = "nl_BE") -> str:
    """Format a number with a fixed number of decimal places.

    Example:
        >>> format_number(Decimal("1234.5"), 2, "nl_BE")
        '1.234,50'
        >>> format_number(20, 1, "en_US")
        '20.0'
    """
    convention = get_convention(locale)
    amount = Decimal(str(value))
    quantum = Decimal(1).scaleb(-places)
    rounded = amount.quantize(quantum, rounding=ROUND_HALF_UP)

    sign = "-" if rounded < 0 else ""
    integer_part, _, fraction_part = f"{abs(rounded):.{places}f}".partition(".")

    groups = []
    while len(integer_part) > 3:
        groups.insert(0, integer_part[-3:])
        integer_part = integer_part[:-3]
    groups.insert(0, integer_part)
    text = convention.group_separator.join(groups)

    if places > 0:
        text = f"{text}{convention.decimal_separator}{fraction_part}"
    return f"{sign}{text}"


def format_currency(amount: Number, currency: str = "EUR", locale: str = "nl_BE") -> str:
    """Format an amount as currency with two decimal places.

    Currencies without a known symbol are shown by their code.

    Example:
        >>> format_currency(Decimal("79.5"))
        '€ 79,50'
        >>> format_currency(Decimal("1234.5"), "EUR", "de_DE")
        '1.234,50 €'
        >>> format_currency(Decimal("7"), "USD", "en_US")
        '$7.00'
    """
    convention = get_convention(locale)
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), currency.upper())
    number = format_number(amount, 2, locale)
    space = " " if convention.symbol_space else ""

    negative = number.startswith("-")
    if negative:
        number = number[1:]

    if convention.symbol_first:
        text = f"{symbol}{space}{number}"
    else:
        text = f"{number}{space}{symbol}"
    return f"-{text}" if negative else text
