"""Formatting helpers for cupcake."""

import locale
import logging
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def use_system_locale() -> str | None:
    """
    Switch LC_TIME to the user's environment locale.

    Python starts in the "C" locale, so weekday and month names stay English
    until this runs. Returns the locale name, or None if the environment
    names a locale that isn't installed (LC_TIME is then left unchanged).
    """
    try:
        return locale.setlocale(locale.LC_TIME, "")
    except locale.Error as e:
        logger.info("Keeping default LC_TIME: %s", e)
        return None


def round_cents(amount: Decimal) -> Decimal:
    """Round to whole cents, halves away from zero."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal) -> str:
    """
    Format a monetary amount as a plain two-decimal string.

    Examples:
        format_amount(Decimal("15")) -> "15.00"
        format_amount(Decimal("2.005")) -> "2.01"
    """
    return f"{round_cents(amount):.2f}"


def format_price(amount: Decimal, currency_symbol: str = "$") -> str:
    """
    Format a monetary amount as a two-decimal currency string.

    Examples:
        format_price(Decimal("15")) -> "$15.00"
        format_price(Decimal("1234.5"), "€") -> "€1,234.50"
    """
    value = round_cents(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}{currency_symbol}{abs(value):,.2f}"


def format_pickup_date(day: date) -> str:
    """
    Format a date as weekday, month and day of month, e.g. "Mon Oct 19".

    Weekday and month names follow the process LC_TIME locale.
    """
    return f"{day:%a %b} {day.day}"


def pickup_window(today: date, days: int) -> tuple[str, ...]:
    """Return `days` consecutive formatted dates, starting with `today`."""
    return tuple(format_pickup_date(today + timedelta(days=i)) for i in range(days))


def format_quantity(quantity: int) -> str:
    """Return "1 cupcake" or "N cupcakes"."""
    noun = "cupcake" if quantity == 1 else "cupcakes"
    return f"{quantity} {noun}"
