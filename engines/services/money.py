"""
Money Helpers

Integer-cent rounding and display formatting.
"""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float | Decimal) -> int:
    """
    Round to the nearest whole cent, halves away from zero for positives.

    Floats go through their shortest repr so 6694.999999 style noise from
    hour fractions does not flip a cent.
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def cents_to_dollars(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(Decimal("0.01"))


def format_currency_from_cents(cents: int) -> str:
    """Format cents for display, e.g. 1234567 -> "$12,345.67"."""
    dollars = cents_to_dollars(cents)
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"
