"""
Currency helpers for BRL prices.

Prices travel as Decimal inside the application. Display strings follow the
storefront format ("R$ 260,00") and providers that bill in cents get integer
minor units.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENTS = Decimal("0.01")


def to_decimal(value):
    if isinstance(value, bool):
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return None


def quantize_brl(value) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_currency(value) -> str:
    """260 -> "260,00"."""
    return f"{quantize_brl(value):.2f}".replace(".", ",")


def format_price(value) -> str:
    """260 -> "R$ 260,00"."""
    return f"R$ {format_currency(value)}"


def parse_price(price_string: str) -> Decimal:
    """
    Converts a display price back to a Decimal.

    "R$ 1.260,50" -> Decimal("1260.50"). Dots are thousand separators and the
    comma is the decimal separator.
    """
    cleaned = (
        price_string.replace("R$", "")
        .replace(".", "")
        .replace(",", ".")
        .strip()
    )
    value = to_decimal(cleaned)
    if value is None or not value.is_finite():
        raise ValueError(f"Invalid price: {price_string!r}")
    return quantize_brl(value)


def to_minor_units(amount) -> int:
    return int((quantize_brl(amount) * 100).to_integral_value(rounding=ROUND_HALF_UP))


def from_minor_units(cents) -> Decimal:
    return quantize_brl(Decimal(int(cents)) / 100)
