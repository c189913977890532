"""Decimal arithmetic helpers for minor-unit money values.

Every monetary value in the engine is an ``int`` in minor currency units
(cents for EUR). Percentages and multipliers are applied through
``Decimal`` and rounded straight back to an integer with ROUND_HALF_UP,
which rounds ties away from zero (``100.5 -> 101``, ``-0.5 -> -1``).

Usage:
    from rental_pricing.utils.money import apply_multiplier, round_cents

    nightly = round_cents(apply_multiplier(10000, 120))  # 12000
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, localcontext

HUNDRED = Decimal(100)

# Decimal places used when rendering amounts for display
CURRENCY_DECIMALS: dict[str, int] = {
    "EUR": 2,
    "USD": 2,
    "GBP": 2,
    "CHF": 2,
    "JPY": 0,
}

CURRENCY_SYMBOLS: dict[str, str] = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "CHF": "CHF ",
    "JPY": "¥",
}


def to_decimal(value: int | str | Decimal) -> Decimal:
    """Convert an int, numeric string or Decimal to Decimal.

    Floats are rejected because their binary representation already
    carries rounding error.
    """
    if isinstance(value, float):
        raise TypeError("Money arithmetic does not accept float values")
    return value if isinstance(value, Decimal) else Decimal(value)


def round_cents(value: Decimal | int) -> int:
    """Round a Decimal amount to whole minor units, half away from zero.

    Args:
        value: Amount in minor units, possibly fractional

    Returns:
        Integer amount in minor units
    """
    amount = to_decimal(value)
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus a carry
        ctx.prec = max(ctx.prec, amount.adjusted() + 2)
        return int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def apply_multiplier(base_cents: int, multiplier: int) -> Decimal:
    """Scale by an integer multiplier where 100 means 1.0x.

    Example:
        apply_multiplier(10000, 150) -> Decimal("15000")
    """
    return Decimal(base_cents) * Decimal(multiplier) / HUNDRED


def percent_of(base_cents: int, percent: int | Decimal) -> Decimal:
    """Return ``percent`` percent of an amount (``base * pct / 100``)."""
    return Decimal(base_cents) * to_decimal(percent) / HUNDRED


def apply_percentage(base_cents: int, percent: int | Decimal) -> Decimal:
    """Return an amount adjusted by a signed percentage (``base * (1 + pct/100)``).

    Example:
        apply_percentage(10000, -10) -> Decimal("9000")
    """
    return Decimal(base_cents) * (1 + to_decimal(percent) / HUNDRED)


def multiply_cents(cents: int, factor: int) -> int:
    """Multiply an amount by a unit count (nights, guests, participants)."""
    return round_cents(Decimal(cents) * to_decimal(factor))


def sum_cents(values: Iterable[int]) -> int:
    """Sum integer amounts."""
    return sum(values, 0)


def compute_multiplier(target_cents: int, base_cents: int) -> int:
    """Derive the integer multiplier that turns ``base`` into ``target``.

    Used when an admin types an absolute nightly price for a rule.
    A zero base price has no meaningful ratio and maps to 100 (1.0x).

    Example:
        compute_multiplier(15000, 10000) -> 150
    """
    if base_cents == 0:
        return 100
    return round_cents(Decimal(target_cents) / Decimal(base_cents) * HUNDRED)


def cents_to_unit(cents: int, currency: str = "EUR") -> Decimal:
    """Convert minor units to major units (2500 -> Decimal("25.00"))."""
    decimals = CURRENCY_DECIMALS.get(currency.upper(), 2)
    return Decimal(cents).scaleb(-decimals)


def format_price(cents: int, currency: str = "EUR") -> str:
    """Format an amount for display, e.g. ``format_price(350) -> "€3.50"``.

    Unknown currencies fall back to the ISO code as prefix.
    """
    code = currency.upper()
    decimals = CURRENCY_DECIMALS.get(code, 2)
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    amount = cents_to_unit(cents, code)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.{decimals}f}"
