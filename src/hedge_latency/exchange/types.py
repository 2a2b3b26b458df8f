"""Decimal rounding helpers for exchange price and size constraints.

All monetary values use Decimal. Never use float for prices or sizes.
"""

from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal


def floor_to_tick(value: Decimal, tick_size: Decimal) -> Decimal:
    """Round a value down to the nearest multiple of tick_size.

    Uses integer division so the result never exceeds the input for
    positive values.

    Args:
        value: The raw price.
        tick_size: The minimum price increment (e.g., 0.1 for ETH).

    Returns:
        The value floored to a tick multiple.
    """
    return (value // tick_size) * tick_size


def is_tick_aligned(value: Decimal, tick_size: Decimal) -> bool:
    """Return True if value is an exact multiple of tick_size."""
    return value % tick_size == 0


def truncate_decimals(value: Decimal, places: int) -> Decimal:
    """Cut value to `places` fractional digits without rounding."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_DOWN)


def round_decimals(value: Decimal, places: int) -> Decimal:
    """Round value half-up to `places` fractional digits."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def round_significant(value: Decimal, digits: int) -> Decimal:
    """Round value half-up to `digits` significant digits.

    round_significant(Decimal("150.225"), 5) == Decimal("150.23")
    """
    if value == 0:
        return value
    exponent = value.adjusted() - digits + 1
    return value.quantize(Decimal(1).scaleb(exponent), rounding=ROUND_HALF_UP)
