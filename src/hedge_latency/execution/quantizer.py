"""Limit price and size quantization for aggressive IOC buys.

Turns a coin-denominated target size and a retry attempt number into a
(limit_price, size) pair the venue accepts. Two independent venue rules
must hold at once:

- the price is a multiple of the instrument's tick size
- the price carries at most (max_decimals - size_decimals) fractional
  digits and at most 5 significant digits

Every lossy step can break tick alignment again, so the price is floored
back onto the tick grid after each one. The order of the passes matters
and must not be collapsed.

All arithmetic is Decimal. No I/O.
"""

from collections.abc import Mapping
from decimal import Decimal

from hedge_latency.exceptions import UnknownTickSize
from hedge_latency.exchange.types import (
    floor_to_tick,
    is_tick_aligned,
    round_decimals,
    round_significant,
    truncate_decimals,
)
from hedge_latency.models import BookSnapshot, InstrumentMeta

MAX_DECIMALS_PERP = 6
MAX_DECIMALS_SPOT = 8
PRICE_SIGNIFICANT_DIGITS = 5
PRICE_DECIMALS = 8

_BPS_DIVISOR = Decimal("10000")


class PriceSizeQuantizer:
    """Computes exchange-valid limit prices and sizes.

    Args:
        tick_sizes: Mapping of instrument name to tick size. Takes
            precedence over a tick size carried in instrument metadata.
        base_bps: Offset above the best ask on the first attempt.
        bps_step: Extra offset added for every further attempt.
    """

    def __init__(
        self,
        tick_sizes: Mapping[str, Decimal],
        base_bps: Decimal = Decimal("15"),
        bps_step: Decimal = Decimal("10"),
    ) -> None:
        self._tick_sizes = dict(tick_sizes)
        self._base_bps = base_bps
        self._bps_step = bps_step

    def aggressiveness_bps(self, attempt: int) -> Decimal:
        """Basis points above best ask for a given attempt (1-based)."""
        if attempt < 1:
            raise ValueError(f"attempt must be >= 1, got {attempt}")
        return self._base_bps + (attempt - 1) * self._bps_step

    def resolve_tick_size(self, meta: InstrumentMeta) -> Decimal:
        """Return the tick size for an instrument.

        Raises:
            UnknownTickSize: If neither the configured table nor the
                instrument metadata provides one.
        """
        tick_size = self._tick_sizes.get(meta.name, meta.tick_size)
        if tick_size is None:
            raise UnknownTickSize(meta.name)
        return tick_size

    def quantize(
        self,
        attempt: int,
        target_size: Decimal,
        book: BookSnapshot,
        meta: InstrumentMeta,
        is_perpetual: bool = True,
    ) -> tuple[Decimal, Decimal]:
        """Compute (limit_price, size) for an IOC buy.

        Steps:
        1. raw_price = best_ask * (1 + bps / 10000)
        2. Floor to tick
        3. Truncate to the allowed price decimals
        4. Round to 5 significant digits, re-floor to tick if misaligned
        5. Round to 8 decimals, floor to tick
        6. size = target_size truncated to size_decimals

        Args:
            attempt: 1 for the first try; each retry walks the price up.
            target_size: Desired size in coin units.
            book: Book snapshot; only the best ask is used.
            meta: Instrument metadata (name, size decimals, tick size).
            is_perpetual: Perps allow 6 total decimals, spot 8.

        Returns:
            Tuple of (limit_price, size).

        Raises:
            UnknownTickSize: If no tick size is known for the instrument.
            ValueError: If attempt < 1 or the book has no asks.
        """
        bps = self.aggressiveness_bps(attempt)
        best_ask = book.best_ask
        raw_price = best_ask * (1 + bps / _BPS_DIVISOR)

        tick_size = self.resolve_tick_size(meta)
        limit_price = floor_to_tick(raw_price, tick_size)

        max_decimals = MAX_DECIMALS_PERP if is_perpetual else MAX_DECIMALS_SPOT
        allowed_price_decimals = max(max_decimals - meta.size_decimals, 0)
        limit_price = truncate_decimals(limit_price, allowed_price_decimals)

        limit_price = round_significant(limit_price, PRICE_SIGNIFICANT_DIGITS)
        if not is_tick_aligned(limit_price, tick_size):
            limit_price = floor_to_tick(limit_price, tick_size)

        limit_price = round_decimals(limit_price, PRICE_DECIMALS)
        limit_price = floor_to_tick(limit_price, tick_size)

        size = truncate_decimals(target_size, meta.size_decimals)
        return limit_price, size
