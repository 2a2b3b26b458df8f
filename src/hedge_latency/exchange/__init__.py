"""Exchange client layer -- Hyperliquid API integration via ccxt."""

from hedge_latency.exchange.client import ExchangeClient
from hedge_latency.exchange.hyperliquid_client import HyperliquidClient
from hedge_latency.exchange.types import (
    floor_to_tick,
    is_tick_aligned,
    round_decimals,
    round_significant,
    truncate_decimals,
)

__all__ = [
    "ExchangeClient",
    "HyperliquidClient",
    "floor_to_tick",
    "is_tick_aligned",
    "round_decimals",
    "round_significant",
    "truncate_decimals",
]
