"""Shared test fixtures for the hedge latency client."""

from collections.abc import Callable
from decimal import Decimal

import pytest

from hedge_latency.config import ExecutionSettings
from hedge_latency.execution.quantizer import PriceSizeQuantizer
from hedge_latency.models import BookLevel, BookSnapshot, InstrumentMeta


def _build_book(symbol: str, best_ask: str, best_bid: str | None = None) -> BookSnapshot:
    """Build a two-level ask side around the given best ask."""
    ask = Decimal(best_ask)
    bid = Decimal(best_bid) if best_bid is not None else ask - Decimal("0.1")
    return BookSnapshot(
        symbol=symbol,
        bid_levels=(BookLevel(price=bid, size=Decimal("10")),),
        ask_levels=(
            BookLevel(price=ask, size=Decimal("10")),
            BookLevel(price=ask + Decimal("1"), size=Decimal("25")),
        ),
    )


@pytest.fixture
def make_book() -> Callable[..., BookSnapshot]:
    """Factory for book snapshots: make_book("ETH", "150.00")."""
    return _build_book


@pytest.fixture
def execution_settings() -> ExecutionSettings:
    """Execution settings with the reference tick table and 0.001 minimum."""
    return ExecutionSettings(
        mode="paper",
        min_order_size=Decimal("0.001"),
        tick_sizes={"ETH": Decimal("0.1"), "SOL": Decimal("0.01")},
    )


@pytest.fixture
def quantizer(execution_settings: ExecutionSettings) -> PriceSizeQuantizer:
    return PriceSizeQuantizer(
        tick_sizes=execution_settings.tick_sizes,
        base_bps=execution_settings.base_bps,
        bps_step=execution_settings.bps_step,
    )


@pytest.fixture
def eth_meta() -> InstrumentMeta:
    return InstrumentMeta(name="ETH", size_decimals=4)


@pytest.fixture
def sol_meta() -> InstrumentMeta:
    return InstrumentMeta(name="SOL", size_decimals=2)
