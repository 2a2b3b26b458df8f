"""Shared data models for the hedge latency client.

All prices and sizes use Decimal. Durations are float milliseconds.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any


class OrderSide(str, Enum):
    """Order direction."""

    BUY = "buy"
    SELL = "sell"


class TimeInForce(str, Enum):
    """Order time-in-force."""

    IOC = "IOC"
    GTC = "GTC"


@dataclass(frozen=True)
class InstrumentMeta:
    """Trading-rule metadata for a symbol (the venue's "universe" entry)."""

    name: str
    size_decimals: int = 4
    tick_size: Decimal | None = None
    max_leverage: int | None = None


@dataclass(frozen=True)
class BookLevel:
    """One price level of an order book."""

    price: Decimal
    size: Decimal
    order_count: int | None = None


@dataclass(frozen=True)
class BookSnapshot:
    """Best-of-book levels for a symbol, best price first on each side."""

    symbol: str
    bid_levels: tuple[BookLevel, ...]
    ask_levels: tuple[BookLevel, ...]
    timestamp: int | None = None  # venue time, Unix milliseconds

    @property
    def best_ask(self) -> Decimal:
        """Price of the first ask level.

        Raises:
            ValueError: If the ask side is empty.
        """
        if not self.ask_levels:
            raise ValueError(f"Book for {self.symbol} has no ask levels")
        return self.ask_levels[0].price


@dataclass(frozen=True)
class OrderRequest:
    """A single hedge intent: buy `target_usd_value` worth of `symbol`."""

    symbol: str
    target_usd_value: Decimal

    def __post_init__(self) -> None:
        if self.target_usd_value <= 0:
            raise ValueError(
                f"target_usd_value must be positive, got {self.target_usd_value}"
            )


@dataclass(frozen=True)
class QuantizedOrder:
    """Exchange-ready order. Side and time-in-force are fixed for hedges."""

    symbol: str
    limit_price: Decimal
    size: Decimal
    side: OrderSide = OrderSide.BUY
    time_in_force: TimeInForce = TimeInForce.IOC
    reduce_only: bool = False


@dataclass
class SubmissionResult:
    """Result of a submitted order as reported by the venue."""

    order_id: str
    symbol: str
    status: str
    filled_size: Decimal
    average_price: Decimal | None
    timestamp: float
    is_simulated: bool = False
    raw: dict[str, Any] = field(default_factory=dict)


STEP_NAMES = ("data_fetch_ms", "calculation_ms", "param_calculation_ms", "order_placement_ms")


@dataclass
class StepTimings:
    """Per-phase durations in milliseconds. None means the phase was not reached."""

    data_fetch_ms: float | None = None
    calculation_ms: float | None = None
    param_calculation_ms: float | None = None
    order_placement_ms: float | None = None

    def as_dict(self) -> dict[str, float | None]:
        return {name: getattr(self, name) for name in STEP_NAMES}


@dataclass(frozen=True)
class OrderOutcome:
    """Result of processing one OrderRequest.

    Exactly one of `success` / `error_message` describes the result:
    successful outcomes carry no error message, failed ones always do.
    """

    symbol: str
    total_duration_ms: float
    timings: StepTimings
    success: bool
    error_message: str | None = None
    order: QuantizedOrder | None = None
    submission: SubmissionResult | None = None

    def __post_init__(self) -> None:
        if self.success == (self.error_message is not None):
            raise ValueError("error_message must be set iff the outcome failed")


@dataclass(frozen=True)
class BatchSummary:
    """Aggregate latency statistics over a batch of outcomes."""

    total_latency_ms: float
    average_latency_ms: float
    success_count: int
    failure_count: int
    average_step_timings: dict[str, float | None]

    @property
    def total_count(self) -> int:
        return self.success_count + self.failure_count
