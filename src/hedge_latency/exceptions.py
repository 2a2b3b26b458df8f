"""Custom exceptions for the hedge latency client.

Every per-order failure derives from HedgeLatencyError so the execution
pipeline can turn it into a failed OrderOutcome. Only ConnectionFailure
is allowed to abort a whole batch.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any


class HedgeLatencyError(Exception):
    """Base exception for all hedge latency errors."""


class DataUnavailable(HedgeLatencyError):
    """Raised when a market-data cache key is missing or fails to parse."""

    def __init__(self, symbol: str, resource: str, reason: str = "") -> None:
        self.symbol = symbol
        self.resource = resource
        self.reason = reason
        message = f"{resource} unavailable for {symbol}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnknownTickSize(HedgeLatencyError):
    """Raised when no tick size is known for an instrument."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"No tick size configured for {symbol}")


class BelowMinimumSize(HedgeLatencyError):
    """Raised when a quantized order size is below the venue minimum."""

    def __init__(self, symbol: str, size: Decimal, minimum: Decimal) -> None:
        self.symbol = symbol
        self.size = size
        self.minimum = minimum
        super().__init__(
            f"Order size {size} for {symbol} is below minimum order size {minimum}"
        )


@dataclass
class SubmissionErrorDetail:
    """Venue error detail preserved for diagnostics."""

    message: str
    code: str | int | None = None
    data: Any = field(default=None)


class SubmissionFailed(HedgeLatencyError):
    """Raised when the exchange rejects or cannot process an order."""

    def __init__(self, symbol: str, detail: SubmissionErrorDetail) -> None:
        self.symbol = symbol
        self.detail = detail
        super().__init__(f"Order submission failed for {symbol}: {detail.message}")


class ConnectionFailure(HedgeLatencyError):
    """Raised when the market-data or exchange connection cannot be opened."""

    def __init__(self, target: str, reason: str = "") -> None:
        self.target = target
        self.reason = reason
        message = f"Failed to connect to {target}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
