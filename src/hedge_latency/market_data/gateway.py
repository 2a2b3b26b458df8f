"""Abstract market-data gateway interface.

Read-only access to the three keyed resources the execution pipeline
needs per symbol: mid price, level-2 book snapshot and instrument metadata.
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from hedge_latency.models import BookSnapshot, InstrumentMeta

# Resource names reported in DataUnavailable
MID_PRICE = "mid_price"
BOOK_SNAPSHOT = "l2_book"
INSTRUMENT_META = "universe"


class MarketDataGateway(ABC):
    """Abstract base class for market-data sources."""

    @abstractmethod
    async def connect(self) -> None:
        """Open the connection.

        Raises:
            ConnectionFailure: If the cache cannot be reached.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release connection resources."""
        ...

    @abstractmethod
    async def get_mid_price(self, symbol: str) -> Decimal:
        """Return the current mid price for a symbol.

        Raises:
            DataUnavailable: If the value is missing or malformed.
        """
        ...

    @abstractmethod
    async def get_book_snapshot(self, symbol: str) -> BookSnapshot:
        """Return the latest level-2 book snapshot for a symbol.

        Raises:
            DataUnavailable: If the value is missing or malformed.
        """
        ...

    @abstractmethod
    async def get_instrument_meta(self, symbol: str) -> InstrumentMeta:
        """Return trading-rule metadata for a symbol.

        Raises:
            DataUnavailable: If the value is missing or malformed.
        """
        ...
