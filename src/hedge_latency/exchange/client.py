"""Abstract exchange client interface.

Defines the contract for all exchange implementations. Submission code
depends only on this interface, keeping Hyperliquid-specific details
isolated in the concrete implementation.
"""

from abc import ABC, abstractmethod


class ExchangeClient(ABC):
    """Abstract base class for exchange API clients."""

    @abstractmethod
    async def connect(self) -> None:
        """Open the connection and load markets.

        Raises:
            ConnectionFailure: If the venue cannot be reached.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release connection resources."""
        ...

    @abstractmethod
    async def create_order(
        self,
        symbol: str,
        order_type: str,
        side: str,
        amount: float,
        price: float | None = None,
        params: dict | None = None,
    ) -> dict:
        """Place an order on the exchange and return the raw order dict."""
        ...
