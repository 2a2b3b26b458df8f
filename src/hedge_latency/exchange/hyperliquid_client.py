"""Hyperliquid exchange client implementation via ccxt async.

Wraps ccxt.async_support.hyperliquid with credential wiring, market
loading, and async cleanup.
"""

import ccxt.async_support as ccxt_async

from hedge_latency.config import ExchangeSettings
from hedge_latency.exceptions import ConnectionFailure
from hedge_latency.exchange.client import ExchangeClient
from hedge_latency.logging import get_logger

logger = get_logger(__name__)


class HyperliquidClient(ExchangeClient):
    """Concrete Hyperliquid exchange client using ccxt async."""

    def __init__(self, settings: ExchangeSettings) -> None:
        self._settings = settings

        config: dict = {
            "walletAddress": settings.wallet_address,
            "privateKey": settings.private_key.get_secret_value(),
            "enableRateLimit": True,
            "options": {
                "defaultType": "swap",
            },
        }

        self._exchange = ccxt_async.hyperliquid(config)
        if settings.testnet:
            self._exchange.set_sandbox_mode(True)
        self._markets: dict = {}

    @property
    def exchange(self) -> ccxt_async.hyperliquid:
        """Access the underlying ccxt exchange instance."""
        return self._exchange

    async def connect(self) -> None:
        """Initialize connection by loading markets."""
        logger.info("connecting_to_hyperliquid", testnet=self._settings.testnet)
        try:
            self._markets = await self._exchange.load_markets()
        except ccxt_async.BaseError as exc:
            logger.error("hyperliquid_connect_failed", error=str(exc))
            raise ConnectionFailure("exchange", str(exc)) from exc
        logger.info(
            "hyperliquid_connected",
            market_count=len(self._markets),
            testnet=self._settings.testnet,
        )

    async def close(self) -> None:
        """Clean up ccxt async resources. Must be called to avoid leaked sessions."""
        logger.info("closing_hyperliquid_connection")
        await self._exchange.close()
        logger.info("hyperliquid_connection_closed")

    async def create_order(
        self,
        symbol: str,
        order_type: str,
        side: str,
        amount: float,
        price: float | None = None,
        params: dict | None = None,
    ) -> dict:
        """Place an order via ccxt."""
        logger.info(
            "creating_order",
            symbol=symbol,
            order_type=order_type,
            side=side,
            amount=amount,
            price=price,
        )
        return await self._exchange.create_order(
            symbol, order_type, side, amount, price, params=params or {}
        )
