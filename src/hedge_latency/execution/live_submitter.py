"""Live order submitter via exchange client.

Maps a QuantizedOrder onto a ccxt limit order with IOC time-in-force and
parses the ccxt order dict back into a SubmissionResult. All amounts
returned by ccxt are converted through Decimal(str(value)).

ccxt reports venue rejections as "<exchange id> <response body>"; the
body is parsed back into SubmissionErrorDetail.data when it is JSON.
"""

import json
import time
from decimal import Decimal
from typing import Any

import ccxt.async_support as ccxt_async

from hedge_latency.config import ExchangeSettings
from hedge_latency.exceptions import SubmissionErrorDetail, SubmissionFailed
from hedge_latency.exchange.client import ExchangeClient
from hedge_latency.execution.submitter import OrderSubmitter
from hedge_latency.logging import get_logger
from hedge_latency.models import QuantizedOrder, SubmissionResult

logger = get_logger(__name__)

EXCHANGE_ID = "hyperliquid"


def error_detail(exc: Exception, exchange_id: str = EXCHANGE_ID) -> SubmissionErrorDetail:
    """Build a SubmissionErrorDetail from a ccxt error.

    code is the ccxt error class (e.g. "InvalidOrder"); data is the venue
    response body when it parses as JSON, else None.
    """
    message = str(exc)
    prefix = f"{exchange_id} "
    body = message[len(prefix):] if message.startswith(prefix) else message
    data: Any
    try:
        data = json.loads(body)
    except ValueError:
        data = None
    return SubmissionErrorDetail(message=message, code=type(exc).__name__, data=data)


class LiveSubmitter(OrderSubmitter):
    """Real order submitter that delegates to an exchange client.

    Args:
        exchange_client: The exchange client to place real orders through.
        settings: Exchange settings (perp symbol template).
    """

    def __init__(
        self, exchange_client: ExchangeClient, settings: ExchangeSettings
    ) -> None:
        self._exchange_client = exchange_client
        self._settings = settings

    def market_symbol(self, coin: str) -> str:
        """Return the venue market symbol for a coin, e.g. ETH -> ETH/USDC:USDC."""
        return self._settings.perp_symbol_template.format(coin=coin)

    async def submit(self, order: QuantizedOrder) -> SubmissionResult:
        """Place a limit IOC order on the exchange.

        Raises:
            SubmissionFailed: Wrapping any ccxt error, with its message,
                error class and venue response body preserved.
        """
        params: dict = {
            "timeInForce": order.time_in_force.value,
            "reduceOnly": order.reduce_only,
        }

        try:
            result = await self._exchange_client.create_order(
                symbol=self.market_symbol(order.symbol),
                order_type="limit",
                side=order.side.value,
                amount=float(order.size),
                price=float(order.limit_price),
                params=params,
            )
        except ccxt_async.BaseError as exc:
            detail = error_detail(exc)
            logger.error(
                "order_submission_rejected",
                symbol=order.symbol,
                message=detail.message,
                code=detail.code,
                data=detail.data,
            )
            raise SubmissionFailed(order.symbol, detail) from exc

        order_id = str(result.get("id") or "")
        filled_size = Decimal(str(result.get("filled") or 0))
        average_price = result.get("average") or result.get("price")
        timestamp = result.get("timestamp")

        submission = SubmissionResult(
            order_id=order_id,
            symbol=order.symbol,
            status=str(result.get("status") or "unknown"),
            filled_size=filled_size,
            average_price=Decimal(str(average_price)) if average_price else None,
            timestamp=float(timestamp) / 1000.0 if timestamp else time.time(),
            is_simulated=False,
            raw=result,
        )

        logger.info(
            "live_order_submitted",
            order_id=order_id,
            symbol=order.symbol,
            status=submission.status,
            filled_size=str(filled_size),
            average_price=str(submission.average_price),
        )
        return submission
