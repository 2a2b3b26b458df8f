"""Paper order submitter with simulated fills.

Never contacts the venue. Each order is reported as fully filled at its
limit price so the rest of the pipeline, including latency accounting,
runs unchanged without credentials.
"""

import time
from uuid import uuid4

from hedge_latency.execution.submitter import OrderSubmitter
from hedge_latency.logging import get_logger
from hedge_latency.models import QuantizedOrder, SubmissionResult

logger = get_logger(__name__)


class PaperSubmitter(OrderSubmitter):
    """Simulated order submitter. All results have is_simulated=True."""

    def __init__(self) -> None:
        self._submitted: list[QuantizedOrder] = []

    @property
    def submitted(self) -> list[QuantizedOrder]:
        """Orders submitted so far, in submission order."""
        return list(self._submitted)

    async def submit(self, order: QuantizedOrder) -> SubmissionResult:
        self._submitted.append(order)
        order_id = f"paper_{uuid4().hex[:12]}"

        logger.info(
            "paper_order_filled",
            order_id=order_id,
            symbol=order.symbol,
            side=order.side.value,
            size=str(order.size),
            limit_price=str(order.limit_price),
            time_in_force=order.time_in_force.value,
        )

        return SubmissionResult(
            order_id=order_id,
            symbol=order.symbol,
            status="closed",
            filled_size=order.size,
            average_price=order.limit_price,
            timestamp=time.time(),
            is_simulated=True,
        )
