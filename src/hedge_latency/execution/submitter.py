"""Abstract order submitter interface.

Defines the contract for order submission. Both PaperSubmitter and
LiveSubmitter implement this ABC, so the execution pipeline measures the
same code path regardless of mode.
"""

from abc import ABC, abstractmethod

from hedge_latency.models import QuantizedOrder, SubmissionResult


class OrderSubmitter(ABC):
    """Abstract base class for order submitters.

    The concrete submitter (paper or live) is injected at startup based on
    ExecutionSettings.mode.
    """

    @abstractmethod
    async def submit(self, order: QuantizedOrder) -> SubmissionResult:
        """Submit a fully quantized order.

        Args:
            order: Exchange-ready order (symbol, limit price, size, side, TIF).

        Returns:
            SubmissionResult with the venue's order id and fill state.

        Raises:
            SubmissionFailed: If the venue rejects or cannot process the order.
        """
        ...
