"""Per-order execution pipeline with phase latency accounting.

Each OrderRequest goes through:

    Fetching -> Computing -> Submitting -> Done(success | failure)

1. FETCH: mid price, book snapshot and instrument metadata concurrently
   (asyncio.gather); all three must succeed.
2. CALCULATE: target_size = target_usd_value / mid_price, 4 decimals.
3. QUANTIZE: PriceSizeQuantizer -> (limit_price, size).
4. SUBMIT: reject sizes below the venue minimum, then hand the order to
   the OrderSubmitter.

Every per-order error is caught here and turned into a failed
OrderOutcome that keeps the phase timings recorded before the failure.
Nothing raised while processing one order escapes to the batch driver.
"""

import asyncio
import time
from collections.abc import Callable
from decimal import Decimal

import structlog

from hedge_latency.config import ExecutionSettings
from hedge_latency.exceptions import BelowMinimumSize, HedgeLatencyError
from hedge_latency.exchange.types import round_decimals
from hedge_latency.execution.quantizer import PriceSizeQuantizer
from hedge_latency.execution.submitter import OrderSubmitter
from hedge_latency.logging import get_logger
from hedge_latency.market_data.gateway import MarketDataGateway
from hedge_latency.models import (
    BookSnapshot,
    InstrumentMeta,
    OrderOutcome,
    OrderRequest,
    QuantizedOrder,
    StepTimings,
    SubmissionResult,
)

logger = get_logger(__name__)


def calculate_target_size(
    target_usd_value: Decimal, mid_price: Decimal, places: int = 4
) -> Decimal:
    """Convert a USD notional into a coin size, rounded to `places` decimals."""
    return round_decimals(target_usd_value / mid_price, places)


class ExecutionPipeline:
    """Runs one order request end to end and times each phase.

    Args:
        gateway: Market-data source for mid, book and metadata.
        submitter: Paper or live order submitter.
        quantizer: Price/size quantizer.
        settings: Minimum order size, perp/spot flag, size rounding.
        clock: Monotonic clock in seconds; injectable for tests.
    """

    def __init__(
        self,
        gateway: MarketDataGateway,
        submitter: OrderSubmitter,
        quantizer: PriceSizeQuantizer,
        settings: ExecutionSettings,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._gateway = gateway
        self._submitter = submitter
        self._quantizer = quantizer
        self._settings = settings
        self._clock = clock

    async def execute(self, request: OrderRequest, attempt: int = 1) -> OrderOutcome:
        """Process a single order request.

        Never raises for per-order failures: the returned outcome has
        success=False and an error message instead.
        """
        started = self._clock()
        timings = StepTimings()
        order: QuantizedOrder | None = None

        with structlog.contextvars.bound_contextvars(
            symbol=request.symbol, attempt=attempt
        ):
            logger.info(
                "order_processing_started",
                target_usd_value=str(request.target_usd_value),
            )
            try:
                phase_start = self._clock()
                mid_price, book, meta = await self._fetch(request.symbol)
                timings.data_fetch_ms = self._elapsed_ms(phase_start)

                phase_start = self._clock()
                target_size = calculate_target_size(
                    request.target_usd_value,
                    mid_price,
                    self._settings.target_size_decimals,
                )
                timings.calculation_ms = self._elapsed_ms(phase_start)
                logger.info(
                    "hedge_size_calculated",
                    mid_price=str(mid_price),
                    target_size=str(target_size),
                )

                phase_start = self._clock()
                limit_price, size = self._quantizer.quantize(
                    attempt, target_size, book, meta, self._settings.is_perpetual
                )
                order = QuantizedOrder(
                    symbol=request.symbol, limit_price=limit_price, size=size
                )
                timings.param_calculation_ms = self._elapsed_ms(phase_start)
                logger.info(
                    "order_params_calculated",
                    best_ask=str(book.best_ask),
                    limit_price=str(limit_price),
                    size=str(size),
                )

                phase_start = self._clock()
                submission = await self._submit(order)
                timings.order_placement_ms = self._elapsed_ms(phase_start)

            except HedgeLatencyError as exc:
                return self._failure(request, started, timings, order, str(exc))
            except Exception as exc:
                logger.exception("order_processing_unexpected_error")
                return self._failure(
                    request, started, timings, order, f"{type(exc).__name__}: {exc}"
                )

            outcome = OrderOutcome(
                symbol=request.symbol,
                total_duration_ms=self._elapsed_ms(started),
                timings=timings,
                success=True,
                order=order,
                submission=submission,
            )
            logger.info(
                "order_processing_succeeded",
                total_ms=round(outcome.total_duration_ms, 3),
                **{name: _round(value) for name, value in timings.as_dict().items()},
            )
            return outcome

    async def _fetch(self, symbol: str) -> tuple[Decimal, BookSnapshot, InstrumentMeta]:
        """Fetch mid, book and metadata concurrently.

        Waits for all three calls before raising, so no fetch is left
        running in the background when one of them fails.
        """
        results = await asyncio.gather(
            self._gateway.get_mid_price(symbol),
            self._gateway.get_book_snapshot(symbol),
            self._gateway.get_instrument_meta(symbol),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        mid_price, book, meta = results
        return mid_price, book, meta

    async def _submit(self, order: QuantizedOrder) -> SubmissionResult:
        minimum = self._settings.min_order_size
        if order.size < minimum:
            raise BelowMinimumSize(order.symbol, order.size, minimum)

        logger.info(
            "order_request",
            side=order.side.value,
            size=str(order.size),
            limit_price=str(order.limit_price),
            time_in_force=order.time_in_force.value,
            reduce_only=order.reduce_only,
        )
        return await self._submitter.submit(order)

    def _failure(
        self,
        request: OrderRequest,
        started: float,
        timings: StepTimings,
        order: QuantizedOrder | None,
        message: str,
    ) -> OrderOutcome:
        outcome = OrderOutcome(
            symbol=request.symbol,
            total_duration_ms=self._elapsed_ms(started),
            timings=timings,
            success=False,
            error_message=message,
            order=order,
        )
        logger.error(
            "order_processing_failed",
            error=message,
            total_ms=round(outcome.total_duration_ms, 3),
        )
        return outcome

    def _elapsed_ms(self, since: float) -> float:
        return (self._clock() - since) * 1000.0


def _round(value: float | None) -> float | None:
    return round(value, 3) if value is not None else None
