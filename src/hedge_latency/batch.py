"""Batch driver and latency aggregation.

Runs the execution pipeline once per order request, strictly one after
another, and folds the outcomes into a BatchSummary. A failed order never
stops the batch.
"""

from collections.abc import Sequence

from hedge_latency.execution.pipeline import ExecutionPipeline
from hedge_latency.logging import get_logger
from hedge_latency.models import STEP_NAMES, BatchSummary, OrderOutcome, OrderRequest

logger = get_logger(__name__)


def summarize(outcomes: Sequence[OrderOutcome]) -> BatchSummary:
    """Aggregate outcomes into overall and per-phase latency statistics.

    Total and average latency cover every outcome, successes and failures
    alike. Per-phase averages use successful outcomes only, since failed
    ones may stop before some phases; a phase with no samples averages to
    None.
    """
    total = sum(outcome.total_duration_ms for outcome in outcomes)
    average = total / len(outcomes) if outcomes else 0.0
    successes = [outcome for outcome in outcomes if outcome.success]

    average_steps: dict[str, float | None] = {}
    for step in STEP_NAMES:
        values = [
            value
            for value in (getattr(outcome.timings, step) for outcome in successes)
            if value is not None
        ]
        average_steps[step] = sum(values) / len(values) if values else None

    return BatchSummary(
        total_latency_ms=total,
        average_latency_ms=average,
        success_count=len(successes),
        failure_count=len(outcomes) - len(successes),
        average_step_timings=average_steps,
    )


class BatchSummarizer:
    """Drives the pipeline over a batch of requests and summarizes the run.

    Args:
        pipeline: The per-order execution pipeline.
    """

    def __init__(self, pipeline: ExecutionPipeline) -> None:
        self._pipeline = pipeline

    async def run(
        self, requests: Sequence[OrderRequest], attempt: int = 1
    ) -> tuple[BatchSummary, list[OrderOutcome]]:
        """Process every request in order and return (summary, outcomes).

        Order N+1 starts only after order N has reached a terminal state.
        """
        outcomes: list[OrderOutcome] = []
        for index, request in enumerate(requests, start=1):
            logger.info(
                "batch_order_started",
                index=index,
                total=len(requests),
                symbol=request.symbol,
            )
            outcomes.append(await self._pipeline.execute(request, attempt=attempt))

        summary = summarize(outcomes)
        logger.info(
            "batch_completed",
            total=summary.total_count,
            succeeded=summary.success_count,
            failed=summary.failure_count,
        )
        return summary, outcomes
