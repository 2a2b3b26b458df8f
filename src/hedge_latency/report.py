"""Batch report: JSON-safe serialization and structured log output."""

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from hedge_latency.logging import get_logger
from hedge_latency.models import BatchSummary, OrderOutcome, OrderRequest

logger = get_logger(__name__)


def _ms(value: float | None) -> float | None:
    return round(value, 2) if value is not None else None


@dataclass(frozen=True)
class BatchReport:
    """Everything produced by one latency run."""

    region: str
    started_at: datetime
    finished_at: datetime
    requests: list[OrderRequest]
    outcomes: list[OrderOutcome]
    summary: BatchSummary

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable view of the report.

        Decimals are emitted as strings, durations as milliseconds rounded
        to 2 decimals.
        """
        return {
            "region": self.region,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat(),
            "orders": [
                _outcome_to_dict(request, outcome)
                for request, outcome in zip(self.requests, self.outcomes)
            ],
            "summary": {
                "total_orders": self.summary.total_count,
                "successful_orders": self.summary.success_count,
                "failed_orders": self.summary.failure_count,
                "total_latency_ms": _ms(self.summary.total_latency_ms),
                "average_latency_ms": _ms(self.summary.average_latency_ms),
                "individual_latencies_ms": [
                    _ms(outcome.total_duration_ms) for outcome in self.outcomes
                ],
                "average_step_timings_ms": {
                    step: _ms(value)
                    for step, value in self.summary.average_step_timings.items()
                },
            },
        }

    def write_json(self, path: str | Path) -> None:
        """Write the report to `path` as indented JSON."""
        Path(path).write_text(json.dumps(self.to_dict(), indent=2) + "\n")


def _outcome_to_dict(request: OrderRequest, outcome: OrderOutcome) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "symbol": outcome.symbol,
        "target_usd_value": str(request.target_usd_value),
        "success": outcome.success,
        "error": outcome.error_message,
        "total_duration_ms": _ms(outcome.total_duration_ms),
        "step_timings_ms": {
            step: _ms(value) for step, value in outcome.timings.as_dict().items()
        },
    }
    if outcome.order is not None:
        entry["limit_price"] = str(outcome.order.limit_price)
        entry["size"] = str(outcome.order.size)
    if outcome.submission is not None:
        entry["order_id"] = outcome.submission.order_id
        entry["status"] = outcome.submission.status
        entry["simulated"] = outcome.submission.is_simulated
    return entry


def log_report(report: BatchReport) -> None:
    """Emit the per-order breakdown and the batch summary."""
    for outcome in report.outcomes:
        logger.info(
            "order_outcome",
            symbol=outcome.symbol,
            success=outcome.success,
            error=outcome.error_message,
            total_ms=_ms(outcome.total_duration_ms),
            **{
                step: _ms(value) for step, value in outcome.timings.as_dict().items()
            },
        )

    summary = report.summary
    logger.info(
        "batch_summary",
        region=report.region,
        completed_at=report.finished_at.isoformat(),
        total_orders=summary.total_count,
        successful_orders=summary.success_count,
        failed_orders=summary.failure_count,
        individual_latencies_ms=[_ms(o.total_duration_ms) for o in report.outcomes],
        average_latency_ms=_ms(summary.average_latency_ms),
        average_step_timings_ms={
            step: _ms(value) for step, value in summary.average_step_timings.items()
        },
    )
