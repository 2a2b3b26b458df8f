"""Entry point for the hedge latency client.

Wires all components together, connects to the market-data cache and (in
live mode) the exchange, runs the configured batch of IOC hedge orders,
and reports per-order and aggregate latency.

Component wiring order (in _build_components):
1. AppSettings (configuration)
2. Logging setup
3. MarketDataGateway (Redis)
4. ExchangeClient (Hyperliquid via ccxt, live mode only)
5. OrderSubmitter (PaperSubmitter or LiveSubmitter based on mode)
6. PriceSizeQuantizer (tick size table from settings)
7. ExecutionPipeline (per-order fetch -> compute -> submit)
8. BatchSummarizer (sequential batch driver)
"""

import asyncio
import sys
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from hedge_latency.batch import BatchSummarizer
from hedge_latency.config import AppSettings
from hedge_latency.exceptions import ConnectionFailure
from hedge_latency.exchange.client import ExchangeClient
from hedge_latency.execution.pipeline import ExecutionPipeline
from hedge_latency.execution.quantizer import PriceSizeQuantizer
from hedge_latency.logging import get_logger, setup_logging
from hedge_latency.market_data.gateway import MarketDataGateway
from hedge_latency.market_data.redis_gateway import RedisMarketDataGateway
from hedge_latency.models import OrderRequest
from hedge_latency.report import BatchReport, log_report


def _build_components(settings: AppSettings) -> dict[str, Any]:
    """Build all components from settings.

    Does NOT connect anything -- that happens in execute_batch() so that
    connection failures and cleanup are handled in one place.

    Args:
        settings: Application-wide settings.

    Returns:
        Dict mapping component names to instances.
    """
    logger = get_logger("hedge_latency.main")

    gateway = RedisMarketDataGateway(settings.redis)

    exchange_client: ExchangeClient | None = None
    if settings.execution.mode == "paper":
        from hedge_latency.execution.paper_submitter import PaperSubmitter

        submitter = PaperSubmitter()
    else:
        from hedge_latency.exchange.hyperliquid_client import HyperliquidClient
        from hedge_latency.execution.live_submitter import LiveSubmitter

        if not settings.exchange.private_key.get_secret_value():
            logger.warning(
                "no_private_key_configured",
                mode="live",
                note="Order submission will be rejected by the exchange.",
            )
        exchange_client = HyperliquidClient(settings.exchange)
        submitter = LiveSubmitter(exchange_client, settings.exchange)

    quantizer = PriceSizeQuantizer(
        tick_sizes=settings.execution.tick_sizes,
        base_bps=settings.execution.base_bps,
        bps_step=settings.execution.bps_step,
    )

    pipeline = ExecutionPipeline(
        gateway=gateway,
        submitter=submitter,
        quantizer=quantizer,
        settings=settings.execution,
    )

    return {
        "gateway": gateway,
        "exchange_client": exchange_client,
        "submitter": submitter,
        "quantizer": quantizer,
        "pipeline": pipeline,
        "summarizer": BatchSummarizer(pipeline),
    }


async def execute_batch(
    gateway: MarketDataGateway,
    exchange_client: ExchangeClient | None,
    summarizer: BatchSummarizer,
    requests: Sequence[OrderRequest],
    region: str = "unknown",
    attempt: int = 1,
) -> BatchReport:
    """Connect collaborators, run every request, and always disconnect.

    Raises:
        ConnectionFailure: If the cache or exchange cannot be reached
            before the batch starts. No order is processed in that case.
    """
    logger = get_logger("hedge_latency.main")
    started_at = datetime.now(timezone.utc)
    logger.info(
        "latency_run_starting",
        region=region,
        timestamp=started_at.isoformat(),
        orders=len(requests),
    )

    try:
        await gateway.connect()
        if exchange_client is not None:
            await exchange_client.connect()

        summary, outcomes = await summarizer.run(requests, attempt=attempt)
    finally:
        try:
            await gateway.close()
        finally:
            if exchange_client is not None:
                await exchange_client.close()
            logger.info("latency_run_finished")

    return BatchReport(
        region=region,
        started_at=started_at,
        finished_at=datetime.now(timezone.utc),
        requests=list(requests),
        outcomes=outcomes,
        summary=summary,
    )


async def run() -> int:
    """Run one latency batch. Returns the process exit code."""
    # 1. Load settings
    settings = AppSettings()

    # 2. Setup logging
    setup_logging(settings.log_level)
    logger = get_logger("hedge_latency.main")

    # 3-8. Build all components
    components = _build_components(settings)

    requests = [
        OrderRequest(symbol=entry.symbol, target_usd_value=entry.target_usd_value)
        for entry in settings.batch.orders
    ]

    try:
        report = await execute_batch(
            gateway=components["gateway"],
            exchange_client=components["exchange_client"],
            summarizer=components["summarizer"],
            requests=requests,
            region=settings.region,
            attempt=settings.batch.attempt,
        )
    except ConnectionFailure as exc:
        logger.critical("latency_run_aborted", target=exc.target, error=str(exc))
        return 1

    log_report(report)
    if settings.report_path:
        report.write_json(settings.report_path)
        logger.info("report_written", path=settings.report_path)

    return 0


def main() -> None:
    """Synchronous entry point."""
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
