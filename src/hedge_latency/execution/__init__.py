"""Execution layer -- quantization, submission and the per-order pipeline."""

from hedge_latency.execution.live_submitter import LiveSubmitter
from hedge_latency.execution.paper_submitter import PaperSubmitter
from hedge_latency.execution.pipeline import ExecutionPipeline, calculate_target_size
from hedge_latency.execution.quantizer import PriceSizeQuantizer
from hedge_latency.execution.submitter import OrderSubmitter

__all__ = [
    "ExecutionPipeline",
    "LiveSubmitter",
    "OrderSubmitter",
    "PaperSubmitter",
    "PriceSizeQuantizer",
    "calculate_target_size",
]
