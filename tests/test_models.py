"""Tests for domain model invariants."""

from decimal import Decimal

import pytest

from hedge_latency.models import (
    BookLevel,
    BookSnapshot,
    OrderOutcome,
    OrderRequest,
    StepTimings,
)


def test_order_request_requires_positive_value() -> None:
    with pytest.raises(ValueError):
        OrderRequest("ETH", Decimal("0"))


def test_best_ask_is_first_ask_level() -> None:
    book = BookSnapshot(
        symbol="ETH",
        bid_levels=(BookLevel(Decimal("149.9"), Decimal("1")),),
        ask_levels=(
            BookLevel(Decimal("150.0"), Decimal("2")),
            BookLevel(Decimal("150.1"), Decimal("5")),
        ),
    )
    assert book.best_ask == Decimal("150.0")


def test_outcome_success_has_no_error() -> None:
    with pytest.raises(ValueError):
        OrderOutcome("ETH", 1.0, StepTimings(), success=True, error_message="boom")


def test_outcome_failure_requires_error() -> None:
    with pytest.raises(ValueError):
        OrderOutcome("ETH", 1.0, StepTimings(), success=False)


def test_step_timings_as_dict() -> None:
    timings = StepTimings(data_fetch_ms=1.5)
    assert timings.as_dict() == {
        "data_fetch_ms": 1.5,
        "calculation_ms": None,
        "param_calculation_ms": None,
        "order_placement_ms": None,
    }
