"""Tests for structlog setup."""

import logging
from decimal import Decimal

import structlog

from hedge_latency.logging import _decimals_to_str, get_logger, setup_logging


def test_decimals_rendered_as_strings() -> None:
    event = _decimals_to_str(
        None, "info", {"event": "order_request", "limit_price": Decimal("150.2"), "n": 1}
    )
    assert event == {"event": "order_request", "limit_price": "150.2", "n": 1}


def test_setup_sets_root_level(monkeypatch) -> None:
    monkeypatch.setenv("LOG_FORMAT", "json")
    setup_logging("debug")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert logging.getLogger("ccxt").level == logging.WARNING
    get_logger("hedge_latency.test").info("logging_configured", price=Decimal("1.5"))


def test_unknown_level_falls_back_to_info(monkeypatch) -> None:
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    setup_logging("verbose")
    root = logging.getLogger()
    assert root.level == logging.INFO
    assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
