"""Tests for logging setup and structured JSONL events."""

from __future__ import annotations

import json
import logging

from sponsor_facts.config import LoggingConfig
from sponsor_facts.logging_utils import log_event, setup_logging


def test_jsonl_file_logging_includes_event_fields(tmp_path):
    cfg = LoggingConfig(level="DEBUG", console=False, file=True, format="jsonl", filename="run.jsonl")
    logger = setup_logging(cfg, tmp_path)

    log_event(
        logging.getLogger("sponsor_facts.aggregator"),
        "Provider wikipedia failed: no search results",
        event="provider_failed",
        provider="wikipedia",
        reason="no search results",
    )
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / "run.jsonl").read_text(encoding="utf-8").splitlines()
    payload = json.loads(lines[-1])
    assert payload["level"] == "INFO"
    assert payload["logger"] == "sponsor_facts.aggregator"
    assert payload["event"] == "provider_failed"
    assert payload["reason"] == "no search results"
    assert payload["where"].startswith("test_logging_utils:")


def test_plain_file_logging_and_level_filter(tmp_path):
    cfg = LoggingConfig(level="WARNING", console=False, file=True, format="plain", filename="run.log")
    logger = setup_logging(cfg, tmp_path)

    log_event(logger, "hidden detail", level=logging.INFO, event="noise")
    log_event(logger, "visible warning", level=logging.WARNING, event="signal")
    for handler in logger.handlers:
        handler.flush()

    text = (tmp_path / "run.log").read_text(encoding="utf-8")
    assert "visible warning" in text
    assert "hidden detail" not in text


def test_log_event_ignores_missing_logger():
    log_event(None, "nothing happens", event="noop")
