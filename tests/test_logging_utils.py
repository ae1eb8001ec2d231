"""Tests for logging setup, structured events and redaction helpers."""

from __future__ import annotations

import json
import logging

from free_press.config import LoggingConfig
from free_press.logging_utils import (
    EventFormatter,
    event_fields,
    log_event,
    redact_text,
    setup_llm_logger,
    setup_logging,
    truncate_text,
)


def _read_jsonl(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


def _record(message, **fields):
    record = logging.makeLogRecord({"name": "free_press.test", "levelno": logging.INFO, "levelname": "INFO", "msg": message})
    for key, value in fields.items():
        setattr(record, key, value)
    return record


def test_setup_logging_writes_jsonl(tmp_path):
    cfg = LoggingConfig(console=False, file=True, format="jsonl", filename="run.jsonl")
    logger = setup_logging(cfg, log_dir=tmp_path)

    log_event(logging.getLogger("free_press.test"), "Loaded outlets", count=3)
    for handler in logger.handlers:
        handler.flush()

    record = _read_jsonl(tmp_path / "run.jsonl")[-1]
    assert record["message"] == "Loaded outlets"
    assert record["count"] == 3
    assert record["logger"] == "free_press.test"
    assert record["level"] == "INFO"


def test_setup_logging_quiets_http_client_logs(tmp_path):
    setup_logging(LoggingConfig(console=False, file=False, level="DEBUG"), log_dir=tmp_path)
    assert logging.getLogger("httpx").level == logging.WARNING


def test_log_event_drops_none_and_renames_reserved_fields(tmp_path):
    cfg = LoggingConfig(console=False, file=True, format="jsonl", filename="run.jsonl")
    logger = setup_logging(cfg, log_dir=tmp_path)

    log_event(
        logging.getLogger("free_press.enrichment"),
        "Enrichment step finished",
        level=logging.WARNING,
        outlet_id="cnn",
        step="legal",
        provider=None,
        name="CNN",
    )
    for handler in logger.handlers:
        handler.flush()

    record = _read_jsonl(tmp_path / "run.jsonl")[-1]
    assert record["level"] == "WARNING"
    assert record["outlet_id"] == "cnn"
    assert record["field_name"] == "CNN"
    assert "provider" not in record


def test_event_formatter_shows_outlet_context_and_fields():
    record = _record("Enrichment step finished", outlet_id="cnn", step="funding", success=False, error="No AI response")

    text = EventFormatter().format(record)

    assert text == "Enrichment step finished [cnn/funding] success=False error=No AI response"
    assert event_fields(record)["outlet_id"] == "cnn"


def test_event_formatter_without_fields():
    assert EventFormatter().format(_record("Loaded outlets")) == "Loaded outlets"


def test_setup_llm_logger_disabled_by_default(tmp_path):
    assert setup_llm_logger(LoggingConfig(), log_dir=tmp_path) is None


def test_setup_llm_logger_writes_jsonl(tmp_path):
    logger = setup_llm_logger(LoggingConfig(llm_log_enabled=True, llm_log_file="llm.jsonl"), log_dir=tmp_path)
    assert logger is not None

    log_event(logger, "LLM response", provider="openai", status="ok")
    for handler in logger.handlers:
        handler.flush()

    [record] = _read_jsonl(tmp_path / "llm.jsonl")
    assert record["provider"] == "openai"
    assert record["logger"] == "free_press.llm.responses"


def test_redact_text_modes():
    text = "See https://example.com/a?b=1 for details"
    assert redact_text(text, "none") == text
    assert redact_text(text, "redact_content") == ""
    assert redact_text(text, "redact_urls") == "See [REDACTED_URL] for details"


def test_truncate_text():
    assert truncate_text("abc", 5) == "abc"
    assert truncate_text("abcdef", 3) == "abc...(truncated 3 chars)"


def test_log_event_accepts_missing_logger():
    log_event(None, "ignored", a=1)
