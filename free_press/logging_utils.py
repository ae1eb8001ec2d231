"""
Logging setup for the outlet catalog.

Events are logged with structured fields through ``log_event``:
- console: rich output, with the outlet/step context and fields appended
- file: JSONL (one object per event) or plain text
- LLM responses: a separate JSONL file, when enabled

Fields set to None are dropped, so callers can pass optional context such as
``provider=result.provider`` without guarding it.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
import re
from typing import Any

from rich.logging import RichHandler

from .config import LoggingConfig


_URL_RE = re.compile(r"https?://\S+")

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}

# Fields rendered as a "outlet_id/step" prefix on the console.
_CONTEXT_FIELDS = ("outlet_id", "step")

# Libraries that log every HTTP request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(cfg: LoggingConfig, log_dir: Path | None = None) -> logging.Logger:
    """Configure the ``free_press`` logger tree from the logging config."""
    level = _level_from_string(cfg.level)
    logger = _reset_logger("free_press", level)

    if cfg.console:
        console_handler = RichHandler(rich_tracebacks=True, show_time=False, show_level=True, markup=False)
        console_handler.setLevel(level)
        console_handler.setFormatter(EventFormatter())
        logger.addHandler(console_handler)

    if cfg.file:
        target_dir = log_dir if log_dir is not None else Path(cfg.directory)
        logger.addHandler(_file_handler(target_dir / cfg.filename, level, _build_file_formatter(cfg.format)))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    return logger


def setup_llm_logger(cfg: LoggingConfig, log_dir: Path | None = None) -> logging.Logger | None:
    """Return the JSONL logger for raw provider answers, or None when disabled."""
    if not cfg.llm_log_enabled:
        return None
    level = _level_from_string(cfg.level)
    logger = _reset_logger("free_press.llm.responses", level)
    target_dir = log_dir if log_dir is not None else Path(cfg.directory)
    logger.addHandler(_file_handler(target_dir / cfg.llm_log_file, level, JsonlFormatter()))
    return logger


def log_event(logger: logging.Logger | None, message: str, level: int = logging.INFO, **fields: Any) -> None:
    """Log ``message`` with structured fields.

    None-valued fields are dropped. Fields that clash with LogRecord attributes
    (``name``, ``module``, ...) are kept under a ``field_`` prefix.
    """
    if logger is None:
        return
    extra = {}
    for key, value in fields.items():
        if value is None:
            continue
        extra[f"field_{key}" if key in _RESERVED else key] = value
    logger.log(level, message, extra=extra)


def redact_text(text: str, mode: str) -> str:
    """Apply a redaction mode ("none", "redact_content" or "redact_urls")."""
    if mode == "redact_content":
        return ""
    if mode == "redact_urls":
        return _URL_RE.sub("[REDACTED_URL]", text)
    return text


def truncate_text(text: str, max_chars: int = 20000) -> str:
    if len(text) <= max_chars:
        return text
    return f"{text[:max_chars]}...(truncated {len(text) - max_chars} chars)"


def event_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Structured fields attached to a record through ``log_event``."""
    return {key: value for key, value in vars(record).items() if key not in _RESERVED}


class EventFormatter(logging.Formatter):
    """Console format: ``message [outlet_id/step] key=value ...``."""

    def format(self, record: logging.LogRecord) -> str:
        fields = event_fields(record)
        context = "/".join(str(fields.pop(key)) for key in _CONTEXT_FIELDS if key in fields)
        parts = [record.getMessage()]
        if context:
            parts.append(f"[{context}]")
        parts.extend(f"{key}={value}" for key, value in fields.items())
        text = " ".join(parts)
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return text


class JsonlFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(event_fields(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def _reset_logger(name: str, level: int) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False
    return logger


def _file_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.FileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _build_file_formatter(fmt: str) -> logging.Formatter:
    if fmt == "jsonl":
        return JsonlFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")


def _level_from_string(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)
