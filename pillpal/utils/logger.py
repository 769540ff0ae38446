"""
Structured logging utilities.
Every record carries an event name, keyword context fields and, when set,
the id of the conversation that produced it.
"""

import logging
import json
from typing import Any
from contextvars import ContextVar

conversation_id_ctx: ContextVar[str | None] = ContextVar(
    "conversation_id", default=None
)


class StructuredFormatter(logging.Formatter):
    """Renders log records as single JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }

        conversation_id = conversation_id_ctx.get()
        if conversation_id:
            log_data["conversation_id"] = conversation_id

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class PlainFormatter(logging.Formatter):
    """Human-readable formatter that still shows the context fields."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = getattr(record, "extra_fields", None)
        if fields:
            rendered = " ".join(f"{key}={value}" for key, value in fields.items())
            line = f"{line} | {rendered}"
        return line


class StructuredLogger:
    """
    Thin wrapper over a standard logger that accepts context as kwargs:

        logger.info("turn_submitted", page_context="reports", length=42)
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _log(self, level: int, event: str, exc_info: bool = False, **fields: Any) -> None:
        self.logger.log(
            level, event, extra={"extra_fields": fields}, exc_info=exc_info
        )

    def debug(self, event: str, **fields: Any) -> None:
        self._log(logging.DEBUG, event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        self._log(logging.INFO, event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        self._log(logging.WARNING, event, **fields)

    def error(self, event: str, exc_info: bool = False, **fields: Any) -> None:
        """
        Log an error event.

        Args:
            event: Event name
            exc_info: If True, include the active exception traceback
            **fields: Additional context fields
        """
        self._log(logging.ERROR, event, exc_info=exc_info, **fields)


def get_logger(name: str) -> StructuredLogger:
    """Returns a StructuredLogger for the given module name."""
    return StructuredLogger(name)


def set_conversation_id(conversation_id: str | None) -> None:
    """Binds a conversation id to the current context."""
    conversation_id_ctx.set(conversation_id)


def get_conversation_id() -> str | None:
    return conversation_id_ctx.get()


def configure_logging(level: str = "INFO", use_structured: bool = True) -> None:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        use_structured: If True, emit JSON lines
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)

    if use_structured:
        formatter = StructuredFormatter(datefmt="%Y-%m-%d %H:%M:%S")
    else:
        formatter = PlainFormatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Provider SDKs log every HTTP request at INFO
    for noisy in ("httpx", "openai", "httpcore"):
        logging.getLogger(noisy).setLevel(max(log_level, logging.WARNING))
