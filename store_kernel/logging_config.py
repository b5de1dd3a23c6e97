"""
Structured JSON logging for the store finance kernel.

Every record is written as one JSON line. Events are snake_case messages
(``financial_entry_saved``, ``financial_report_generated``) whose payload
comes from ``extra={...}``. Entry writes run inside ``LogContext.bind`` so
that every line they emit names the store and period being written.

Amounts are logged as strings to keep their exact decimal value.
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

LOGGER_PREFIX = "store_kernel"

_store: ContextVar[str | None] = ContextVar("log_store", default=None)
_period: ContextVar[str | None] = ContextVar("log_period", default=None)


class LogContext:
    """The store and period of the entry currently being written."""

    @staticmethod
    @contextmanager
    def bind(store: str | None = None, period: str | None = None) -> Iterator[None]:
        """Tag every log line inside the block; restores the outer values on exit."""
        tokens = []
        if store is not None:
            tokens.append((_store, _store.set(store)))
        if period is not None:
            tokens.append((_period, _period.set(period)))
        try:
            yield
        finally:
            for var, token in reversed(tokens):
                var.reset(token)

    @staticmethod
    def get_all() -> dict[str, str]:
        fields = {"store": _store.get(), "period": _period.get()}
        return {k: v for k, v in fields.items() if v is not None}

    @staticmethod
    def clear() -> None:
        _store.set(None)
        _period.set(None)


# Attributes every LogRecord carries; anything else came from ``extra``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "taskName"}


def _jsonable(value: Any) -> Any:
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    return value


class StructuredFormatter(logging.Formatter):
    """One JSON object per record: envelope, entry context, then event fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **LogContext.get_all(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                payload[key] = _jsonable(value)

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            payload["error"] = {
                "type": type(exc).__name__,
                "code": getattr(exc, "code", None),
                "message": str(exc),
                **{
                    k: _jsonable(v)
                    for k, v in vars(exc).items()
                    if not k.startswith("_")
                },
            }
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``store_kernel`` namespace."""
    return logging.getLogger(f"{LOGGER_PREFIX}.{name}")


_configured = False


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """Attach a JSON handler to the ``store_kernel`` logger. Later calls are no-ops."""
    global _configured
    if _configured:
        return
    _configured = True

    logger = logging.getLogger(LOGGER_PREFIX)
    logger.setLevel(level)
    logger.propagate = False
    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)


def reset_logging() -> None:
    """Undo configure_logging. Used by tests and the CLI."""
    global _configured
    _configured = False
    logger = logging.getLogger(LOGGER_PREFIX)
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)
    logger.propagate = True
