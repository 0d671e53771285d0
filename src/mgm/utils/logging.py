"""Structured logging helpers for mgm."""

from __future__ import annotations

import logging
import os
import time
import uuid
from contextvars import ContextVar
from typing import Any, Mapping, Optional

from ..security.redaction import redact_filter

_correlation_id: ContextVar[str | None] = ContextVar("mgm_correlation_id", default=None)

SLOW_OPERATION_ENV = "MGM_SLOW_OPERATION_MS"


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


def configure_logging(level: int = logging.INFO) -> None:
    logger = logging.getLogger("mgm")
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(correlation_id)s | %(name)s | %(message)s"
    )
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())
    logger.addHandler(handler)
    logger.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"mgm.{name}")


def set_correlation_id(value: Optional[str] = None) -> str:
    token = value or str(uuid.uuid4())
    _correlation_id.set(token)
    return token


def get_correlation_id() -> str:
    cid = _correlation_id.get()
    if cid is None:
        cid = set_correlation_id()
    return cid


def resolve_slow_operation_ms(default: int = 100, override: int | None = None) -> int:
    """
    Pick the slow-operation threshold: explicit override, then environment, then default.
    """
    if override is not None:
        return override
    raw = os.getenv(SLOW_OPERATION_ENV)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def time_call(
    name: str,
    logger: logging.Logger,
    *,
    collection: str | None = None,
    filter: Mapping[str, Any] | None = None,
    threshold_ms: int | None = None,
):
    start = time.monotonic()
    threshold = resolve_slow_operation_ms(override=threshold_ms)

    class Timer:
        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            elapsed_ms = (time.monotonic() - start) * 1000
            level = logging.WARNING if elapsed_ms >= threshold else logging.DEBUG
            if not logger.isEnabledFor(level):
                return
            # Filters are redacted only for records that are actually emitted.
            extra = {"collection": collection, "filter": redact_filter(filter), "elapsed_ms": elapsed_ms}
            logger.log(level, "%s took %.2fms", name, elapsed_ms, extra=extra)

    return Timer()
