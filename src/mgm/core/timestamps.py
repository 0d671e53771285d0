"""
Creation and modification timestamps kept as integer epoch milliseconds.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Generator, Optional

from ..hooks.protocols import call_next
from .fields import IntegerField
from .model import Model

_pinned_now: ContextVar[Optional[int]] = ContextVar("mgm_operation_clock", default=None)


def now_ms() -> int:
    """
    Current wall-clock time in epoch milliseconds.

    Inside :func:`operation_clock` every call returns the same reading.
    """
    pinned = _pinned_now.get()
    if pinned is not None:
        return pinned
    return time.time_ns() // 1_000_000


@contextmanager
def operation_clock() -> Generator[int, None, None]:
    """
    Pin :func:`now_ms` to a single reading for the duration of one operation.
    """
    token = _pinned_now.set(time.time_ns() // 1_000_000)
    try:
        yield _pinned_now.get()
    finally:
        _pinned_now.reset(token)


class DateFields(Model):
    """
    Field group filling ``create_time`` on insert and ``last_modify_time``
    on every insert or update.
    """

    created_at = IntegerField(key="create_time", default=0, nullable=False)
    updated_at = IntegerField(key="last_modify_time", default=0, nullable=False)

    class Meta:
        abstract = True

    def creating(self) -> None:
        if not self.created_at:
            self.created_at = now_ms()
        call_next(super(DateFields, self), "creating")

    def saving(self) -> None:
        # never moves backwards, even if the wall clock does
        self.updated_at = max(now_ms(), self.created_at, self.updated_at)
        call_next(super(DateFields, self), "saving")
