"""
Execution contexts carrying deadlines, cancellation and the active session.

A context is threaded through every storage call. Deadlines are enforced by
the driver via ``pymongo.timeout``; this module only computes what remains.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Generator, Optional

import pymongo

from .errors import ContextCancelled, DeadlineExceeded

if TYPE_CHECKING:
    from .session import Session


class Context:
    """
    Cancellation and deadline carrier.

    Cancelling a context cancels every context derived from it; a child's
    deadline is never later than its parent's.
    """

    def __init__(self, *, timeout: float | None = None, parent: Optional["Context"] = None) -> None:
        self.parent = parent
        deadline = None if timeout is None else time.monotonic() + timeout
        parent_deadline = parent.deadline if parent is not None else None
        if parent_deadline is not None and (deadline is None or parent_deadline < deadline):
            deadline = parent_deadline
        self.deadline: float | None = deadline
        self._cancelled = False

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} remaining={self.remaining()} cancelled={self.cancelled}>"

    @property
    def session(self) -> Optional["Session"]:
        if self.parent is not None:
            return self.parent.session
        return None

    @property
    def cancelled(self) -> bool:
        if self._cancelled:
            return True
        return self.parent is not None and self.parent.cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def remaining(self) -> float | None:
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def err(self) -> ContextCancelled | None:
        if self.cancelled:
            return ContextCancelled("context cancelled")
        if self.deadline is not None and time.monotonic() >= self.deadline:
            return DeadlineExceeded("context deadline exceeded")
        return None

    def raise_if_done(self) -> None:
        error = self.err()
        if error is not None:
            raise error

    @contextmanager
    def bounded(self) -> Generator["Context", None, None]:
        """
        Run a driver call under this context's remaining time budget.
        """
        self.raise_if_done()
        remaining = self.remaining()
        if remaining is None:
            yield self
            return
        with pymongo.timeout(remaining):
            yield self

    def with_timeout(self, timeout: float) -> "Context":
        return Context(timeout=timeout, parent=self)

    def with_session(self, session: "Session") -> "SessionContext":
        return SessionContext(session, parent=self)


class SessionContext(Context):
    """
    Context bound to a session; storage calls made with it join the session.
    """

    def __init__(self, session: "Session", *, parent: Optional[Context] = None) -> None:
        super().__init__(parent=parent)
        self._session = session

    @property
    def session(self) -> "Session":
        return self._session


def background() -> Context:
    """
    A context with no deadline that is never cancelled by anyone else.
    """
    return Context()
