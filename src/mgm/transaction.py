"""
Run caller-supplied logic inside a session-scoped transaction.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from pymongo.errors import PyMongoError

from .config import Connection, default_connection
from .context import Context, SessionContext, background
from .errors import SessionAcquisitionError, TransactionBodyError, TransactionStartError
from .session import Session
from .utils import get_logger

T = TypeVar("T")
TransactionFunc = Callable[[Session, SessionContext], T]


class TransactionRunner:
    """
    Starts a session and a transaction, then hands both to a callable.

    The callable issues ``commit_transaction`` or ``abort_transaction`` as
    its last step. Whatever happens, the session is ended before
    :meth:`run` returns. Exceptions raised by the callable propagate
    unchanged and the body is never retried. A body that returns with the
    transaction still open is aborted and reported as
    :class:`TransactionBodyError`.
    """

    def __init__(self, client: Any) -> None:
        self.client = client
        self.logger = get_logger("transaction")

    def run(self, fn: TransactionFunc[T], ctx: Optional[Context] = None, **transaction_options: Any) -> T:
        parent = ctx if ctx is not None else background()
        try:
            session = Session(self.client.start_session())
        except PyMongoError as exc:
            raise SessionAcquisitionError("Failed to start a session") from exc

        try:
            try:
                session.start_transaction(**transaction_options)
            except PyMongoError as exc:
                raise TransactionStartError("Failed to start a transaction") from exc

            result = fn(session, parent.with_session(session))

            if session.in_transaction:
                session.abort_transaction()
                raise TransactionBodyError(
                    "Transaction body returned without committing or aborting; the transaction was aborted"
                )
            return result
        finally:
            session.end()


def transaction_with_client(ctx: Context, client: Any, fn: TransactionFunc[T]) -> T:
    return TransactionRunner(client).run(fn, ctx)


def transaction_with_ctx(ctx: Context, fn: TransactionFunc[T], *, connection: Optional[Connection] = None) -> T:
    """
    Run ``fn`` in a transaction whose session context derives from ``ctx``.
    """
    return transaction_with_client(ctx, (connection or default_connection()).client, fn)


def transaction(fn: TransactionFunc[T], *, connection: Optional[Connection] = None) -> T:
    """
    Run ``fn`` in a transaction under a fresh background context.
    """
    return transaction_with_ctx(background(), fn, connection=connection)
