"""
Session wrapper scoping a transaction on a driver ``ClientSession``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from .utils import get_logger, time_call

if TYPE_CHECKING:
    from .context import Context


class Session:
    """
    Thin wrapper around ``pymongo.client_session.ClientSession``.

    Transaction bodies receive one of these and end it with either
    :meth:`commit_transaction` or :meth:`abort_transaction`. The context
    variants run the driver call under the context's time budget.
    """

    def __init__(self, client_session: Any) -> None:
        self.client_session = client_session
        self.logger = get_logger("session")

    def __repr__(self) -> str:
        return f"<Session in_transaction={self.in_transaction} ended={self.has_ended}>"

    @property
    def in_transaction(self) -> bool:
        return bool(self.client_session.in_transaction)

    @property
    def has_ended(self) -> bool:
        return bool(getattr(self.client_session, "has_ended", False))

    def start_transaction(self, **options: Any) -> None:
        self.client_session.start_transaction(**options)
        self.logger.debug("Transaction started")

    def commit_transaction(self, ctx: Optional["Context"] = None) -> None:
        with time_call("session.commit_transaction", self.logger):
            if ctx is None:
                self.client_session.commit_transaction()
            else:
                with ctx.bounded():
                    self.client_session.commit_transaction()

    def abort_transaction(self, ctx: Optional["Context"] = None) -> None:
        with time_call("session.abort_transaction", self.logger):
            if ctx is None:
                self.client_session.abort_transaction()
            else:
                with ctx.bounded():
                    self.client_session.abort_transaction()

    def end(self) -> None:
        """
        End the session. The driver aborts a transaction still in progress.
        """
        if self.has_ended:
            return
        self.client_session.end_session()
        self.logger.debug("Session ended")
