"""
Error hierarchy for mgm.

Errors raised by the storage driver (``pymongo.errors.PyMongoError``) are not
part of this hierarchy and reach callers untouched.
"""

from __future__ import annotations


class MGMError(Exception):
    """Base error for failures originating in this package."""


class ConfigurationError(MGMError):
    """Raised when the connection configuration is missing or invalid."""


class ModelConfigurationError(MGMError):
    """Raised when a model class is misconfigured."""


class InvalidIdentifier(MGMError, ValueError):
    """Raised when a value cannot be used as a document identifier."""


class IdentifierAlreadySet(InvalidIdentifier):
    """Raised when assigning a different identifier to a document that has one."""


class HookFailure(MGMError):
    """
    Convenience base for errors raised from lifecycle hooks.

    Hooks may raise any exception; it propagates to the caller unchanged and
    the pending storage call is skipped.
    """


class DocumentNotFound(MGMError, LookupError):
    """Raised when a lookup by filter or identifier matches no document."""


class SessionAcquisitionError(MGMError):
    """Raised when the driver cannot start a session."""


class TransactionStartError(MGMError):
    """Raised when a transaction cannot be started on an acquired session."""


class TransactionBodyError(MGMError):
    """Raised when a transaction body returns without committing or aborting."""


class ContextCancelled(MGMError):
    """Raised when an operation is attempted with a cancelled context."""


class DeadlineExceeded(ContextCancelled):
    """Raised when an operation is attempted after the context deadline."""
