"""
mgm: a document model layer for MongoDB.

Documents extend :class:`DefaultModel` to get an ``ObjectId`` identifier and
managed ``create_time`` / ``last_modify_time`` timestamps. Collections are
resolved with :func:`coll` and multi-step work runs atomically through
:func:`transaction`.
"""

from .collection import Collection  # noqa: F401
from .config import (  # noqa: F401
    Connection,
    ConnectionConfig,
    ctx,
    default_connection,
    reset_default_connection,
    set_default_config,
)
from .context import Context, SessionContext, background  # noqa: F401
from .core import (  # noqa: F401
    BooleanField,
    CollectionGetter,
    CollectionNameGetter,
    DateFields,
    DefaultModel,
    Field,
    FloatField,
    IDField,
    IntegerField,
    Model,
    ObjectIdField,
    StringField,
    prepare_id,
)
from .errors import (  # noqa: F401
    ConfigurationError,
    ContextCancelled,
    DeadlineExceeded,
    DocumentNotFound,
    HookFailure,
    IdentifierAlreadySet,
    InvalidIdentifier,
    MGMError,
    ModelConfigurationError,
    SessionAcquisitionError,
    TransactionBodyError,
    TransactionStartError,
)
from .hooks import hooks  # noqa: F401
from .resolver import coll, coll_name, collection_by_name  # noqa: F401
from .session import Session  # noqa: F401
from .transaction import (  # noqa: F401
    TransactionRunner,
    transaction,
    transaction_with_client,
    transaction_with_ctx,
)

__all__ = [
    "BooleanField",
    "Collection",
    "CollectionGetter",
    "CollectionNameGetter",
    "ConfigurationError",
    "Connection",
    "ConnectionConfig",
    "Context",
    "ContextCancelled",
    "DateFields",
    "DeadlineExceeded",
    "DefaultModel",
    "DocumentNotFound",
    "Field",
    "FloatField",
    "HookFailure",
    "IDField",
    "IdentifierAlreadySet",
    "IntegerField",
    "InvalidIdentifier",
    "MGMError",
    "Model",
    "ModelConfigurationError",
    "ObjectIdField",
    "Session",
    "SessionAcquisitionError",
    "SessionContext",
    "StringField",
    "TransactionBodyError",
    "TransactionRunner",
    "TransactionStartError",
    "background",
    "coll",
    "coll_name",
    "collection_by_name",
    "ctx",
    "default_connection",
    "hooks",
    "prepare_id",
    "reset_default_connection",
    "set_default_config",
    "transaction",
    "transaction_with_client",
    "transaction_with_ctx",
]
