"""
Connection configuration and the process-wide default connection.

The default connection is initialized once at process start with
:func:`set_default_config` and is read-only afterwards. Code that needs a
different database passes an explicit :class:`Connection` instead.
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from typing import Any, Optional

import pymongo
from pymongo.errors import ConfigurationError as DriverConfigurationError
from pymongo.errors import PyMongoError

from .context import Context
from .errors import ConfigurationError, SessionAcquisitionError
from .security.uris import MongoURI, parse_mongo_uri, without_query_option
from .session import Session
from .utils import get_logger

DEFAULT_CTX_TIMEOUT = 10.0
CTX_TIMEOUT_ENV = "MGM_CTX_TIMEOUT"
CTX_TIMEOUT_OPTION = "ctxTimeout"


def _parse_timeout(value: str, *, key: str) -> float:
    try:
        timeout = float(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid timeout value for '{key}': {value!r}") from exc
    if timeout <= 0:
        raise ConfigurationError(f"Timeout '{key}' must be positive, got {value!r}")
    return timeout


@dataclass
class ConnectionConfig:
    """
    Normalized connection configuration.
    """

    uri: str
    database: str | None = None
    ctx_timeout: float = DEFAULT_CTX_TIMEOUT
    options: dict[str, Any] | None = None
    parsed: MongoURI | None = None
    source: str | None = None

    @classmethod
    def from_uri(cls, uri: str, **kwargs: Any) -> "ConnectionConfig":
        """
        Build a config from a MongoDB URI; the database defaults to the URI path.

        The ``ctxTimeout`` query option (seconds) sets ``ctx_timeout`` unless
        one is passed explicitly. It is removed from the URI handed to the
        driver.
        """

        try:
            parsed = parse_mongo_uri(uri)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc

        option = next((key for key in parsed.query if key.lower() == CTX_TIMEOUT_OPTION.lower()), None)
        if option is not None:
            raw_timeout = parsed.query.pop(option)
            uri = without_query_option(uri, CTX_TIMEOUT_OPTION)
            if kwargs.get("ctx_timeout") is None:
                kwargs["ctx_timeout"] = _parse_timeout(raw_timeout, key=CTX_TIMEOUT_OPTION)

        database = kwargs.pop("database", None) or parsed.database
        return cls(uri=uri, database=database, parsed=parsed, **kwargs)

    @classmethod
    def from_env(cls, env_var: str, **kwargs: Any) -> "ConnectionConfig":
        """
        Build a config from an environment variable holding a MongoDB URI.

        ``MGM_CTX_TIMEOUT`` (seconds) overrides the default operation timeout.
        """

        value = os.getenv(env_var)
        if not value:
            raise ConfigurationError(f"Environment variable {env_var} is not set")
        timeout = os.getenv(CTX_TIMEOUT_ENV)
        if timeout and "ctx_timeout" not in kwargs:
            kwargs["ctx_timeout"] = _parse_timeout(timeout, key=CTX_TIMEOUT_ENV)
        return cls.from_uri(value, source=env_var, **kwargs)

    def redacted_uri(self) -> str:
        """
        Return a URI safe for logging (credentials removed).
        """

        if self.parsed:
            return self.parsed.redacted()
        if not self.uri:
            return "<injected client>"
        return self.uri

    def descriptive_label(self) -> str:
        redacted = self.redacted_uri()
        if self.source:
            return f"{self.source} ({redacted})"
        return redacted


class Connection:
    """
    A client plus the database documents are stored in.

    Pass ``client`` to reuse an existing ``MongoClient``; otherwise one is
    created from ``config.uri`` and closed by :meth:`close`.
    """

    def __init__(self, config: ConnectionConfig, *, client: Any = None, **client_options: Any) -> None:
        if not config.database:
            raise ConfigurationError("A database name is required")
        self.config = config
        self.logger = get_logger("connection")
        self._owns_client = client is None
        self.client = client if client is not None else self._create_client(config, client_options)
        self.database = self.client.get_database(config.database)

    def _create_client(self, config: ConnectionConfig, client_options: dict[str, Any]) -> Any:
        options = dict(config.options or {})
        options.update(client_options)
        self.logger.info("Connecting to MongoDB %s", config.descriptive_label())
        try:
            return pymongo.MongoClient(config.uri, **options)
        except DriverConfigurationError as exc:
            raise ConfigurationError(f"Invalid MongoDB configuration: {exc}") from exc

    def collection(self, name: str):
        from .collection import Collection

        return Collection(self.database.get_collection(name), connection=self)

    def ctx(self) -> Context:
        """
        A fresh context bounded by the configured operation timeout.
        """
        return Context(timeout=self.config.ctx_timeout)

    def start_session(self, **options: Any) -> Session:
        try:
            return Session(self.client.start_session(**options))
        except PyMongoError as exc:
            raise SessionAcquisitionError("Failed to start a session") from exc

    def close(self) -> None:
        if self._owns_client:
            self.client.close()


_default_connection: Optional[Connection] = None
_default_lock = threading.Lock()


def set_default_config(
    config: ConnectionConfig | None = None,
    db_name: str | None = None,
    uri: str | None = None,
    *,
    client: Any = None,
    **client_options: Any,
) -> Connection:
    """
    Initialize the default connection. Call once, at process start.
    """

    global _default_connection
    if config is None:
        if uri:
            config = ConnectionConfig.from_uri(uri, database=db_name)
        elif client is not None:
            config = ConnectionConfig(uri="", database=db_name)
        else:
            raise ConfigurationError("Either a config, a URI or a client is required")
    elif db_name:
        config.database = db_name

    with _default_lock:
        if _default_connection is not None:
            raise ConfigurationError(
                "Default connection already initialized; call reset_default_connection() first"
            )
        _default_connection = Connection(config, client=client, **client_options)
        return _default_connection


def default_connection() -> Connection:
    if _default_connection is None:
        raise ConfigurationError("Default connection is not initialized; call set_default_config()")
    return _default_connection


def reset_default_connection() -> None:
    """
    Drop (and close) the default connection. Meant for shutdown and tests.
    """

    global _default_connection
    with _default_lock:
        if _default_connection is not None:
            _default_connection.close()
        _default_connection = None


def ctx() -> Context:
    """
    A context bounded by the default connection's operation timeout.
    """
    return default_connection().ctx()
