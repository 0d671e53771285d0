"""MongoDB connection string parsing and redaction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import parse_qs, parse_qsl, unquote, urlencode

from .redaction import redact_query_params

SCHEMES = ("mongodb", "mongodb+srv")


@dataclass
class MongoURI:
    scheme: str
    username: Optional[str]
    password: Optional[str]
    hosts: list[str]
    database: Optional[str]
    query: dict[str, str] = field(default_factory=dict)

    @property
    def is_srv(self) -> bool:
        return self.scheme == "mongodb+srv"

    def redacted(self) -> str:
        """
        Return the URI with the password and sensitive options masked.
        """

        userinfo = ""
        if self.username:
            userinfo = self.username
            if self.password:
                userinfo += ":***"
            userinfo += "@"

        result = f"{self.scheme}://{userinfo}{','.join(self.hosts)}/"
        if self.database:
            result += self.database
        if self.query:
            result += f"?{urlencode(redact_query_params(self.query))}"
        return result


def parse_mongo_uri(uri: str) -> MongoURI:
    """
    Split a ``mongodb://`` or ``mongodb+srv://`` URI into its parts.

    Unlike :func:`urllib.parse.urlparse` this accepts the comma separated
    host lists used for replica sets.
    """

    scheme, sep, rest = uri.partition("://")
    if not sep or scheme not in SCHEMES:
        raise ValueError(f"Unsupported MongoDB URI scheme in {uri!r}")

    rest, _, query_string = rest.partition("?")
    netloc, _, path = rest.partition("/")

    username = password = None
    if "@" in netloc:
        userinfo, _, netloc = netloc.rpartition("@")
        user, has_password, secret = userinfo.partition(":")
        username = unquote(user) or None
        password = unquote(secret) if has_password else None

    hosts = [host for host in netloc.split(",") if host]
    if not hosts:
        raise ValueError("MongoDB URI does not name any host")

    query = {key: values[0] for key, values in parse_qs(query_string).items()}
    return MongoURI(
        scheme=scheme,
        username=username,
        password=password,
        hosts=hosts,
        database=unquote(path) or None,
        query=query,
    )


def without_query_option(uri: str, name: str) -> str:
    """
    Return ``uri`` with the query option ``name`` removed (case-insensitive).
    """

    base, sep, query_string = uri.partition("?")
    if not sep:
        return uri
    kept = [
        (key, value)
        for key, value in parse_qsl(query_string, keep_blank_values=True)
        if key.lower() != name.lower()
    ]
    if not kept:
        return base
    return f"{base}?{urlencode(kept)}"
