"""
Helpers for handling connection credentials safely.
"""

from .redaction import REDACTED_VALUE, is_sensitive_key, redact_filter, redact_value
from .uris import MongoURI, parse_mongo_uri, without_query_option

__all__ = [
    "MongoURI",
    "REDACTED_VALUE",
    "is_sensitive_key",
    "parse_mongo_uri",
    "redact_filter",
    "redact_value",
    "without_query_option",
]
