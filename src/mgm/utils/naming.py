"""
Naming utilities for mgm.
"""

import re


_WORD_BOUNDARY_RE = re.compile("(.)([A-Z][a-z]+)")
_LOWER_UPPER_RE = re.compile("([a-z0-9])([A-Z])")


def normalize_collection_name(type_name: str) -> str:
    """
    Derive the default collection name from a model class name.

    ``Doc`` becomes ``doc`` and ``HTTPRequestLog`` becomes ``http_request_log``.
    """
    name = type_name.strip("_")
    name = _WORD_BOUNDARY_RE.sub(r"\1_\2", name)
    return _LOWER_UPPER_RE.sub(r"\1_\2", name).lower()
