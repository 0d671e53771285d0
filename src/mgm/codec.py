"""
MessagePack encoding of the default document fields.

The payload is a map keyed by ``id``, ``create_time`` and
``last_modify_time``, matching what other services already cache.
Unknown keys are skipped when decoding; missing keys keep their defaults.
"""

from __future__ import annotations

from typing import Any, Dict

import msgpack

ID_KEY = "id"
CREATED_KEY = "create_time"
UPDATED_KEY = "last_modify_time"


class CodecError(ValueError):
    """Raised when a payload cannot be decoded into the default fields."""


def encode_default_fields(id_str: str, created_at: int, updated_at: int) -> bytes:
    return msgpack.packb(
        {ID_KEY: id_str, CREATED_KEY: int(created_at), UPDATED_KEY: int(updated_at)},
        use_bin_type=True,
    )


def decode_default_fields(data: bytes) -> Dict[str, Any]:
    try:
        payload = msgpack.unpackb(data, raw=False)
    except ValueError as exc:
        raise CodecError("Malformed MessagePack payload") from exc
    if not isinstance(payload, dict):
        raise CodecError(f"Expected a map, decoded {type(payload).__name__}")

    fields: Dict[str, Any] = {ID_KEY: "", CREATED_KEY: 0, UPDATED_KEY: 0}
    for key, expected in ((ID_KEY, str), (CREATED_KEY, int), (UPDATED_KEY, int)):
        if key not in payload:
            continue
        value = payload[key]
        if not isinstance(value, expected) or isinstance(value, bool):
            raise CodecError(f"Field '{key}' has unexpected type {type(value).__name__}")
        fields[key] = value
    return fields
