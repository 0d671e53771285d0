"""
Identifier handling: conversion between hex strings and ``bson.ObjectId``.
"""

from __future__ import annotations

from typing import Any, Optional

from bson import ObjectId

from ..errors import InvalidIdentifier
from .fields import ObjectIdField
from .model import Model


def prepare_id(raw: Any) -> ObjectId:
    """
    Normalize ``raw`` into an ``ObjectId``.

    Strings must be the 24 character hex encoding. ``ObjectId`` values pass
    through unchanged and anything else is rejected.
    """
    if isinstance(raw, ObjectId):
        return raw
    if isinstance(raw, str):
        if not ObjectId.is_valid(raw):
            raise InvalidIdentifier(f"'{raw}' is not a valid ObjectId hex string")
        return ObjectId(raw)
    raise InvalidIdentifier(f"Cannot use {type(raw).__name__} as an identifier")


class IDField(Model):
    """
    Field group holding a document's ``_id``.

    The hex string form is derived from the stored ``ObjectId``, so
    :meth:`get_id_str` always matches :meth:`get_id`.
    """

    object_id = ObjectIdField(key="_id")

    class Meta:
        abstract = True

    def prepare_id(self, raw: Any) -> ObjectId:
        return prepare_id(raw)

    def get_id(self) -> Optional[ObjectId]:
        return self.object_id

    def set_id(self, value: Any) -> None:
        if not isinstance(value, ObjectId):
            raise InvalidIdentifier(
                f"set_id expects an ObjectId, received {type(value).__name__}"
            )
        self.object_id = value

    def get_id_str(self) -> str:
        value = self.object_id
        return "" if value is None else str(value)

    @property
    def id(self) -> str:
        return self.get_id_str()

    def is_new(self) -> bool:
        return self.object_id is None
