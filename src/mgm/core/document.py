"""
The default document composition and collection capabilities.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .identifier import IDField
from .timestamps import DateFields

if TYPE_CHECKING:
    from ..collection import Collection


@runtime_checkable
class CollectionGetter(Protocol):
    """A model that supplies its own collection handle."""

    def collection(self) -> "Collection": ...


@runtime_checkable
class CollectionNameGetter(Protocol):
    """A model that supplies the name of its collection."""

    def collection_name(self) -> str: ...


class DefaultModel(IDField, DateFields):
    """
    Base for application documents: an ``_id`` plus managed timestamps.

    Subclasses overriding ``creating`` or ``saving`` should call ``super()``
    to keep the timestamps maintained.
    """

    class Meta:
        abstract = True

    def to_msgpack(self) -> bytes:
        from ..codec import encode_default_fields

        return encode_default_fields(self.get_id_str(), self.created_at, self.updated_at)

    @classmethod
    def from_msgpack(cls, data: bytes) -> "DefaultModel":
        from ..codec import decode_default_fields

        fields = decode_default_fields(data)
        instance = cls(created_at=fields["create_time"], updated_at=fields["last_modify_time"])
        if fields["id"]:
            instance.set_id(instance.prepare_id(fields["id"]))
        return instance
