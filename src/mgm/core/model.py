"""
Model base classes and metadata orchestration for mgm.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Type, TypeVar

from ..errors import ModelConfigurationError
from ..utils import normalize_collection_name
from .fields import Field


@dataclass
class ModelOptions:
    """
    Container for model metadata calculated by :class:`ModelMeta`.
    """

    model: Type["Model"]
    collection_name: str = ""
    abstract: bool = False
    fields: "OrderedDict[str, Field]" = field(default_factory=OrderedDict)

    def add_field(self, field_obj: Field) -> None:
        name = field_obj.require_name()
        if name in self.fields:
            raise ModelConfigurationError(
                f"Duplicate field name '{name}' on model '{self.model.__name__}'"
            )
        key = field_obj.document_key()
        for existing in self.fields.values():
            if existing.document_key() == key:
                raise ModelConfigurationError(
                    f"Fields '{existing.name}' and '{name}' on model "
                    f"'{self.model.__name__}' share the document key '{key}'"
                )
        self.fields[name] = field_obj

    def get_fields(self) -> Iterable[Field]:
        return self.fields.values()

    def field_for_key(self, key: str) -> Optional[Field]:
        for field_obj in self.fields.values():
            if field_obj.document_key() == key:
                return field_obj
        return None


TModel = TypeVar("TModel", bound="Model")


class ModelMeta(type):
    """
    Metaclass responsible for collecting fields and establishing metadata.

    Fields declared on base models (field groups such as ``IDField`` and
    ``DateFields``) come first, in the order the bases are listed, followed
    by the fields the class declares itself.
    """

    def __new__(mcls, name: str, bases: tuple[type, ...], attrs: Dict[str, Any]) -> "ModelMeta":
        # Allow creation of the base Model class without processing fields.
        if name == "Model" and not bases:
            return super().__new__(mcls, name, bases, attrs)

        declared_fields: Dict[str, Field] = {}
        for attr_name, value in list(attrs.items()):
            if isinstance(value, Field):
                declared_fields[attr_name] = attrs.pop(attr_name)

        cls = super().__new__(mcls, name, bases, attrs)

        meta = cls.__dict__.get("Meta")
        abstract = bool(getattr(meta, "abstract", False)) if meta else False
        cls._meta = ModelOptions(
            model=cls,
            collection_name=normalize_collection_name(name),
            abstract=abstract,
        )

        for base in bases:
            base_meta: Optional[ModelOptions] = getattr(base, "_meta", None)
            if base_meta is None:
                continue
            for inherited in base_meta.get_fields():
                if inherited.name in cls._meta.fields or inherited.name in declared_fields:
                    continue
                cls._meta.add_field(inherited)

        sorted_fields = sorted(
            declared_fields.items(), key=lambda item: item[1].creation_counter
        )
        for attr_name, field_obj in sorted_fields:
            field_obj.contribute_to_class(cls, attr_name)
            cls._meta.add_field(field_obj)

        return cls


class Model(metaclass=ModelMeta):
    """
    Base model providing the data container and document mapping.
    Persistence operations live on :class:`mgm.collection.Collection`.
    """

    def __init__(self, **kwargs: Any) -> None:
        self._field_values: Dict[str, Any] = {}

        unknown = set(kwargs) - set(self._meta.fields)
        if unknown:
            raise TypeError(
                f"{self.__class__.__name__} got unexpected fields: {', '.join(sorted(unknown))}"
            )
        for field_obj in self._meta.get_fields():
            if field_obj.name in kwargs:
                setattr(self, field_obj.name, kwargs[field_obj.name])

    def __repr__(self) -> str:
        field_parts = ", ".join(
            f"{name}={value!r}" for name, value in self._field_values.items()
        )
        return f"<{self.__class__.__name__} {field_parts}>"

    def to_dict(self) -> Dict[str, Any]:
        return {field_obj.name: getattr(self, field_obj.name) for field_obj in self._meta.get_fields()}

    def to_document(self) -> Dict[str, Any]:
        """
        Build the mapping written to the collection, keyed by document keys.
        """
        document: Dict[str, Any] = {}
        for field_obj in self._meta.get_fields():
            value = getattr(self, field_obj.require_name())
            if field_obj.omit_empty and field_obj.is_empty(value):
                continue
            document[field_obj.document_key()] = field_obj.to_storage(value)
        return document

    def load_document(self: TModel, document: Mapping[str, Any]) -> TModel:
        """
        Populate this instance from a stored document. Unknown keys are ignored.

        Loading is all or nothing: if any value is rejected, the instance keeps
        the values it had before the call.
        """
        snapshot = dict(self._field_values)
        try:
            for key, value in document.items():
                field_obj = self._meta.field_for_key(key)
                if field_obj is None:
                    continue
                setattr(self, field_obj.require_name(), value)
        except Exception:
            self._field_values = snapshot
            raise
        return self

    @classmethod
    def from_document(cls: Type[TModel], document: Mapping[str, Any]) -> TModel:
        return cls().load_document(document)

    @classmethod
    def register_hook(cls, event: str, handler) -> None:
        from ..hooks import hooks

        hooks.register(event, handler, model=cls)
