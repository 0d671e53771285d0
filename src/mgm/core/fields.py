"""
Field definitions and descriptors for mgm models.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, cast

from bson import ObjectId

from ..errors import IdentifierAlreadySet, InvalidIdentifier, ModelConfigurationError

if TYPE_CHECKING:
    from .model import Model


class FieldError(ModelConfigurationError):
    """Internal exception for field configuration issues."""


class Field:
    """
    Base class for model field descriptors.

    Fields store their values on the model instance and know the key under
    which the value is written to the stored document.
    """

    _creation_counter = 0

    def __init__(
        self,
        *,
        key: Optional[str] = None,
        default: Any = None,
        nullable: bool = True,
        omit_empty: bool = False,
    ) -> None:
        self.key = key
        self.default = default
        self.nullable = nullable
        self.omit_empty = omit_empty

        self.model: type["Model"] | None = None  # Will be set during contribute_to_class
        self.name: str | None = None
        self.creation_counter = Field._creation_counter
        Field._creation_counter += 1

    # Descriptor protocol -------------------------------------------------
    def __get__(self, instance: object | None, owner: type | None = None) -> Any:
        if instance is None:
            return self

        model_instance = cast("Model", instance)
        name = self.require_name()
        if name not in model_instance._field_values:
            default = self.get_default()
            model_instance._field_values[name] = default
            return default
        return model_instance._field_values[name]

    def __set__(self, instance: object, value: Any) -> None:
        model_instance = cast("Model", instance)
        name = self.require_name()
        if value is None:
            if not self.nullable:
                raise ValueError(f"Field '{name}' cannot be None")
            model_instance._field_values[name] = None
            return
        model_instance._field_values[name] = self.to_python(value)

    # Metadata helpers ----------------------------------------------------
    def contribute_to_class(self, model: type["Model"], name: str) -> None:
        """
        Attach the field to the model class as a descriptor.
        """
        self.model = model
        self.name = name
        if self.key is None:
            self.key = name
        setattr(model, name, self)

    def require_name(self) -> str:
        if self.name is None:
            raise FieldError("Field name is not set.")
        return self.name

    def document_key(self) -> str:
        return self.key or self.require_name()

    # Conversion ----------------------------------------------------------
    def get_default(self) -> Any:
        if callable(self.default):
            return self.default()
        return self.default

    def to_python(self, value: Any) -> Any:
        return value

    def to_storage(self, value: Any) -> Any:
        return value

    def is_empty(self, value: Any) -> bool:
        return value is None


class IntegerField(Field):
    def to_python(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer value '{value}'")
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid integer value '{value}'") from exc


class FloatField(Field):
    def to_python(self, value: Any) -> float:
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid float value '{value}'") from exc


class BooleanField(Field):
    def __init__(self, *, default: Any = False, **kwargs: Any) -> None:
        kwargs.setdefault("nullable", False)
        super().__init__(default=default, **kwargs)

    def to_python(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        raise ValueError(f"Invalid boolean value '{value}'")


class StringField(Field):
    def __init__(self, *, max_length: int | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.max_length = max_length

    def to_python(self, value: Any) -> str:
        result = str(value)
        if self.max_length and len(result) > self.max_length:
            field_name = self.require_name()
            raise ValueError(f"Value for field '{field_name}' exceeds max_length {self.max_length}")
        return result


class ObjectIdField(Field):
    """
    Holds a ``bson.ObjectId``. Once a value is set it cannot be replaced.
    """

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("omit_empty", True)
        super().__init__(**kwargs)

    def __set__(self, instance: object, value: Any) -> None:
        model_instance = cast("Model", instance)
        name = self.require_name()
        if value is None:
            if model_instance._field_values.get(name) is not None:
                raise IdentifierAlreadySet(f"Field '{name}' already holds an identifier")
            model_instance._field_values[name] = None
            return

        new_value = self.to_python(value)
        current = model_instance._field_values.get(name)
        if current is not None and current != new_value:
            raise IdentifierAlreadySet(
                f"Field '{name}' already holds {current}; refusing to replace it with {new_value}"
            )
        model_instance._field_values[name] = new_value

    def to_python(self, value: Any) -> ObjectId:
        if not isinstance(value, ObjectId):
            raise InvalidIdentifier(
                f"Expected ObjectId for field '{self.name}', received {type(value).__name__}"
            )
        return value
