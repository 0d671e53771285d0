"""
Core building blocks for mgm documents and metadata handling.
"""

from .fields import (
    BooleanField,
    Field,
    FloatField,
    IntegerField,
    ObjectIdField,
    StringField,
)
from .model import Model, ModelMeta, ModelOptions
from .identifier import IDField, prepare_id
from .timestamps import DateFields, now_ms, operation_clock
from .document import CollectionGetter, CollectionNameGetter, DefaultModel

__all__ = [
    "BooleanField",
    "CollectionGetter",
    "CollectionNameGetter",
    "DateFields",
    "DefaultModel",
    "Field",
    "FloatField",
    "IDField",
    "IntegerField",
    "Model",
    "ModelMeta",
    "ModelOptions",
    "ObjectIdField",
    "StringField",
    "now_ms",
    "operation_clock",
    "prepare_id",
]
