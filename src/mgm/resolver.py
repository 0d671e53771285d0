"""
Resolution of a model (instance or class) to its collection.
"""

from __future__ import annotations

from typing import Optional, Type, Union

from .collection import Collection
from .config import Connection, default_connection
from .core.document import CollectionGetter, CollectionNameGetter
from .core.model import Model

ModelRef = Union[Model, Type[Model]]


def _instance(model: ModelRef) -> Model:
    if isinstance(model, type):
        return model()
    return model


def coll_name(model: ModelRef) -> str:
    """
    Collection name for ``model``: its ``collection_name()`` if it has one,
    otherwise the snake_case class name.
    """
    instance = _instance(model)
    if isinstance(instance, CollectionNameGetter):
        return instance.collection_name()
    return instance._meta.collection_name


def coll(model: ModelRef, *, connection: Optional[Connection] = None) -> Collection:
    """
    Collection for ``model``. A handle supplied by ``collection()`` wins over
    a name supplied by ``collection_name()``, which wins over the class name.
    """
    instance = _instance(model)
    if isinstance(instance, CollectionGetter):
        return instance.collection()
    return collection_by_name(coll_name(instance), connection=connection)


def collection_by_name(name: str, *, connection: Optional[Connection] = None) -> Collection:
    return (connection or default_connection()).collection(name)
