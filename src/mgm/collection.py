"""
Collection handle wrapping a ``pymongo`` collection with model operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Type, TypeVar

from . import operations
from .context import Context, background
from .core.identifier import IDField
from .core.model import Model
from .hooks import HookDispatcher, hooks
from .utils import get_logger, time_call

if TYPE_CHECKING:
    from .config import Connection

TModel = TypeVar("TModel", bound=Model)


class Collection:
    """
    Model-aware view of a driver collection.

    Every operation takes an optional ``ctx``. Without one, the owning
    connection's default context is used. Passing a session context makes
    the call part of that session's transaction. Attributes not defined here
    resolve on the wrapped driver collection.
    """

    def __init__(
        self,
        collection: Any,
        *,
        connection: Optional["Connection"] = None,
        dispatcher: Optional[HookDispatcher] = None,
    ) -> None:
        self.collection = collection
        self.connection = connection
        self.hooks = dispatcher or hooks
        self.logger = get_logger("collection")

    def __repr__(self) -> str:
        return f"<Collection {self.name}>"

    def __getattr__(self, item: str) -> Any:
        if item.startswith("_") or item == "collection":
            raise AttributeError(item)
        return getattr(self.collection, item)

    @property
    def name(self) -> str:
        return self.collection.name

    def _ctx(self, ctx: Optional[Context]) -> Context:
        if ctx is not None:
            return ctx
        if self.connection is not None:
            return self.connection.ctx()
        return background()

    # Model operations ----------------------------------------------------
    def create(self, model: IDField, ctx: Optional[Context] = None, **kwargs: Any):
        """
        Insert ``model`` and assign the generated identifier to it.
        """
        return operations.create(self, model, self._ctx(ctx), **kwargs)

    def update(self, model: IDField, ctx: Optional[Context] = None, **kwargs: Any):
        return operations.update(self, model, self._ctx(ctx), **kwargs)

    def delete(self, model: IDField, ctx: Optional[Context] = None, **kwargs: Any):
        return operations.delete(self, model, self._ctx(ctx), **kwargs)

    def find_by_id(self, id: Any, model: TModel, ctx: Optional[Context] = None, **kwargs: Any) -> TModel:
        object_id = model.prepare_id(id)
        return operations.first(self, {"_id": object_id}, model, self._ctx(ctx), **kwargs)

    def first(
        self, query_filter: Mapping[str, Any], model: TModel, ctx: Optional[Context] = None, **kwargs: Any
    ) -> TModel:
        return operations.first(self, query_filter, model, self._ctx(ctx), **kwargs)

    # Query helpers -------------------------------------------------------
    def simple_find(
        self,
        model_cls: Type[TModel],
        query_filter: Mapping[str, Any] | None = None,
        ctx: Optional[Context] = None,
        **kwargs: Any,
    ) -> List[TModel]:
        ctx = self._ctx(ctx)
        query_filter = dict(query_filter or {})
        with ctx.bounded(), time_call(
            "collection.find", self.logger, collection=self.name, filter=query_filter
        ):
            cursor = self.collection.find(query_filter, **operations.session_kwargs(ctx), **kwargs)
            return [model_cls.from_document(document) for document in cursor]

    def simple_aggregate(
        self, model_cls: Type[TModel], *stages: Mapping[str, Any], ctx: Optional[Context] = None
    ) -> List[TModel]:
        ctx = self._ctx(ctx)
        with ctx.bounded(), time_call("collection.aggregate", self.logger, collection=self.name):
            cursor = self.collection.aggregate(list(stages), **operations.session_kwargs(ctx))
            return [model_cls.from_document(document) for document in cursor]

    def count_documents(
        self, query_filter: Mapping[str, Any] | None = None, ctx: Optional[Context] = None, **kwargs: Any
    ) -> int:
        ctx = self._ctx(ctx)
        query_filter = dict(query_filter or {})
        with ctx.bounded(), time_call(
            "collection.count_documents", self.logger, collection=self.name, filter=query_filter
        ):
            return self.collection.count_documents(query_filter, **operations.session_kwargs(ctx), **kwargs)
