"""
Persistence operations that run lifecycle hooks around driver calls.

Hooks and the driver call for one operation share a single clock reading.
If a before-hook or the driver call fails, the model's field values are
restored to what they were when the operation started.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Generator, Mapping

from .context import Context
from .core.identifier import IDField
from .core.timestamps import operation_clock
from .errors import DocumentNotFound, InvalidIdentifier
from .security.redaction import redact_filter
from .utils import time_call

if TYPE_CHECKING:
    from .collection import Collection


def session_kwargs(ctx: Context) -> Dict[str, Any]:
    session = ctx.session
    if session is None:
        return {}
    return {"session": session.client_session}


@contextmanager
def _restore_on_error(model: IDField) -> Generator[None, None, None]:
    snapshot = dict(model._field_values)
    try:
        yield
    except Exception:
        model._field_values = snapshot
        raise


def _require_id(model: IDField, action: str):
    object_id = model.get_id()
    if object_id is None:
        raise InvalidIdentifier(
            f"Cannot {action} {model.__class__.__name__}: document has no identifier"
        )
    return object_id


def create(coll: "Collection", model: IDField, ctx: Context, **kwargs: Any):
    with _restore_on_error(model):
        with operation_clock():
            coll.hooks.before_create(model)
        document = model.to_document()
        with ctx.bounded(), time_call("collection.insert_one", coll.logger, collection=coll.name):
            result = coll.collection.insert_one(document, **session_kwargs(ctx), **kwargs)
        if model.get_id() is None:
            model.set_id(result.inserted_id)

    coll.hooks.after_create(model)
    return result


def update(coll: "Collection", model: IDField, ctx: Context, **kwargs: Any):
    object_id = _require_id(model, "update")
    with _restore_on_error(model):
        with operation_clock():
            coll.hooks.before_update(model)
        document = model.to_document()
        document.pop("_id", None)
        with ctx.bounded(), time_call("collection.update_one", coll.logger, collection=coll.name):
            result = coll.collection.update_one(
                {"_id": object_id}, {"$set": document}, **session_kwargs(ctx), **kwargs
            )

    coll.hooks.after_update(model, result)
    return result


def delete(coll: "Collection", model: IDField, ctx: Context, **kwargs: Any):
    object_id = _require_id(model, "delete")
    coll.hooks.before_delete(model)
    with ctx.bounded(), time_call("collection.delete_one", coll.logger, collection=coll.name):
        result = coll.collection.delete_one({"_id": object_id}, **session_kwargs(ctx), **kwargs)
    coll.hooks.after_delete(model, result)
    return result


def first(coll: "Collection", query_filter: Mapping[str, Any], model: IDField, ctx: Context, **kwargs: Any):
    with ctx.bounded(), time_call(
        "collection.find_one", coll.logger, collection=coll.name, filter=query_filter
    ):
        document = coll.collection.find_one(query_filter, **session_kwargs(ctx), **kwargs)
    if document is None:
        raise DocumentNotFound(f"No document in '{coll.name}' matches {redact_filter(query_filter)}")
    return model.load_document(document)
