"""
Hook dispatcher coordinating lifecycle events.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional, Type

from ..core.model import Model
from .protocols import (
    CreatedHook,
    CreatingHook,
    DeletedHook,
    DeletingHook,
    SavedHook,
    SavingHook,
    UpdatedHook,
    UpdatingHook,
)


HookHandler = Callable[..., None]

EVENTS = (
    "creating",
    "created",
    "saving",
    "saved",
    "updating",
    "updated",
    "deleting",
    "deleted",
)


class HookDispatcher:
    """
    Runs model capability hooks plus global and per-model registered handlers.

    For each event the model's own hook method runs first, then global
    handlers, then handlers registered for the model class. The first
    exception stops the sequence and propagates unchanged.
    """

    def __init__(self) -> None:
        self._global_handlers: Dict[str, List[HookHandler]] = defaultdict(list)
        self._model_handlers: Dict[Type[Model], Dict[str, List[HookHandler]]] = defaultdict(
            lambda: defaultdict(list)
        )

    def register(self, event: str, handler: HookHandler, *, model: Optional[Type[Model]] = None) -> None:
        if event not in EVENTS:
            raise ValueError(f"Unknown hook event '{event}'")
        if model:
            self._model_handlers[model][event].append(handler)
        else:
            self._global_handlers[event].append(handler)

    def fire(self, event: str, instance: Optional[Model], **context: Any) -> None:
        handlers = list(self._global_handlers.get(event, []))
        model = instance.__class__ if instance is not None else None
        if model:
            handlers.extend(self._model_handlers.get(model, {}).get(event, []))
        for handler in handlers:
            handler(instance, **context)

    def clear(self) -> None:
        self._global_handlers.clear()
        self._model_handlers.clear()

    # Lifecycle sequences -------------------------------------------------
    def before_create(self, model: Model) -> None:
        if isinstance(model, CreatingHook):
            model.creating()
        self.fire("creating", model)
        self._saving(model)

    def after_create(self, model: Model) -> None:
        if isinstance(model, CreatedHook):
            model.created()
        self.fire("created", model)
        self._saved(model)

    def before_update(self, model: Model) -> None:
        if isinstance(model, UpdatingHook):
            model.updating()
        self.fire("updating", model)
        self._saving(model)

    def after_update(self, model: Model, result: Any) -> None:
        if isinstance(model, UpdatedHook):
            model.updated(result)
        self.fire("updated", model, result=result)
        self._saved(model)

    def before_delete(self, model: Model) -> None:
        if isinstance(model, DeletingHook):
            model.deleting()
        self.fire("deleting", model)

    def after_delete(self, model: Model, result: Any) -> None:
        if isinstance(model, DeletedHook):
            model.deleted(result)
        self.fire("deleted", model, result=result)

    def _saving(self, model: Model) -> None:
        if isinstance(model, SavingHook):
            model.saving()
        self.fire("saving", model)

    def _saved(self, model: Model) -> None:
        if isinstance(model, SavedHook):
            model.saved()
        self.fire("saved", model)


hooks = HookDispatcher()
