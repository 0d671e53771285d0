"""
Capability protocols a model may implement to take part in its lifecycle.

The dispatcher probes each capability with ``isinstance`` at the call site,
so a model only implements the hooks it cares about. A hook reports failure
by raising; the exception reaches the caller unchanged.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CreatingHook(Protocol):
    def creating(self) -> None: ...


@runtime_checkable
class CreatedHook(Protocol):
    def created(self) -> None: ...


@runtime_checkable
class SavingHook(Protocol):
    def saving(self) -> None: ...


@runtime_checkable
class SavedHook(Protocol):
    def saved(self) -> None: ...


@runtime_checkable
class UpdatingHook(Protocol):
    def updating(self) -> None: ...


@runtime_checkable
class UpdatedHook(Protocol):
    def updated(self, result: Any) -> None: ...


@runtime_checkable
class DeletingHook(Protocol):
    def deleting(self) -> None: ...


@runtime_checkable
class DeletedHook(Protocol):
    def deleted(self, result: Any) -> None: ...


def call_next(proxy: Any, hook_name: str, *args: Any) -> None:
    """
    Invoke the next implementation of ``hook_name`` along the MRO, if any.

    Field groups call this as ``call_next(super(Group, self), "creating")``
    so that every group implementing a hook runs, in base declaration order.
    """
    method = getattr(proxy, hook_name, None)
    if method is not None:
        method(*args)
