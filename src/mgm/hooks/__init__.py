"""
Lifecycle hooks for mgm models.
"""

from .dispatcher import EVENTS, HookDispatcher, hooks
from .protocols import (
    CreatedHook,
    CreatingHook,
    DeletedHook,
    DeletingHook,
    SavedHook,
    SavingHook,
    UpdatedHook,
    UpdatingHook,
    call_next,
)

__all__ = [
    "EVENTS",
    "CreatedHook",
    "CreatingHook",
    "DeletedHook",
    "DeletingHook",
    "HookDispatcher",
    "SavedHook",
    "SavingHook",
    "UpdatedHook",
    "UpdatingHook",
    "call_next",
    "hooks",
]
