"""Durable key-value store used by every GameZone component."""

from gamezone.store.errors import StoreError, StoreOperationContext, StoreWriteError
from gamezone.store.kv import (
    COMMENTS_KEY,
    MESSAGES_KEY,
    SCORES_KEY,
    SESSION_KEY,
    UI_KEY,
    USERS_KEY,
    DurableStore,
)

__all__ = [
    "COMMENTS_KEY",
    "MESSAGES_KEY",
    "SCORES_KEY",
    "SESSION_KEY",
    "UI_KEY",
    "USERS_KEY",
    "DurableStore",
    "StoreError",
    "StoreOperationContext",
    "StoreWriteError",
]
