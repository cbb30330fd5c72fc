"""Namespaced key-value persistence over SQLite.

:class:`DurableStore` is the only component that touches the storage medium.
Every value is stored as a JSON document under ``<prefix><name>``; the prefix
keeps GameZone entries apart from anything else sharing the same file.

Mutation contract
-----------------
``update`` is the sanctioned way to change collection-shaped state (the user
list, the score map). It reads the current value, applies a pure transform
and persists the result inside a single ``BEGIN IMMEDIATE`` transaction, so two
callers can never lose each other's changes by reading and writing in
separate steps::

    store.update("users", lambda users: [new_user, *users], [])

Failure semantics
-----------------
- Reads never raise. A missing key, an empty value, malformed JSON or an
  unreadable file all return the caller's ``fallback``.
- Writes raise :class:`~gamezone.store.errors.StoreWriteError` on
  infrastructure failure, chained to the underlying ``sqlite3`` error.
"""

from __future__ import annotations

import copy
import json
import logging
import sqlite3
from collections.abc import Callable
from pathlib import Path
from typing import Any, NoReturn, TypeVar

from gamezone.store.connection import connection_scope
from gamezone.store.errors import StoreError, StoreOperationContext, StoreWriteError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Well-known entry names. ``comments``, ``messages`` and ``ui`` belong to
# collaborators outside the core and are treated as opaque values.
USERS_KEY = "users"
SESSION_KEY = "session"
SCORES_KEY = "scores"
COMMENTS_KEY = "comments"
MESSAGES_KEY = "messages"
UI_KEY = "ui"


def _raise_write_error(operation: str, exc: Exception, *, details: str | None = None) -> NoReturn:
    """Raise a typed store write error while preserving chained cause."""
    if isinstance(exc, StoreError):
        raise exc
    raise StoreWriteError(
        context=StoreOperationContext(operation=operation, details=details),
        cause=exc,
    ) from exc


def _decode(raw: str | None, fallback: Any, *, key: str) -> Any:
    """Decode a stored JSON document, degrading to ``fallback``."""
    if not raw:
        return fallback
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        logger.warning("Discarding unparsable value stored under %r", key)
        return fallback


def _encode(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


class DurableStore:
    """Synchronous namespaced key-value store.

    Args:
        path: SQLite file holding the ``storage`` table. Created on first use.
        prefix: Namespace prepended to every entry name.
    """

    def __init__(self, path: Path | str, *, prefix: str = "gz_") -> None:
        self.path = Path(path)
        self.prefix = prefix

    def __repr__(self) -> str:
        return f"DurableStore(path={str(self.path)!r}, prefix={self.prefix!r})"

    def key(self, name: str) -> str:
        """Return the physical key for ``name``."""
        return f"{self.prefix}{name}"

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, name: str, fallback: Any = None) -> Any:
        """Return the value persisted under ``name``, or ``fallback``."""
        key = self.key(name)
        try:
            with connection_scope(self.path) as conn:
                row = conn.execute("SELECT value FROM storage WHERE key = ?", (key,)).fetchone()
        except (sqlite3.Error, OSError):
            logger.warning("Store read failed for %r; using fallback", key, exc_info=True)
            return fallback
        return _decode(row[0] if row else None, fallback, key=key)

    def keys(self) -> list[str]:
        """Return the names stored under this namespace, sorted."""
        try:
            with connection_scope(self.path) as conn:
                rows = conn.execute(
                    "SELECT key FROM storage WHERE substr(key, 1, ?) = ? ORDER BY key",
                    (len(self.prefix), self.prefix),
                ).fetchall()
        except (sqlite3.Error, OSError):
            logger.warning("Store key listing failed", exc_info=True)
            return []
        return [row[0][len(self.prefix) :] for row in rows]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set(self, name: str, value: Any) -> None:
        """Persist ``value`` under ``name``, fully replacing prior content."""
        key = self.key(name)
        encoded = _encode(value)
        try:
            with connection_scope(self.path, write=True) as conn:
                conn.execute(
                    "INSERT INTO storage (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (key, encoded),
                )
        except Exception as exc:
            _raise_write_error("store.set", exc, details=f"key={key!r}")

    def remove(self, name: str) -> None:
        """Delete the entry for ``name``. Removing a missing entry is a no-op."""
        key = self.key(name)
        try:
            with connection_scope(self.path, write=True) as conn:
                conn.execute("DELETE FROM storage WHERE key = ?", (key,))
        except Exception as exc:
            _raise_write_error("store.remove", exc, details=f"key={key!r}")

    def update(self, name: str, transform: Callable[[Any], T], fallback: Any = None) -> T:
        """Apply ``transform`` to the current value and persist the result.

        The read, the transform and the write all happen while the write lock
        is held. ``transform`` receives a private copy of ``fallback`` when
        nothing is stored, so mutable fallbacks are never shared between calls.

        If ``transform`` raises, nothing is written and the exception
        propagates unchanged.

        Returns:
            The value that was persisted.
        """
        key = self.key(name)
        try:
            with connection_scope(self.path, write=True) as conn:
                row = conn.execute("SELECT value FROM storage WHERE key = ?", (key,)).fetchone()
                current = _decode(row[0] if row else None, copy.deepcopy(fallback), key=key)
                result = transform(current)
                conn.execute(
                    "INSERT INTO storage (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (key, _encode(result)),
                )
        except (sqlite3.Error, OSError) as exc:
            _raise_write_error("store.update", exc, details=f"key={key!r}")
        return result
