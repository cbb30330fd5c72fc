"""SQLite connection primitives for the durable store.

This module owns connection creation and the single ``storage`` table so the
key-value layer can stay focused on JSON encoding and transaction intent.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

SCHEMA = """
CREATE TABLE IF NOT EXISTS storage (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""


def configure_connection(connection: sqlite3.Connection) -> sqlite3.Connection:
    """Apply connection-level settings required by the store.

    Notes:
        - ``isolation_level=None`` puts the connection in autocommit mode so
          :func:`connection_scope` can issue ``BEGIN IMMEDIATE`` explicitly.
        - ``busy_timeout`` reduces transient lock failures when a second
          process holds the write lock briefly.
    """
    connection.isolation_level = None
    connection.execute("PRAGMA busy_timeout = 5000")
    connection.execute(SCHEMA)
    return connection


def get_connection(path: Path) -> sqlite3.Connection:
    """Create and configure a new SQLite connection for ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    connection = sqlite3.connect(str(path))
    return configure_connection(connection)


@contextmanager
def connection_scope(path: Path, *, write: bool = False) -> Iterator[sqlite3.Connection]:
    """Yield a configured connection with guaranteed cleanup semantics.

    Args:
        path: SQLite file backing the store.
        write: When True, hold the database write lock for the whole block,
            commit on success and roll back on exceptions.

    Yields:
        Configured SQLite connection ready for cursor operations.

    Behavior:
        - Always closes the connection in ``finally``.
        - Write scopes start with ``BEGIN IMMEDIATE`` so a read-transform-write
          cycle inside the block cannot interleave with another writer.
    """
    connection = get_connection(path)
    try:
        if write:
            connection.execute("BEGIN IMMEDIATE")
        yield connection
        if write:
            connection.execute("COMMIT")
    except Exception:
        if write:
            try:
                connection.execute("ROLLBACK")
            except sqlite3.Error:
                # Preserve the original exception while best-effort rolling back.
                pass
        raise
    finally:
        connection.close()
