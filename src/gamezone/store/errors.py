"""Typed exceptions for the durable store.

Read paths never raise: an unreadable medium or a malformed value degrades to
the caller-supplied fallback. These exceptions are reserved for write-path
infrastructure failures (for example the SQLite file cannot be opened or a
write transaction fails) so a lost mutation is never silent.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class StoreOperationContext:
    """Structured operation metadata carried by store exceptions.

    Attributes:
        operation: Stable operation identifier (for example ``"store.update"``).
        details: Optional human-readable context for logs and debugging.
    """

    operation: str
    details: str | None = None


class StoreError(RuntimeError):
    """Base exception for store-layer failures.

    Args:
        context: Structured operation metadata.
        cause: Optional underlying exception.
    """

    def __init__(
        self,
        *,
        context: StoreOperationContext,
        cause: Exception | None = None,
    ) -> None:
        message = context.operation
        if context.details:
            message = f"{message}: {context.details}"
        super().__init__(message)
        self.context = context
        self.cause = cause


class StoreWriteError(StoreError):
    """A mutation or write transaction failed."""
