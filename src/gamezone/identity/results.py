"""Result values returned by identity operations.

Ledger operations report failures as data instead of raising, so callers can
branch on ``result.ok`` without try/except around every call. Code that would
rather use exceptions calls :meth:`OperationResult.unwrap`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from gamezone.identity.errors import GameZoneError

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of one identity operation.

    Attributes:
        value: Operation payload on success, ``None`` on failure.
        error: Typed error on failure, ``None`` on success.
    """

    value: T | None = None
    error: GameZoneError | None = None

    @classmethod
    def success(cls, value: T) -> OperationResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: GameZoneError) -> OperationResult[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> str | None:
        """Taxonomy tag of the error, or ``None`` on success."""
        return self.error.kind if self.error is not None else None

    @property
    def message(self) -> str | None:
        return self.error.message if self.error is not None else None

    def unwrap(self) -> T:
        """Return the value or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
