"""Error taxonomy for identity and record operations.

Every error carries a single human-readable ``message`` suitable for showing
to the person at the keyboard, plus a stable ``kind`` that the HTTP layer maps
to a status code. None of these errors is fatal.

- :class:`ValidationError` - malformed input; also carries a ``reason`` key
  (``"name_too_short"``, ``"invalid_email"``, ...).
- :class:`ConflictError` - the email is already registered.
- :class:`AuthError` - credential or recovery-phrase mismatch. Messages are
  intentionally generic so they do not reveal whether an account exists.
- :class:`NotFoundError` - an operation referenced a user id that is gone.
"""

from __future__ import annotations

from typing import ClassVar


class GameZoneError(Exception):
    """Base class for recoverable domain errors."""

    kind: ClassVar[str] = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(GameZoneError):
    """User-correctable input error."""

    kind = "validation"

    def __init__(self, message: str, *, reason: str) -> None:
        super().__init__(message)
        self.reason = reason


class ConflictError(GameZoneError):
    """Uniqueness violation (duplicate email)."""

    kind = "conflict"


class AuthError(GameZoneError):
    """Credential, recovery phrase or privilege check failed."""

    kind = "auth"


class NotFoundError(GameZoneError):
    """Referenced user does not exist."""

    kind = "not_found"
