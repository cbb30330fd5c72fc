"""User accounts, credentials and the active session."""

from gamezone.identity.errors import (
    AuthError,
    ConflictError,
    GameZoneError,
    NotFoundError,
    ValidationError,
)
from gamezone.identity.ledger import IdentityLedger
from gamezone.identity.models import Role, Session, User, normalize_email
from gamezone.identity.results import OperationResult
from gamezone.identity.sessions import SessionManager

__all__ = [
    "AuthError",
    "ConflictError",
    "GameZoneError",
    "IdentityLedger",
    "NotFoundError",
    "OperationResult",
    "Role",
    "Session",
    "SessionManager",
    "User",
    "ValidationError",
    "normalize_email",
]
