"""Persisted identity records.

Users and the session are stored as JSON objects with camelCase keys
(``passHash``, ``recoverySalt``, ``createdAt``, ``userId``). The pydantic
models below use snake_case attributes and camelCase aliases so records
round-trip through the store unchanged.
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class Role(str, Enum):
    """Account roles. Stored as lowercase strings."""

    USER = "user"
    ADMIN = "admin"

    def toggled(self) -> Role:
        return Role.USER if self is Role.ADMIN else Role.ADMIN


class _StoredModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_storage(self) -> dict[str, Any]:
        """Serialize to the JSON-ready dict written to the store."""
        return self.model_dump(by_alias=True, mode="json")


class User(_StoredModel):
    """A registered account and its credential bundle."""

    id: str
    name: str
    email: str
    role: Role = Role.USER
    salt: str
    pass_hash: str
    recovery_salt: str
    recovery_hash: str
    created_at: str

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


class Session(_StoredModel):
    """The single active login."""

    user_id: str
    created_at: str


def now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_user_id(prefix: str = "usr") -> str:
    """Opaque id: ``<prefix>_<random hex>_<epoch millis hex>``."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}_{int(time.time() * 1000):x}"


def normalize_email(email: str | None) -> str:
    """Trim and lower-case an email address."""
    return str(email or "").strip().lower()


def is_valid_email(email: str) -> bool:
    """Basic ``local@domain.tld`` shape check."""
    return EMAIL_PATTERN.match(email) is not None


def parse_user(raw: Any) -> User | None:
    """Build a :class:`User` from a stored entry, or ``None`` if malformed."""
    if not isinstance(raw, dict):
        return None
    try:
        return User.model_validate(raw)
    except ValidationError:
        logger.warning("Ignoring malformed user record id=%r", raw.get("id"))
        return None


def parse_session(raw: Any) -> Session | None:
    """Build a :class:`Session` from the stored entry, or ``None``."""
    if not isinstance(raw, dict):
        return None
    try:
        return Session.model_validate(raw)
    except ValidationError:
        logger.warning("Ignoring malformed session record")
        return None
