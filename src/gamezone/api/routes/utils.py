"""Shared helpers for API route modules."""

from fastapi import HTTPException

from gamezone.app import GameZoneApp
from gamezone.identity import User

# Status code for each error kind of the identity taxonomy.
STATUS_BY_KIND = {
    "validation": 400,
    "auth": 401,
    "not_found": 404,
    "conflict": 409,
}


def require_user(zone: GameZoneApp) -> User:
    """Return the logged-in user or raise 401."""
    user = zone.sessions.current_user()
    if user is None:
        raise HTTPException(status_code=401, detail="Not logged in")
    return user


def require_admin(zone: GameZoneApp) -> User:
    """Return the logged-in administrator or raise 401/403."""
    user = require_user(zone)
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Administrator privileges are required.")
    return user
