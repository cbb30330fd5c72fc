"""Session manager: who is logged in right now.

There is at most one session, stored under the ``session`` key as
``{"userId": ..., "createdAt": ...}``. It is a reference, not ownership: the
user record lives in the :class:`~gamezone.identity.ledger.IdentityLedger`.
A session whose user has been deleted is treated as a logout and cleared the
next time it is resolved.
"""

from __future__ import annotations

import logging

from gamezone.identity.ledger import IdentityLedger
from gamezone.identity.models import Session, User, now_iso, parse_session
from gamezone.identity.results import OperationResult
from gamezone.store import SESSION_KEY, DurableStore

logger = logging.getLogger(__name__)


class SessionManager:
    """Creates, resolves and destroys the single active session."""

    def __init__(self, store: DurableStore, ledger: IdentityLedger) -> None:
        self.store = store
        self.ledger = ledger

    def current_session(self) -> Session | None:
        return parse_session(self.store.get(SESSION_KEY, None))

    def current_user(self) -> User | None:
        """Resolve the session against the ledger.

        Returns ``None`` when nobody is logged in. A dangling session (its
        user no longer exists) is removed before returning ``None``.
        """
        session = self.current_session()
        if session is None:
            return None

        user = self.ledger.find_by_id(session.user_id)
        if user is None:
            logger.info("Clearing session for missing user %s", session.user_id)
            self.logout()
            return None
        return user

    async def login(self, email: str | None, password: str | None) -> OperationResult[User]:
        """Authenticate and replace the active session on success."""
        result = await self.ledger.authenticate(email, password)
        if not result.ok:
            return result

        user = result.unwrap()
        self.store.set(SESSION_KEY, Session(user_id=user.id, created_at=now_iso()).to_storage())
        logger.info("User %s logged in", user.id)
        return result

    def logout(self) -> None:
        """Remove the active session. Safe to call when nobody is logged in."""
        self.store.remove(SESSION_KEY)
