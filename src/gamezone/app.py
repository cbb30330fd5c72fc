"""Application container.

:class:`GameZoneApp` wires the store, digest service, identity ledger,
session manager and record ledger together. Build one per process and pass
it to whatever needs it; nothing in the package keeps a hidden global
instance.

Usage:
    app = GameZoneApp.from_config()
    await app.startup()          # seeds the administrator (idempotent)
    user = app.sessions.current_user()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from gamezone import config as gamezone_config
from gamezone.config import AppConfig
from gamezone.identity import IdentityLedger, SessionManager, User
from gamezone.records import NO_RECORD_LABEL, RecordLedger
from gamezone.security import DigestService
from gamezone.store import DurableStore

logger = logging.getLogger(__name__)


@dataclass
class GameZoneApp:
    """Everything a page controller or gameplay module needs."""

    store: DurableStore
    digest: DigestService
    users: IdentityLedger
    sessions: SessionManager
    records: RecordLedger

    @classmethod
    def from_config(cls, cfg: AppConfig | None = None) -> GameZoneApp:
        """Build the container from configuration (module config by default)."""
        if cfg is None:
            cfg = gamezone_config.config

        store = DurableStore(cfg.store.absolute_path, prefix=cfg.store.prefix)
        digest = DigestService(
            strong_hash=None if cfg.security.strong_hash else False,
            strong_rng=cfg.security.strong_rng,
        )
        users = IdentityLedger(
            store,
            digest,
            admin=cfg.admin,
            min_password_length=cfg.password.min_length,
        )
        return cls(
            store=store,
            digest=digest,
            users=users,
            sessions=SessionManager(store, users),
            records=RecordLedger(store),
        )

    async def startup(self) -> User:
        """Run page-initialization work: seed the administrator account."""
        admin = (await self.users.seed_admin()).unwrap()
        logger.info("GameZone ready (store=%s, users=%d)", self.store.path, self.users.count_users())
        return admin

    def best_label(self) -> str:
        """Best-record label for whoever is logged in, ``"—"`` for nobody."""
        user = self.sessions.current_user()
        if user is None:
            return NO_RECORD_LABEL
        return self.records.best_label_for_user(user.id)
