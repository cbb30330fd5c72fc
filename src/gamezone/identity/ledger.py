"""Identity ledger: registered users and their credentials.

The ledger owns the ``users`` entry of the store, an ordered list of user
records with the most recently created first. Every mutation goes through
:meth:`DurableStore.update` so concurrent callers cannot lose each other's
changes.

Credential scheme
-----------------
Each user carries two independent salt/hash pairs produced by
:class:`~gamezone.security.digest.DigestService`:

- ``salt`` / ``passHash`` over the password, replaced on every reset;
- ``recoverySalt`` / ``recoveryHash`` over the recovery phrase, written once
  at registration and never changed, so the same phrase keeps working.

Concurrency
-----------
Hashing suspends the caller. Credential operations (seed, register,
authenticate, reset) therefore run under one ``asyncio.Lock`` per ledger so
that two of them can never commit out of order. Uniqueness and existence are
re-checked inside the store transaction because the ledger may have changed
while the hash was being computed.

Results
-------
Operations return :class:`~gamezone.identity.results.OperationResult`
instead of raising. Query helpers return ``None`` for missing users.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from gamezone.config import AdminSettings
from gamezone.identity.errors import AuthError, ConflictError, NotFoundError, ValidationError
from gamezone.identity.models import (
    Role,
    User,
    is_valid_email,
    new_user_id,
    normalize_email,
    now_iso,
    parse_user,
)
from gamezone.identity.results import OperationResult
from gamezone.security.digest import DigestService
from gamezone.store import USERS_KEY, DurableStore

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2
MIN_RECOVERY_LENGTH = 4

INVALID_CREDENTIALS = "Invalid email or password."
UNKNOWN_RECOVERY_ACCOUNT = "No account exists with that email."
RECOVERY_MISMATCH = "The recovery phrase does not match."
ADMIN_REQUIRED = "Administrator privileges are required."


class IdentityLedger:
    """Repository of user accounts backed by a :class:`DurableStore`.

    Args:
        store: Store holding the ``users`` entry.
        digest: Hashing service for passwords and recovery phrases.
        admin: Seed administrator settings used by :meth:`seed_admin`.
        min_password_length: Minimum accepted password length.
    """

    def __init__(
        self,
        store: DurableStore,
        digest: DigestService,
        *,
        admin: AdminSettings | None = None,
        min_password_length: int = 6,
    ) -> None:
        self.store = store
        self.digest = digest
        self.admin = admin or AdminSettings()
        self.min_password_length = min_password_length
        self._credential_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _raw_users(self) -> list[Any]:
        raw = self.store.get(USERS_KEY, [])
        return raw if isinstance(raw, list) else []

    def list_users(self) -> list[User]:
        """Return all well-formed users, most recently created first."""
        return [user for user in map(parse_user, self._raw_users()) if user is not None]

    def count_users(self) -> int:
        return len(self.list_users())

    def find_by_email(self, email: str | None) -> User | None:
        """Return the user with this (normalized) email, if any."""
        target = normalize_email(email)
        return next((u for u in self.list_users() if u.email == target), None)

    def find_by_id(self, user_id: str | None) -> User | None:
        return next((u for u in self.list_users() if u.id == user_id), None)

    # ------------------------------------------------------------------
    # Credential operations
    # ------------------------------------------------------------------

    async def _new_user(
        self, *, name: str, email: str, password: str, recovery: str, role: Role
    ) -> User:
        """Build a user with fresh salts. Suspends while hashing."""
        salt = self.digest.random_hex(16)
        recovery_salt = self.digest.random_hex(16)
        pass_hash = await self.digest.salted_digest(password, salt)
        recovery_hash = await self.digest.salted_digest(recovery, recovery_salt)
        return User(
            id=new_user_id(),
            name=name,
            email=email,
            role=role,
            salt=salt,
            pass_hash=pass_hash,
            recovery_salt=recovery_salt,
            recovery_hash=recovery_hash,
            created_at=now_iso(),
        )

    def _prepend_unless_taken(self, user: User) -> bool:
        """Insert ``user`` at the head of the ledger if its email is free.

        Returns:
            ``True`` when the user was inserted.
        """
        inserted = False

        def transform(users: Any) -> list[Any]:
            nonlocal inserted
            users = users if isinstance(users, list) else []
            if any(isinstance(u, dict) and u.get("email") == user.email for u in users):
                return users
            inserted = True
            return [user.to_storage(), *users]

        self.store.update(USERS_KEY, transform, [])
        return inserted

    async def seed_admin(self) -> OperationResult[User]:
        """Create the configured administrator if no account uses its email.

        Idempotent: an existing account with the admin email is never touched,
        whatever its role.
        """
        email = normalize_email(self.admin.email)
        async with self._credential_lock:
            existing = self.find_by_email(email)
            if existing is not None:
                return OperationResult.success(existing)

            admin = await self._new_user(
                name=self.admin.name,
                email=email,
                password=self.admin.password,
                recovery=self.admin.recovery,
                role=Role.ADMIN,
            )
            if self._prepend_unless_taken(admin):
                logger.info("Seeded administrator account %s", email)
                return OperationResult.success(admin)

        existing = self.find_by_email(email)
        if existing is None:
            return OperationResult.failure(NotFoundError("Administrator account is missing."))
        return OperationResult.success(existing)

    def _validate_registration(
        self, name: str, email: str, password: str, recovery: str
    ) -> ValidationError | None:
        if len(name) < MIN_NAME_LENGTH:
            return ValidationError("Please enter a valid name.", reason="name_too_short")
        if not is_valid_email(email):
            return ValidationError("That email does not look valid.", reason="invalid_email")
        if len(password) < self.min_password_length:
            return ValidationError(
                f"Password must be at least {self.min_password_length} characters.",
                reason="password_too_short",
            )
        if len(recovery) < MIN_RECOVERY_LENGTH:
            return ValidationError("The recovery phrase is too short.", reason="recovery_too_short")
        return None

    async def register(
        self,
        name: str | None,
        email: str | None,
        password: str | None,
        recovery: str | None,
    ) -> OperationResult[User]:
        """Create a ``user`` account.

        Validation runs in a fixed order (name, email, password, recovery
        phrase) and reports the first failing rule. A duplicate email yields a
        :class:`ConflictError`. Nothing is persisted on failure.
        """
        clean_name = str(name or "").strip()
        clean_email = normalize_email(email)
        password = str(password or "")
        clean_recovery = str(recovery or "").strip()

        invalid = self._validate_registration(clean_name, clean_email, password, clean_recovery)
        if invalid is not None:
            return OperationResult.failure(invalid)

        duplicate = ConflictError("That email is already registered.")
        async with self._credential_lock:
            if self.find_by_email(clean_email) is not None:
                return OperationResult.failure(duplicate)

            user = await self._new_user(
                name=clean_name,
                email=clean_email,
                password=password,
                recovery=clean_recovery,
                role=Role.USER,
            )
            if not self._prepend_unless_taken(user):
                return OperationResult.failure(duplicate)

        logger.info("Registered user %s (%s)", user.id, clean_email)
        return OperationResult.success(user)

    async def authenticate(self, email: str | None, password: str | None) -> OperationResult[User]:
        """Check an email/password pair.

        An unknown email and a wrong password produce the same
        :class:`AuthError` message.
        """
        clean_email = normalize_email(email)
        async with self._credential_lock:
            user = self.find_by_email(clean_email)
            if user is None:
                logger.info("Authentication failed for %s", clean_email)
                return OperationResult.failure(AuthError(INVALID_CREDENTIALS))

            candidate = await self.digest.salted_digest(str(password or ""), user.salt)
            if candidate != user.pass_hash:
                logger.info("Authentication failed for %s", clean_email)
                return OperationResult.failure(AuthError(INVALID_CREDENTIALS))

        return OperationResult.success(user)

    async def reset_password(
        self,
        email: str | None,
        recovery: str | None,
        new_password: str | None,
    ) -> OperationResult[User]:
        """Replace a user's password after proving the recovery phrase.

        A new salt is generated on every reset. The recovery salt and hash are
        left untouched so the phrase can be reused for later resets.
        """
        clean_email = normalize_email(email)
        clean_recovery = str(recovery or "").strip()
        new_password = str(new_password or "")

        async with self._credential_lock:
            user = self.find_by_email(clean_email)
            if user is None:
                return OperationResult.failure(AuthError(UNKNOWN_RECOVERY_ACCOUNT))

            proof = await self.digest.salted_digest(clean_recovery, user.recovery_salt)
            if proof != user.recovery_hash:
                logger.info("Recovery phrase mismatch for %s", clean_email)
                return OperationResult.failure(AuthError(RECOVERY_MISMATCH))

            if len(new_password) < self.min_password_length:
                return OperationResult.failure(
                    ValidationError(
                        f"The new password must be at least {self.min_password_length} characters.",
                        reason="password_too_short",
                    )
                )

            new_salt = self.digest.random_hex(16)
            new_hash = await self.digest.salted_digest(new_password, new_salt)
            updated = self._patch_user(user.id, {"salt": new_salt, "passHash": new_hash})

        if updated is None:
            return OperationResult.failure(NotFoundError("That account no longer exists."))
        logger.info("Password reset for %s", clean_email)
        return OperationResult.success(updated)

    # ------------------------------------------------------------------
    # Administrative operations
    # ------------------------------------------------------------------

    def _patch_user(self, user_id: str, changes: dict[str, Any]) -> User | None:
        """Merge ``changes`` into the stored record for ``user_id``."""
        patched: dict[str, Any] | None = None

        def transform(users: Any) -> list[Any]:
            nonlocal patched
            users = users if isinstance(users, list) else []
            result = []
            for entry in users:
                if isinstance(entry, dict) and entry.get("id") == user_id:
                    entry = {**entry, **changes}
                    patched = entry
                result.append(entry)
            return result

        self.store.update(USERS_KEY, transform, [])
        return parse_user(patched) if patched is not None else None

    def _check_admin_action(self, actor_id: str | None, target_id: str) -> OperationResult[User]:
        """Resolve the target of an admin action or explain why it is refused."""
        actor = self.find_by_id(actor_id)
        if actor is None or not actor.is_admin:
            return OperationResult.failure(AuthError(ADMIN_REQUIRED))
        if actor.id == target_id:
            return OperationResult.failure(
                ValidationError("You cannot change your own account.", reason="self_target")
            )
        target = self.find_by_id(target_id)
        if target is None:
            return OperationResult.failure(NotFoundError("User not found."))
        return OperationResult.success(target)

    def toggle_role(self, actor_id: str | None, target_id: str) -> OperationResult[User]:
        """Flip ``target_id`` between ``user`` and ``admin``."""
        checked = self._check_admin_action(actor_id, target_id)
        if not checked.ok:
            return checked
        target = checked.unwrap()

        new_role = target.role.toggled()
        updated = self._patch_user(target.id, {"role": new_role.value})
        if updated is None:
            return OperationResult.failure(NotFoundError("User not found."))
        logger.info("User %s role changed to %s by %s", target.id, new_role.value, actor_id)
        return OperationResult.success(updated)

    def delete_user(self, actor_id: str | None, target_id: str) -> OperationResult[User]:
        """Remove ``target_id`` from the ledger.

        Score records owned by the deleted user are left in place.
        """
        checked = self._check_admin_action(actor_id, target_id)
        if not checked.ok:
            return checked
        target = checked.unwrap()

        removed = False

        def transform(users: Any) -> list[Any]:
            nonlocal removed
            users = users if isinstance(users, list) else []
            kept = [u for u in users if not (isinstance(u, dict) and u.get("id") == target_id)]
            removed = len(kept) != len(users)
            return kept

        self.store.update(USERS_KEY, transform, [])
        if not removed:
            return OperationResult.failure(NotFoundError("User not found."))
        logger.info("User %s deleted by %s", target_id, actor_id)
        return OperationResult.success(target)
