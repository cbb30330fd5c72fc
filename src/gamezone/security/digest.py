"""Salted one-way hashing and random salts.

The digest service reproduces a deliberately simple credential scheme:

    hash = SHA-256(salt + ":" + secret)          # hex encoded

There is no iteration count and no pepper. When SHA-256 is not available (for
example on an interpreter built without it, or when the service is forced into
degraded mode) the service falls back to a 32-bit djb2-xor hash so the
application keeps working, with far weaker guarantees.

Salts come from :mod:`secrets` when a strong RNG is available and from
:mod:`random` otherwise.

Hashing is exposed as a coroutine. The strong path runs in a worker thread,
so callers must assume the ledger may change while they are suspended.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
import random
import secrets

logger = logging.getLogger(__name__)

_DJB2_SEED = 5381
_MASK_32 = 0xFFFFFFFF


def strong_hash_available() -> bool:
    """Return ``True`` when the interpreter can compute SHA-256."""
    try:
        hashlib.new("sha256")
    except ValueError:
        return False
    return True


def weak_hash(text: str) -> str:
    """Non-cryptographic djb2-xor hash over UTF-16 code units.

    Returns 8 lowercase hex characters.
    """
    h = _DJB2_SEED
    units = text.encode("utf-16-le")
    for i in range(0, len(units), 2):
        code_unit = units[i] | (units[i + 1] << 8)
        h = (((h << 5) + h) & _MASK_32) ^ code_unit
    return f"{h:08x}"


def sha256_hex(text: str) -> str:
    """SHA-256 of the UTF-8 encoding of ``text``, hex encoded."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


class DigestService:
    """Hashes secrets and produces salts.

    Args:
        strong_hash: Use SHA-256. ``None`` auto-detects; ``False`` forces the
            weak fallback.
        strong_rng: Use :mod:`secrets` for salts. ``None`` means available;
            ``False`` forces :mod:`random`.
    """

    def __init__(self, *, strong_hash: bool | None = None, strong_rng: bool | None = None) -> None:
        if strong_hash is None:
            strong_hash = strong_hash_available()
        elif strong_hash and not strong_hash_available():
            logger.warning("SHA-256 unavailable; falling back to weak digest")
            strong_hash = False
        self.strong_hash = strong_hash
        self.strong_rng = True if strong_rng is None else strong_rng
        self._rng = random.Random()

        if not self.strong_hash:
            logger.warning("Digest service running in degraded mode (weak hash)")

    async def digest(self, text: str) -> str:
        """Return the one-way hash of ``text``."""
        if not self.strong_hash:
            return weak_hash(text)
        return await asyncio.to_thread(sha256_hex, text)

    async def salted_digest(self, secret: str, salt: str) -> str:
        """Hash ``secret`` with ``salt`` prepended and ``":"`` as separator."""
        return await self.digest(f"{salt}:{secret}")

    def random_hex(self, n: int = 16) -> str:
        """Return ``2 * n`` hex characters of randomness."""
        if self.strong_rng:
            return secrets.token_hex(n)
        return "".join(f"{self._rng.randrange(256):02x}" for _ in range(n))
