"""Hashing primitives for credentials."""

from gamezone.security.digest import DigestService, strong_hash_available, weak_hash

__all__ = ["DigestService", "strong_hash_available", "weak_hash"]
