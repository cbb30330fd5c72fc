"""
Unit tests for the digest service (gamezone/security/digest.py).

Tests cover:
- SHA-256 salted digests and their input layout
- The weak djb2-xor fallback hash
- Degraded mode selection
- Salt generation with strong and weak RNGs
"""

import hashlib

import pytest

from gamezone.security import DigestService, strong_hash_available, weak_hash

# ============================================================================
# WEAK HASH TESTS
# ============================================================================


@pytest.mark.unit
def test_weak_hash_known_values():
    """Test the fallback hash against hand-computed values."""
    assert weak_hash("") == "00001505"
    assert weak_hash("a") == "0002b5c4"


@pytest.mark.unit
def test_weak_hash_is_eight_hex_chars():
    """Test that the fallback hash always renders as 8 lowercase hex chars."""
    for text in ("x", "salt:secret", "a much longer input " * 50, "emoji ⚡🎯"):
        digest = weak_hash(text)
        assert len(digest) == 8
        assert digest == digest.lower()
        int(digest, 16)


@pytest.mark.unit
def test_weak_hash_distinguishes_inputs():
    """Test that small input changes change the hash."""
    assert weak_hash("abc") != weak_hash("abd")


# ============================================================================
# STRONG DIGEST TESTS
# ============================================================================


@pytest.mark.unit
def test_strong_hash_detected():
    """Test that CPython exposes SHA-256."""
    assert strong_hash_available() is True
    assert DigestService().strong_hash is True


@pytest.mark.unit
@pytest.mark.asyncio
async def test_salted_digest_is_sha256_of_salt_colon_secret(digest):
    """Test that salted_digest hashes ``salt + ":" + secret``."""
    expected = hashlib.sha256(b"abc123:hunter22").hexdigest()

    assert await digest.salted_digest("hunter22", "abc123") == expected


@pytest.mark.unit
@pytest.mark.asyncio
async def test_digest_is_deterministic(digest):
    """Test that the same input always produces the same digest."""
    first = await digest.digest("same input")
    second = await digest.digest("same input")

    assert first == second
    assert len(first) == 64


@pytest.mark.unit
@pytest.mark.asyncio
async def test_salt_changes_digest(digest):
    """Test that different salts produce different digests for one secret."""
    a = await digest.salted_digest("password", "salt-a")
    b = await digest.salted_digest("password", "salt-b")

    assert a != b


# ============================================================================
# DEGRADED MODE TESTS
# ============================================================================


@pytest.mark.unit
@pytest.mark.asyncio
async def test_forced_weak_mode_uses_fallback_hash():
    """Test that strong_hash=False switches to the djb2-xor hash."""
    service = DigestService(strong_hash=False)

    assert service.strong_hash is False
    assert await service.salted_digest("secret", "salt") == weak_hash("salt:secret")


@pytest.mark.unit
def test_missing_sha256_falls_back(monkeypatch):
    """Test that an interpreter without SHA-256 degrades instead of failing."""
    monkeypatch.setattr("gamezone.security.digest.strong_hash_available", lambda: False)

    assert DigestService().strong_hash is False
    assert DigestService(strong_hash=True).strong_hash is False


# ============================================================================
# SALT TESTS
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize("strong_rng", [True, False])
def test_random_hex_length_and_alphabet(strong_rng):
    """Test that random_hex returns 2*n lowercase hex characters."""
    service = DigestService(strong_rng=strong_rng)

    salt = service.random_hex(16)

    assert len(salt) == 32
    assert set(salt) <= set("0123456789abcdef")
    assert len(service.random_hex(4)) == 8


@pytest.mark.unit
def test_random_hex_varies_between_calls(digest):
    """Test that consecutive salts differ."""
    assert digest.random_hex() != digest.random_hex()
