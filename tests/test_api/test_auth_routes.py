"""
Integration tests for the authentication endpoints (gamezone/api/routes/auth.py).

Tests cover:
- Root and health endpoints
- Registration, including confirmation mismatch and duplicates
- Login / logout / current user
- Password reset with the recovery phrase
- Error-kind to status-code mapping

Uses the test_client fixture; the lifespan seeds the administrator.
"""

import pytest

from gamezone import __version__
from tests.constants import ADMIN_EMAIL, ADMIN_PASSWORD, TEST_PASSWORD, TEST_RECOVERY


def _register(client, email="alice@example.com", **overrides):
    payload = {
        "name": "Alice",
        "email": email,
        "password": TEST_PASSWORD,
        "password_confirm": TEST_PASSWORD,
        "recovery": TEST_RECOVERY,
    }
    payload.update(overrides)
    return client.post("/auth/register", json=payload)


# ============================================================================
# ROOT / HEALTH TESTS
# ============================================================================


@pytest.mark.api
def test_root_reports_version(test_client):
    """Test the root endpoint identity payload."""
    response = test_client.get("/")

    assert response.status_code == 200
    assert response.json() == {"message": "GameZone API", "version": __version__}


@pytest.mark.api
def test_health_counts_seeded_admin(test_client):
    """Test that startup seeded exactly one account."""
    response = test_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "users": 1}


# ============================================================================
# REGISTRATION TESTS
# ============================================================================


@pytest.mark.api
@pytest.mark.auth
def test_register_success(test_client):
    """Test that registration returns the public user view."""
    response = _register(test_client)

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "alice@example.com"
    assert data["role"] == "user"
    assert "passHash" not in data and "pass_hash" not in data
    assert test_client.get("/health").json()["users"] == 2


@pytest.mark.api
@pytest.mark.auth
def test_register_password_mismatch(test_client):
    """Test that a confirmation mismatch is rejected before validation."""
    response = _register(test_client, password_confirm="something-else")

    assert response.status_code == 400
    assert response.json()["detail"] == "Passwords do not match."


@pytest.mark.api
@pytest.mark.auth
def test_register_validation_error(test_client):
    """Test that ledger validation failures map to 400."""
    response = _register(test_client, email="not-an-email")

    assert response.status_code == 400
    assert response.json()["detail"] == "That email does not look valid."


@pytest.mark.api
@pytest.mark.auth
def test_register_duplicate_email(test_client):
    """Test that a duplicate email maps to 409."""
    _register(test_client)

    response = _register(test_client, email="ALICE@example.com")

    assert response.status_code == 409
    assert response.json()["detail"] == "That email is already registered."


# ============================================================================
# LOGIN / LOGOUT TESTS
# ============================================================================


@pytest.mark.api
@pytest.mark.auth
def test_login_and_me(test_client):
    """Test that login sets the session reported by /auth/me."""
    _register(test_client)

    response = test_client.post(
        "/auth/login", json={"email": "alice@example.com", "password": TEST_PASSWORD}
    )

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["user"]["name"] == "Alice"
    assert test_client.get("/auth/me").json()["user"]["email"] == "alice@example.com"


@pytest.mark.api
@pytest.mark.auth
def test_login_failures_are_indistinguishable(test_client):
    """Test that unknown email and wrong password return the same 401."""
    _register(test_client)

    unknown = test_client.post(
        "/auth/login", json={"email": "nobody@example.com", "password": TEST_PASSWORD}
    )
    wrong = test_client.post(
        "/auth/login", json={"email": "alice@example.com", "password": "wrong-password"}
    )

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json()


@pytest.mark.api
@pytest.mark.auth
def test_logout_clears_session(test_client):
    """Test that logout ends the session and can be repeated."""
    test_client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

    assert test_client.post("/auth/logout").status_code == 200
    assert test_client.post("/auth/logout").status_code == 200
    assert test_client.get("/auth/me").json() == {"user": None}


# ============================================================================
# PASSWORD RESET TESTS
# ============================================================================


@pytest.mark.api
@pytest.mark.auth
def test_reset_password_flow(test_client):
    """Test that a reset makes the new password the only valid one."""
    _register(test_client)

    response = test_client.post(
        "/auth/reset-password",
        json={
            "email": "alice@example.com",
            "recovery": TEST_RECOVERY,
            "new_password": "brand-new-pw",
            "new_password_confirm": "brand-new-pw",
        },
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Password changed. You can log in now."
    old = test_client.post(
        "/auth/login", json={"email": "alice@example.com", "password": TEST_PASSWORD}
    )
    new = test_client.post(
        "/auth/login", json={"email": "alice@example.com", "password": "brand-new-pw"}
    )
    assert old.status_code == 401
    assert new.status_code == 200


@pytest.mark.api
@pytest.mark.auth
def test_reset_password_wrong_recovery(test_client):
    """Test that a wrong recovery phrase maps to 401."""
    _register(test_client)

    response = test_client.post(
        "/auth/reset-password",
        json={
            "email": "alice@example.com",
            "recovery": "wrong phrase",
            "new_password": "brand-new-pw",
            "new_password_confirm": "brand-new-pw",
        },
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "The recovery phrase does not match."


@pytest.mark.api
@pytest.mark.auth
def test_reset_password_confirmation_mismatch(test_client):
    """Test that mismatched new passwords are rejected."""
    response = test_client.post(
        "/auth/reset-password",
        json={
            "email": ADMIN_EMAIL,
            "recovery": "adminRecovery",
            "new_password": "brand-new-pw",
            "new_password_confirm": "other-pw",
        },
    )

    assert response.status_code == 400
