"""
Pydantic models for API requests and responses.

Request models describe what page controllers send; response models describe
what they get back. Response models never carry salts or hashes.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from gamezone.identity import User

# ============================================================================
# REQUEST MODELS (Client → Server)
# ============================================================================


class RegisterRequest(BaseModel):
    """
    Registration form.

    Attributes:
        name: Display name (at least 2 characters after trimming)
        email: Email address, unique after trimming and lower-casing
        password: Desired password (configured minimum length)
        password_confirm: Must equal ``password``
        recovery: Recovery phrase used to reset the password later
    """

    name: str = ""
    email: str = ""
    password: str = ""
    password_confirm: str = ""
    recovery: str = ""


class LoginRequest(BaseModel):
    """Login form with email and password."""

    email: str = ""
    password: str = ""


class ResetPasswordRequest(BaseModel):
    """
    Password reset form.

    Attributes:
        email: Account email
        recovery: Recovery phrase chosen at registration
        new_password: Replacement password
        new_password_confirm: Must equal ``new_password``
    """

    email: str = ""
    recovery: str = ""
    new_password: str = ""
    new_password_confirm: str = ""


class ScoreSubmitRequest(BaseModel):
    """A finished round reported by a game for the logged-in user."""

    game_id: str
    value: int | float


# ============================================================================
# RESPONSE MODELS (Server → Client)
# ============================================================================


class UserResponse(BaseModel):
    """Public view of an account."""

    id: str
    name: str
    email: str
    role: str
    created_at: str

    @classmethod
    def from_user(cls, user: User) -> UserResponse:
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role.value,
            created_at=user.created_at,
        )


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class LoginResponse(BaseModel):
    success: bool = True
    message: str
    user: UserResponse


class CurrentUserResponse(BaseModel):
    """``user`` is ``None`` when nobody is logged in."""

    user: UserResponse | None = None


class UserListResponse(BaseModel):
    users: list[UserResponse] = Field(default_factory=list)


class ScoreSubmitResponse(BaseModel):
    """
    Result of a score submission.

    Attributes:
        improved: True when the value became the new personal best
        best: Stored best after the merge
        label: Updated best-record label for the user
    """

    improved: bool
    best: int | float | None
    label: str


class ScoresResponse(BaseModel):
    scores: dict[str, Any] = Field(default_factory=dict)
    label: str
