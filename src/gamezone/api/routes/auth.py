"""Authentication and account endpoints."""

from fastapi import APIRouter, HTTPException

from gamezone.api.models import (
    CurrentUserResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    UserResponse,
)
from gamezone.app import GameZoneApp


def router(zone: GameZoneApp) -> APIRouter:
    """Build the auth router bound to one application container."""
    api = APIRouter(prefix="/auth", tags=["auth"])

    @api.post("/register", response_model=UserResponse, status_code=201)
    async def register(request: RegisterRequest):
        """
        Create a ``user`` account.

        The password confirmation is checked here; every other rule is
        enforced by the identity ledger.
        """
        if request.password != request.password_confirm:
            raise HTTPException(status_code=400, detail="Passwords do not match.")

        result = await zone.users.register(
            request.name, request.email, request.password, request.recovery
        )
        return UserResponse.from_user(result.unwrap())

    @api.post("/login", response_model=LoginResponse)
    async def login(request: LoginRequest):
        """Log in and replace the active session."""
        user = (await zone.sessions.login(request.email, request.password)).unwrap()
        return LoginResponse(message="Logged in.", user=UserResponse.from_user(user))

    @api.post("/logout", response_model=MessageResponse)
    async def logout():
        """End the active session. Succeeds even when nobody is logged in."""
        zone.sessions.logout()
        return MessageResponse(message="Logged out.")

    @api.post("/reset-password", response_model=MessageResponse)
    async def reset_password(request: ResetPasswordRequest):
        """Set a new password after proving the recovery phrase."""
        if request.new_password != request.new_password_confirm:
            raise HTTPException(status_code=400, detail="Passwords do not match.")

        result = await zone.users.reset_password(
            request.email, request.recovery, request.new_password
        )
        result.unwrap()
        return MessageResponse(message="Password changed. You can log in now.")

    @api.get("/me", response_model=CurrentUserResponse)
    async def me():
        """Return the logged-in user, or ``null`` when nobody is."""
        user = zone.sessions.current_user()
        return CurrentUserResponse(user=UserResponse.from_user(user) if user else None)

    return api
