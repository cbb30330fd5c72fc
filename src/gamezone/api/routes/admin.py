"""Admin endpoints for user management.

Every endpoint requires the logged-in user to be an administrator. An
administrator cannot change the role of, or delete, their own account.
Deleting a user leaves that user's score records in place.
"""

from fastapi import APIRouter

from gamezone.api.models import UserListResponse, UserResponse
from gamezone.api.routes.utils import require_admin
from gamezone.app import GameZoneApp


def router(zone: GameZoneApp) -> APIRouter:
    """Build the admin router bound to one application container."""
    api = APIRouter(prefix="/admin", tags=["admin"])

    @api.get("/users", response_model=UserListResponse)
    async def list_users():
        require_admin(zone)
        return UserListResponse(users=[UserResponse.from_user(u) for u in zone.users.list_users()])

    @api.post("/users/{user_id}/toggle-role", response_model=UserResponse)
    async def toggle_role(user_id: str):
        """Switch a user between the ``user`` and ``admin`` roles."""
        actor = require_admin(zone)
        updated = zone.users.toggle_role(actor.id, user_id).unwrap()
        return UserResponse.from_user(updated)

    @api.delete("/users/{user_id}", response_model=UserResponse)
    async def delete_user(user_id: str):
        actor = require_admin(zone)
        removed = zone.users.delete_user(actor.id, user_id).unwrap()
        return UserResponse.from_user(removed)

    return api
