"""Health and root endpoints.

Provides the root ``/`` endpoint (API identity and version) and the
``/health`` endpoint (liveness check with the registered user count).
"""

from fastapi import APIRouter

from gamezone import __version__
from gamezone.app import GameZoneApp


def router(zone: GameZoneApp) -> APIRouter:
    api = APIRouter()

    @api.get("/")
    async def root():
        """Root endpoint showing API identity and current version."""
        return {"message": "GameZone API", "version": __version__}

    @api.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok", "users": zone.users.count_users()}

    return api
