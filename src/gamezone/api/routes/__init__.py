"""
Route registration entry point for the FastAPI application.

Keeps a single `register_routes(app, zone)` API while splitting the
implementation into focused router modules.
"""

from fastapi import FastAPI

from gamezone.api.routes import admin, auth, health, scores
from gamezone.app import GameZoneApp


def register_routes(app: FastAPI, zone: GameZoneApp) -> None:
    """Register all API routes with the FastAPI app."""
    app.include_router(health.router(zone))
    app.include_router(auth.router(zone))
    app.include_router(admin.router(zone))
    app.include_router(scores.router(zone))
