"""
FastAPI application for the GameZone core.

:func:`create_app` builds the HTTP surface around one
:class:`~gamezone.app.GameZoneApp` container:

- the administrator account is seeded during application startup;
- domain errors raised by ``OperationResult.unwrap()`` are translated to JSON
  responses with a status code chosen by error kind;
- all route modules are registered through ``register_routes``.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from gamezone import __version__
from gamezone.api.routes import register_routes
from gamezone.api.routes.utils import STATUS_BY_KIND
from gamezone.app import GameZoneApp
from gamezone.identity import GameZoneError

logger = logging.getLogger(__name__)


def create_app(zone: GameZoneApp | None = None) -> FastAPI:
    """Build the FastAPI app. A container is built from config when omitted."""
    zone = zone or GameZoneApp.from_config()

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        await zone.startup()
        yield

    app = FastAPI(title="GameZone", version=__version__, lifespan=lifespan)
    app.state.zone = zone

    @app.exception_handler(GameZoneError)
    async def domain_error_handler(_: Request, exc: GameZoneError) -> JSONResponse:
        status_code = STATUS_BY_KIND.get(exc.kind, 400)
        return JSONResponse(status_code=status_code, content={"detail": exc.message})

    register_routes(app, zone)
    return app


def start_server(host: str | None = None, port: int | None = None) -> None:
    """Run the API with uvicorn using configured defaults."""
    import uvicorn

    from gamezone.config import config

    host = host or config.server.host
    port = port or config.server.port
    logger.info("Starting GameZone API on %s:%s", host, port)
    uvicorn.run(create_app(), host=host, port=port)
