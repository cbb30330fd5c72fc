"""Personal-best endpoints used by the games.

Rounds played while logged out are never submitted; the games only call
these endpoints with an active session.
"""

from fastapi import APIRouter, HTTPException

from gamezone.api.models import ScoreSubmitRequest, ScoreSubmitResponse, ScoresResponse
from gamezone.api.routes.utils import require_user
from gamezone.app import GameZoneApp
from gamezone.records import GAMES_BY_ID


def router(zone: GameZoneApp) -> APIRouter:
    """Build the scores router bound to one application container."""
    api = APIRouter(prefix="/scores", tags=["scores"])

    @api.post("/best", response_model=ScoreSubmitResponse)
    async def submit_best(request: ScoreSubmitRequest):
        """
        Merge a finished round into the user's personal best.

        The metric key and policy come from the game catalog, so games only
        report their id and the raw value.
        """
        user = require_user(zone)
        metric = GAMES_BY_ID.get(request.game_id)
        if metric is None:
            raise HTTPException(status_code=400, detail=f"Unknown game: {request.game_id}")

        try:
            improved = zone.records.update_best(
                user.id, metric.game_id, metric.key, request.value, metric.policy
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        return ScoreSubmitResponse(
            improved=improved,
            best=zone.records.get_best(user.id, metric.game_id, metric.key),
            label=zone.records.best_label_for_user(user.id),
        )

    @api.get("/me", response_model=ScoresResponse)
    async def my_scores():
        user = require_user(zone)
        return ScoresResponse(
            scores=zone.records.get_user(user.id),
            label=zone.records.best_label_for_user(user.id),
        )

    return api
