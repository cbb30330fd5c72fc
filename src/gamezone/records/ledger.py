"""Record ledger: per-user, per-game personal bests.

Layout of the ``scores`` entry::

    {
      "<user id>": {
        "reaction": {"bestMs": 231, "updatedAt": "2026-10-19T10:00:00.000Z"},
        "whack":    {"bestScore": 42, "updatedAt": "..."}
      }
    }

:meth:`RecordLedger.update_best` is the only mutation path. Gameplay code
reports a finished round and learns whether it beat the previous best; it
never writes the map itself. Each call performs exactly one
:meth:`DurableStore.update`, so the comparison and the write are atomic.

Records are keyed by user id and are not removed when the user is deleted.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from gamezone.identity.models import now_iso
from gamezone.store import SCORES_KEY, DurableStore

logger = logging.getLogger(__name__)

NO_RECORD_LABEL = "—"


class Policy(str, Enum):
    """How a metric improves."""

    MAXIMIZE = "maximize"  # higher is better: points, streaks
    MINIMIZE = "minimize"  # lower is better: milliseconds, attempts, moves


@dataclass(frozen=True)
class GameMetric:
    """The best-value metric a game records.

    Attributes:
        game_id: Key under the user's score map.
        key: Metric name inside the game record.
        policy: Whether higher or lower values win.
        icon: Prefix used by :meth:`RecordLedger.best_label_for_user`.
        unit: Suffix used in labels (empty for time metrics).
    """

    game_id: str
    key: str
    policy: Policy
    icon: str
    unit: str = ""


# Label priority order: the first game with a record wins.
GAME_CATALOG: tuple[GameMetric, ...] = (
    GameMetric("reaction", "bestMs", Policy.MINIMIZE, "⚡"),
    GameMetric("guess", "bestAttempts", Policy.MINIMIZE, "🎯", "attempts"),
    GameMetric("memory", "bestMoves", Policy.MINIMIZE, "🧠", "moves"),
    GameMetric("whack", "bestScore", Policy.MAXIMIZE, "👾", "points"),
    GameMetric("rps", "bestStreak", Policy.MAXIMIZE, "🪨", "streak"),
)

GAMES_BY_ID: dict[str, GameMetric] = {metric.game_id: metric for metric in GAME_CATALOG}


def is_number(value: Any) -> bool:
    """``True`` for real numbers; booleans do not count."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def format_ms(ms: float) -> str:
    """Render milliseconds as seconds with three decimals (``"0.231s"``)."""
    return f"{ms / 1000:.3f}s"


def _format_count(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def beats(value: float, prior: float, policy: Policy) -> bool:
    """Strict comparison under ``policy``; ties never improve."""
    if policy is Policy.MAXIMIZE:
        return value > prior
    return value < prior


class RecordLedger:
    """Personal-best tracking backed by a :class:`DurableStore`."""

    def __init__(self, store: DurableStore) -> None:
        self.store = store

    def get_all(self) -> dict[str, Any]:
        """Return the full score map keyed by user id."""
        scores = self.store.get(SCORES_KEY, {})
        return scores if isinstance(scores, dict) else {}

    def get_user(self, user_id: str) -> dict[str, Any]:
        """Return one user's game records (empty dict if none)."""
        records = self.get_all().get(user_id)
        return records if isinstance(records, dict) else {}

    def get_best(self, user_id: str, game_id: str, key: str) -> float | None:
        game = self.get_user(user_id).get(game_id)
        value = game.get(key) if isinstance(game, dict) else None
        return value if is_number(value) else None

    def update_best(
        self,
        user_id: str,
        game_id: str,
        key: str,
        value: float,
        policy: Policy | str,
    ) -> bool:
        """Merge a new result into the user's record for ``game_id``.

        The first numeric value for ``(user_id, game_id, key)`` always counts
        as an improvement. After that a value improves only when it strictly
        beats the stored one under ``policy``. ``updatedAt`` is stamped on
        every call.

        Returns:
            ``True`` when ``value`` became the new best.

        Raises:
            ValueError: ``value`` is not a finite number or ``policy`` is unknown.
        """
        policy = Policy(policy)
        if not is_number(value) or not math.isfinite(value):
            raise ValueError(f"Record value must be a finite number, got {value!r}")

        improved = False

        def transform(all_scores: Any) -> dict[str, Any]:
            nonlocal improved
            all_scores = all_scores if isinstance(all_scores, dict) else {}
            user_scores = all_scores.get(user_id)
            user_scores = user_scores if isinstance(user_scores, dict) else {}
            game = user_scores.get(game_id)
            game = game if isinstance(game, dict) else {}

            prior = game.get(key)
            if not is_number(prior):
                improved = True
                best = value
            else:
                improved = beats(value, prior, policy)
                best = value if improved else prior

            next_game = {**game, key: best, "updatedAt": now_iso()}
            return {**all_scores, user_id: {**user_scores, game_id: next_game}}

        self.store.update(SCORES_KEY, transform, {})
        if improved:
            logger.debug("New best for %s on %s.%s: %s", user_id, game_id, key, value)
        return improved

    def update_best_higher(self, user_id: str, game_id: str, key: str, value: float) -> bool:
        """Shorthand for :meth:`update_best` with :attr:`Policy.MAXIMIZE`."""
        return self.update_best(user_id, game_id, key, value, Policy.MAXIMIZE)

    def update_best_lower(self, user_id: str, game_id: str, key: str, value: float) -> bool:
        """Shorthand for :meth:`update_best` with :attr:`Policy.MINIMIZE`."""
        return self.update_best(user_id, game_id, key, value, Policy.MINIMIZE)

    def best_label_for_user(self, user_id: str) -> str:
        """One-line summary of the user's most prominent record.

        Games are checked in :data:`GAME_CATALOG` order (reaction time, guess
        attempts, memory moves, whack score, rock-paper-scissors streak); the
        first one with a numeric record is shown.
        """
        records = self.get_user(user_id)
        for metric in GAME_CATALOG:
            game = records.get(metric.game_id)
            value = game.get(metric.key) if isinstance(game, dict) else None
            if not is_number(value):
                continue
            if metric.unit:
                return f"{metric.icon} {_format_count(value)} {metric.unit}"
            return f"{metric.icon} {format_ms(value)}"
        return NO_RECORD_LABEL
