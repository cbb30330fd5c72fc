"""Personal-best records for the game catalog."""

from gamezone.records.ledger import (
    GAME_CATALOG,
    GAMES_BY_ID,
    NO_RECORD_LABEL,
    GameMetric,
    Policy,
    RecordLedger,
    format_ms,
)

__all__ = [
    "GAME_CATALOG",
    "GAMES_BY_ID",
    "NO_RECORD_LABEL",
    "GameMetric",
    "Policy",
    "RecordLedger",
    "format_ms",
]
