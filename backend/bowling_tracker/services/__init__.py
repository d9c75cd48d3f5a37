"""Internal application services (pure helpers, no I/O)."""

from .validation import ValidationError, validate_player_names
from .game import (
    Turn,
    init_game,
    submit_roll,
    is_game_complete,
    get_winner,
    get_winners,
)

__all__ = [
    "validate_player_names",
    "ValidationError",
    "Turn",
    "init_game",
    "submit_roll",
    "is_game_complete",
    "get_winner",
    "get_winners",
]
