from typing import Any, List, Sequence

MIN_PLAYERS = 1
MAX_PLAYERS = 5


class ValidationError(Exception):
    """Raised when a submitted roster is invalid."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


def validate_player_names(names: Sequence[Any]) -> List[str]:
    """Validate a roster and return the trimmed names.

    Rules:
    - At least one player is required
    - Number of players must be <= ``MAX_PLAYERS``
    - Each name must be a string that is non-empty once trimmed
    """

    if not isinstance(names, Sequence) or isinstance(names, (str, bytes)):
        raise ValidationError("Players must be provided as a list of names.")
    if len(names) < MIN_PLAYERS:
        raise ValidationError("At least one player is required.")
    if len(names) > MAX_PLAYERS:
        raise ValidationError(f"Too many players. Max allowed is {MAX_PLAYERS}.")

    normalized: List[str] = []
    for i, raw in enumerate(names, start=1):
        if not isinstance(raw, str):
            raise ValidationError(f"Player #{i} name must be a string.")
        name = raw.strip()
        if not name:
            raise ValidationError(f"Player #{i} name must not be empty.")
        normalized.append(name)

    return normalized
