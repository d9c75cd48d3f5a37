"""Turn sequencing for a multi-player bowling game.

A game is a plain dict::

    {"players": [{"name": ..., "frames": [...], "totalScore": ...}], "turn": Turn}

``turn`` is the single pointer to whose turn it is. Players bowl frame-major,
player-minor: everyone finishes frame N before anyone starts frame N + 1.
Rolls addressed to any other coordinate, malformed input and illegal pinfall
are ignored and the state comes back untouched.
"""
import logging
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

from ..scoring import bowling
from .validation import validate_player_names

logger = logging.getLogger(__name__)

IN_PROGRESS = "in_progress"
COMPLETE = "complete"


class Turn(NamedTuple):
    player: int
    frame: int
    roll: int


START = Turn(0, 0, 0)


def new_frames() -> List[Dict]:
    return [
        {"rolls": [], "score": 0, "complete": False} for _ in range(bowling.FRAMES)
    ]


def init_game(names: Sequence[str]) -> Dict:
    """Start a game for 1-5 named players.

    Raises ``ValidationError`` when the roster is empty, too long or contains
    a blank name.
    """
    roster = validate_player_names(names)
    players = [{"name": name, "frames": new_frames(), "totalScore": 0} for name in roster]
    logger.info("Starting game for %d player(s)", len(players))
    return {"players": players, "turn": START}


def is_game_complete(state: Dict) -> bool:
    return state["turn"].frame >= bowling.FRAMES


def is_active(state: Dict, player: int, frame: int, roll: int) -> bool:
    return Turn(player, frame, roll) == state["turn"]


def advance(state: Dict) -> Turn:
    """Move the turn pointer past the roll just recorded."""
    turn = state["turn"]
    frame = state["players"][turn.player]["frames"][turn.frame]
    if not frame["complete"]:
        nxt = turn._replace(roll=turn.roll + 1)
    elif turn.player < len(state["players"]) - 1:
        nxt = Turn(turn.player + 1, turn.frame, 0)
    else:
        nxt = Turn(0, turn.frame + 1, 0)
    state["turn"] = nxt
    return nxt


def submit_roll(state: Dict, player: int, frame: int, roll: int, value: Any) -> Dict:
    """Record a roll for the active coordinate and advance the turn.

    This is the only operation that mutates a game. Anything that cannot be
    recorded leaves the state as it was.
    """
    if is_game_complete(state) or not is_active(state, player, frame, roll):
        logger.debug(
            "Ignoring roll %r for inactive turn (%s, %s, %s)", value, player, frame, roll
        )
        return state

    bowler = state["players"][player]
    current = bowler["frames"][frame]
    try:
        mark = bowling.legal_mark(current["rolls"], frame, value)
    except bowling.InvalidRoll as exc:
        logger.debug("Rejected roll %r at %s: %s", value, state["turn"], exc)
        return state

    current["rolls"].append(mark)
    current["complete"] = bowling.frame_complete(current["rolls"], frame)
    bowling.rescore(bowler, frame)
    advance(state)

    if is_game_complete(state):
        logger.info(
            "Game complete: %s",
            ", ".join(f"{p['name']}={p['totalScore']}" for p in state["players"]),
        )
    return state


def current_player(state: Dict) -> Optional[Dict]:
    if is_game_complete(state):
        return None
    return state["players"][state["turn"].player]


def get_winners(state: Dict) -> List[Dict]:
    """Every player sharing the top total; empty until the game is over."""
    if not is_game_complete(state):
        return []
    best = max(p["totalScore"] for p in state["players"])
    return [p for p in state["players"] if p["totalScore"] == best]


def get_winner(state: Dict) -> Optional[Dict]:
    # first maximum on a tie; use get_winners to see every co-leader
    winners = get_winners(state)
    return winners[0] if winners else None


def summary(state: Dict) -> Dict:
    turn = state["turn"]
    winners = get_winners(state)
    up = current_player(state)
    return {
        "players": [
            {
                "name": p["name"],
                "frames": [
                    {
                        "rolls": list(f["rolls"]),
                        "score": f["score"],
                        "complete": f["complete"],
                        "rollsAllowed": bowling.rolls_allowed(f["rolls"], i),
                    }
                    for i, f in enumerate(p["frames"])
                ],
                "totalScore": p["totalScore"],
            }
            for p in state["players"]
        ],
        "turn": turn._asdict(),
        "status": COMPLETE if is_game_complete(state) else IN_PROGRESS,
        "currentPlayer": up["name"] if up else None,
        "winners": [p["name"] for p in winners],
        "tie": len(winners) > 1,
    }
