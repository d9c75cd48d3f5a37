"""Ten-pin bowling scoring engine.

Rolls are stored as one-character marks: ``"0"``-``"9"`` for pins knocked
down, ``"X"`` for a strike and ``"/"`` for a spare. Scores are recomputed from
the recorded rolls every time, so bonus balls that arrive later correct the
provisional scores of earlier frames.
"""
from typing import Any, Dict, List, Optional, Sequence, Tuple

STRIKE = "X"
SPARE = "/"
PINS = 10
FRAMES = 10
FINAL_FRAME = FRAMES - 1

_NUMBERS = {str(n) for n in range(PINS + 1)}
_GUTTER = "-"


class InvalidRoll(ValueError):
    """Raised when a roll cannot be recorded in a frame."""


def parse_roll(raw: Any) -> Optional[str]:
    """Normalise raw input into a token.

    Returns ``None`` for empty input ("nothing entered yet"), otherwise one of
    ``"0"``-``"10"``, ``"X"`` or ``"/"``. Whether the token is legal in a given
    frame is decided by :func:`legal_mark`.
    """
    if raw is None:
        return None
    # bool is a subclass of int
    if isinstance(raw, bool):
        raise InvalidRoll("roll must be a pin count or a mark")
    if isinstance(raw, int):
        if not 0 <= raw <= PINS:
            raise InvalidRoll(f"pins must be between 0 and {PINS}")
        return str(raw)
    if not isinstance(raw, str):
        raise InvalidRoll(f"unsupported roll value {raw!r}")

    value = raw.strip().upper()
    if not value:
        return None
    if value == _GUTTER:
        return "0"
    if value in _NUMBERS or value in (STRIKE, SPARE):
        return value
    raise InvalidRoll(f"unrecognised roll {raw!r}")


def pin_value(rolls: Sequence[str], index: int) -> int:
    """Pins credited to ``rolls[index]``; missing rolls count 0."""
    if not 0 <= index < len(rolls):
        return 0
    mark = rolls[index]
    if mark == STRIKE:
        return PINS
    if mark == SPARE:
        return PINS - pin_value(rolls, index - 1)
    return int(mark)


def _rack(rolls: Sequence[str]) -> Tuple[int, bool]:
    """Pins standing for the next ball and whether that ball starts a rack."""
    standing, fresh = PINS, True
    for mark in rolls:
        if mark in (STRIKE, SPARE) or not fresh:
            standing, fresh = PINS, True
        else:
            standing, fresh = PINS - int(mark), False
    return standing, fresh


def rolls_allowed(rolls: Sequence[str], frame_index: int) -> int:
    """How many rolls the frame takes given what has been recorded so far."""
    struck = bool(rolls) and rolls[0] == STRIKE
    if frame_index < FINAL_FRAME:
        return 1 if struck else 2
    spared = len(rolls) > 1 and rolls[1] == SPARE
    return 3 if struck or spared else 2


def frame_complete(rolls: Sequence[str], frame_index: int) -> bool:
    return len(rolls) >= rolls_allowed(rolls, frame_index)


def legal_mark(rolls: Sequence[str], frame_index: int, raw: Any) -> str:
    """Return the mark to store for the next roll of a frame.

    A numeric roll that clears a full rack is stored as a strike and one that
    clears the remaining pins as a spare, so ``"/"`` and the matching number
    are interchangeable inputs.
    """
    if not 0 <= frame_index < FRAMES:
        raise InvalidRoll(f"frame {frame_index} out of range")
    if frame_complete(rolls, frame_index):
        raise InvalidRoll(f"frame {frame_index + 1} is already complete")
    token = parse_roll(raw)
    if token is None:
        raise InvalidRoll("no roll entered")

    standing, fresh = _rack(rolls)
    # the final frame's bonus ball takes any count, whatever was left standing
    if frame_index == FINAL_FRAME and len(rolls) == 2:
        fresh = True
    if fresh:
        if token == SPARE:
            raise InvalidRoll("a spare needs an earlier ball in the rack")
        if token == STRIKE or int(token) == PINS:
            return STRIKE
        return token

    if token == STRIKE:
        raise InvalidRoll("a strike needs a full rack")
    if token == SPARE or int(token) == standing:
        return SPARE
    if int(token) > standing:
        raise InvalidRoll(f"only {standing} pins left standing")
    return token


def _rolls_at(frames: Sequence[Sequence[str]], index: int) -> Sequence[str]:
    return frames[index] if index < len(frames) else ()


def score_frame(frames: Sequence[Sequence[str]], frame_index: int) -> int:
    """Score one frame of a bowler's line, bonus balls included.

    ``frames`` holds each frame's rolls. Bonus balls that have not been
    bowled yet count 0, which leaves the score provisional.
    """
    rolls = _rolls_at(frames, frame_index)
    if not rolls:
        return 0

    if frame_index == FINAL_FRAME:
        return sum(pin_value(rolls, i) for i in range(len(rolls)))

    nxt = _rolls_at(frames, frame_index + 1)
    if rolls[0] == STRIKE:
        score = PINS
        if not nxt:
            return score
        if nxt[0] == STRIKE:
            score += PINS
            if frame_index + 1 == FINAL_FRAME:
                score += pin_value(nxt, 1)
            else:
                score += pin_value(_rolls_at(frames, frame_index + 2), 0)
        else:
            score += pin_value(nxt, 0) + pin_value(nxt, 1)
        return score

    if len(rolls) > 1 and rolls[1] == SPARE:
        return PINS + pin_value(nxt, 0)

    return pin_value(rolls, 0) + pin_value(rolls, 1)


def rescore(player: Dict, upto: int = FINAL_FRAME) -> Dict:
    """Recompute frame scores ``0..upto`` and the player's total in place."""
    frames = player["frames"]
    lines = [f["rolls"] for f in frames]
    for i in range(min(upto, FINAL_FRAME) + 1):
        frames[i]["score"] = score_frame(lines, i)
    player["totalScore"] = sum(f["score"] for f in frames)
    return player


# -----------------------------------------------------------------------------
# Single-bowler event engine
# -----------------------------------------------------------------------------
def init_state(config: Dict) -> Dict:
    return {"config": config, "frames": [[] for _ in range(FRAMES)]}


def apply(event: Dict, state: Dict) -> Dict:
    if event.get("type") != "ROLL":
        raise ValueError("invalid bowling event")
    frames: List[List[str]] = state["frames"]
    for i, rolls in enumerate(frames):
        if frame_complete(rolls, i):
            continue
        rolls.append(legal_mark(rolls, i, event.get("pins")))
        return state
    raise ValueError("no rolls left in the game")


def summary(state: Dict) -> Dict:
    frames = state["frames"]
    scores = [score_frame(frames, i) for i in range(FRAMES)]
    return {
        "frames": frames,
        "scores": scores,
        "total": sum(scores),
        "complete": frame_complete(frames[FINAL_FRAME], FINAL_FRAME),
    }
