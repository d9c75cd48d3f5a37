import logging

from fastapi import APIRouter, Response, status

from ..exceptions import GameNotFound, InvalidRoster, ProblemDetail, http_problem
from ..schemas import (
    GameCreate,
    GameOut,
    LineIn,
    LineOut,
    RollIn,
    RollOut,
    WinnerOut,
)
from ..scoring import bowling
from ..services import game as engine
from ..services.store import games
from ..services.validation import ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/games",
    tags=["games"],
    responses={404: {"model": ProblemDetail}},
)


def _to_game_out(game_id: str, state: dict) -> GameOut:
    return GameOut(id=game_id, **engine.summary(state))


# POST /api/v0/games
@router.post("", response_model=GameOut, status_code=status.HTTP_201_CREATED)
async def create_game(body: GameCreate) -> GameOut:
    try:
        state = engine.init_game(body.players)
    except ValidationError as exc:
        raise InvalidRoster(exc.detail)
    game_id = await games.create(state)
    logger.info("Created game %s", game_id)
    return _to_game_out(game_id, state)


# POST /api/v0/games/score
@router.post("/score", response_model=LineOut)
async def score_line(body: LineIn) -> LineOut:
    """Score one bowler's rolls, bowled in order, without creating a game."""
    state = bowling.init_state({})
    for i, pins in enumerate(body.rolls, start=1):
        try:
            state = bowling.apply({"type": "ROLL", "pins": pins}, state)
        except ValueError as exc:
            raise http_problem(
                status_code=400,
                detail=f"roll #{i}: {exc}",
                code="line_roll_invalid",
            )
    return LineOut(**bowling.summary(state))


@router.get("/{game_id}", response_model=GameOut)
async def get_game(game_id: str) -> GameOut:
    state = await games.get(game_id)
    if state is None:
        raise GameNotFound(game_id)
    return _to_game_out(game_id, state)


@router.post("/{game_id}/rolls", response_model=RollOut)
async def submit_roll(game_id: str, body: RollIn) -> RollOut:
    # Rejected rolls are not errors: the response reports accepted=False and
    # the unchanged game.
    def _roll(state: dict) -> tuple[bool, dict]:
        before = state["turn"]
        engine.submit_roll(
            state,
            before.player if body.player is None else body.player,
            before.frame if body.frame is None else body.frame,
            before.roll if body.roll is None else body.roll,
            body.value,
        )
        return state["turn"] != before, engine.summary(state)

    result = await games.update(game_id, _roll)
    if result is None:
        raise GameNotFound(game_id)
    accepted, snapshot = result
    return RollOut(id=game_id, accepted=accepted, **snapshot)


@router.get("/{game_id}/winner", response_model=WinnerOut)
async def get_winner(game_id: str) -> WinnerOut:
    state = await games.get(game_id)
    if state is None:
        raise GameNotFound(game_id)
    winner = engine.get_winner(state)
    winners = engine.get_winners(state)
    return WinnerOut(
        complete=engine.is_game_complete(state),
        winner=winner["name"] if winner else None,
        totalScore=winner["totalScore"] if winner else None,
        winners=[p["name"] for p in winners],
        tie=len(winners) > 1,
    )


@router.delete("/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_game(game_id: str) -> Response:
    if not await games.delete(game_id):
        raise GameNotFound(game_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
