from typing import Any, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, StrictInt

RollValue = Union[StrictInt, str]


class GameCreate(BaseModel):
    players: List[str]

    model_config = ConfigDict(extra="forbid")


class RollIn(BaseModel):
    """A roll for one coordinate; omitted coordinates address the active turn."""

    # passed through untouched; the game ignores anything it cannot parse
    value: Any = None
    player: Optional[int] = Field(default=None, ge=0)
    frame: Optional[int] = Field(default=None, ge=0)
    roll: Optional[int] = Field(default=None, ge=0)

    model_config = ConfigDict(extra="forbid")


class FrameOut(BaseModel):
    rolls: List[str]
    score: int
    complete: bool
    rollsAllowed: int


class PlayerOut(BaseModel):
    name: str
    frames: List[FrameOut]
    totalScore: int


class TurnOut(BaseModel):
    player: int
    frame: int
    roll: int


class GameOut(BaseModel):
    id: str
    players: List[PlayerOut]
    turn: TurnOut
    status: Literal["in_progress", "complete"]
    currentPlayer: Optional[str] = None
    winners: List[str] = Field(default_factory=list)
    tie: bool = False


class RollOut(GameOut):
    accepted: bool


class WinnerOut(BaseModel):
    complete: bool
    winner: Optional[str] = None
    totalScore: Optional[int] = None
    winners: List[str] = Field(default_factory=list)
    tie: bool = False


class LineIn(BaseModel):
    rolls: List[RollValue] = Field(..., min_length=1, max_length=21)

    model_config = ConfigDict(extra="forbid")


class LineOut(BaseModel):
    frames: List[List[str]]
    scores: List[int]
    total: int
    complete: bool
