"""Requests and Response models"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.chess.pieces import Piece
from src.chess.round import RoundView
from src.chess.square import NUM_SQUARES
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color

PlayerId = str


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    room_name: str
    players: list[PlayerId]

    @field_validator("players")
    @classmethod
    def validate_players(cls, value: list[PlayerId]) -> list[PlayerId]:
        if len(value) != 2:
            raise InvalidRequestError("A game is played by exactly 2 players.")
        return value


class AssignColorsRequest(BaseModel):
    """The caller decides who plays which color (for instance, the creator of the room picks)."""

    game_id: UUID
    white: PlayerId
    black: PlayerId


class RoundRequest(BaseModel):
    """A round as submitted by a player: the step number + the board after the move (in their perspective)"""

    step: int
    board: list[str]

    @field_validator("board")
    @classmethod
    def validate_board(cls, value: list[str]) -> list[str]:
        if len(value) != NUM_SQUARES:
            raise InvalidRequestError(
                f"A board has {NUM_SQUARES} squares, got {len(value)}."
            )

        for code in value:
            _ = Piece.from_code(code)  # raises InvalidRequestError
        return value


class SubmitRoundRequest(BaseModel):
    game_id: UUID
    player_id: PlayerId
    round: RoundRequest


class GetGameRequest(BaseModel):
    game_id: UUID
    player_id: PlayerId


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class RoundResponse(BaseModel):
    """One history entry as sent over the wire (camelCase, as the frontend expects)"""

    model_config = ConfigDict(populate_by_name=True)

    step: int
    board: list[str]
    prev_piece: int = Field(alias="prevPiece")
    en_passant: int = Field(alias="enPassant")
    check: bool
    winner: str
    castle_left: bool = Field(alias="castleLeft")
    castle_right: bool = Field(alias="castleRight")

    @classmethod
    def from_view(cls, view: RoundView) -> "RoundResponse":
        return cls(
            step=view.step,
            board=view.board,
            prev_piece=view.prev_piece,
            en_passant=view.en_passant,
            check=view.check,
            winner=view.winner,
            castle_left=view.castle_left,
            castle_right=view.castle_right,
        )


class GameResponse(BaseModel):
    game_id: UUID
    room_name: str
    players: list[PlayerId]
    colors: dict[Color, PlayerId]
    status: str


class GameViewResponse(BaseModel):
    """The game as one of the players sees it"""

    game_id: UUID
    color: Color
    step: int
    history: list[RoundResponse]
