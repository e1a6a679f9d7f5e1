"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field

# Type aliases to make GameModel easier to read
PieceColor = str
PlayerId = str
SquareCode = str


@dataclass
class RoundModel:
    """Transport-safe representation of one history entry. Boards are lists of 2-character square codes."""

    step: int
    board_white: list[SquareCode]
    board_black: list[SquareCode]
    prev_piece_white: int = -1
    prev_piece_black: int = -1
    en_passant: int = -1
    check: bool = False
    winner: str = ""
    has_king_moved: bool = False
    has_left_rook_moved: bool = False
    has_right_rook_moved: bool = False
    castle_left: bool = False
    castle_right: bool = False


@dataclass
class GameModel:
    """Transport-safe representation of a chess game used between API, Service, DB, and Game layers."""

    room_name: str
    players: list[PlayerId]
    registered_colors: dict[PieceColor, PlayerId]
    step: int
    status: str
    history: list[RoundModel] = field(default_factory=list)
