"""Defines the types of chess pieces, and who owns them (relative to the player looking at the board)"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self

from src.core.exceptions import InvalidRequestError


class PieceType(Enum):
    EMPTY = auto()
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Owner(Enum):
    """
    Ownership is relative to the perspective of the board.
    OWN pieces belong to the player looking at the board, ENEMY pieces to the opponent.
    """

    NONE = auto()
    OWN = auto()
    ENEMY = auto()

    @property
    def flipped(self) -> "Owner":
        if self == Owner.OWN:
            return Owner.ENEMY
        if self == Owner.ENEMY:
            return Owner.OWN
        return Owner.NONE


CODE_TO_PIECE: dict[str, PieceType] = {
    "X": PieceType.EMPTY,
    "P": PieceType.PAWN,
    "H": PieceType.KNIGHT,
    "B": PieceType.BISHOP,
    "R": PieceType.ROOK,
    "Q": PieceType.QUEEN,
    "K": PieceType.KING,
}

PIECE_TO_CODE: dict[PieceType, str] = {
    value: key for key, value in CODE_TO_PIECE.items()
}

CODE_TO_OWNER: dict[str, Owner] = {"0": Owner.NONE, "1": Owner.OWN, "2": Owner.ENEMY}

OWNER_TO_CODE: dict[Owner, str] = {value: key for key, value in CODE_TO_OWNER.items()}

# A pawn reaching the far row may be replaced by one of these
PROMOTION_OPTIONS: tuple[PieceType, ...] = (
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.ROOK,
    PieceType.QUEEN,
)


@dataclass(frozen=True)
class Piece:
    type: PieceType
    owner: Owner

    def __post_init__(self):
        # NOTE: an empty square has no owner, and only an empty square has no owner
        if (self.type == PieceType.EMPTY) != (self.owner == Owner.NONE):
            raise InvalidRequestError(
                f"Inconsistent piece: {self.type.name} owned by {self.owner.name}"
            )

    @classmethod
    def from_code(cls, code: str) -> Self:
        """
        Square codes: <type letter><owner digit>
        ex) "P1" own pawn, "K2" enemy king, "X0" empty square
        """
        if not isinstance(code, str) or len(code) != 2:
            raise InvalidRequestError(f"Cannot interpret {code!r} as a square code.")

        letter, digit = code[0], code[1]
        if letter not in CODE_TO_PIECE or digit not in CODE_TO_OWNER:
            raise InvalidRequestError(f"Unknown square code: {code!r}")
        return cls(CODE_TO_PIECE[letter], CODE_TO_OWNER[digit])

    def to_code(self) -> str:
        return f"{PIECE_TO_CODE[self.type]}{OWNER_TO_CODE[self.owner]}"

    def flipped(self) -> "Piece":
        """Same piece seen from the other side of the board."""
        return Piece(self.type, self.owner.flipped)

    @property
    def is_empty(self) -> bool:
        return self.type == PieceType.EMPTY

    @property
    def is_own(self) -> bool:
        return self.owner == Owner.OWN

    @property
    def is_enemy(self) -> bool:
        return self.owner == Owner.ENEMY


EMPTY = Piece(PieceType.EMPTY, Owner.NONE)


def own(piece_type: PieceType) -> Piece:
    return Piece(piece_type, Owner.OWN)


def enemy(piece_type: PieceType) -> Piece:
    return Piece(piece_type, Owner.ENEMY)
