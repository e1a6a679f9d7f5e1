"""
Helpers for implementing Castling rules. Need to be imported by multiple sources

All squares are in the castling player's own perspective. Because the board is rotated (not mirrored) for Black,
the king starts on 60 for White but on 59 for Black, and the squares between king and rook differ per side.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from src.chess.board import Board
from src.chess.check import enemy_captures
from src.chess.pieces import PieceType, own
from src.core.exceptions import IllegalCastleError
from src.core.shared_types import Color

logger = logging.getLogger(__name__)

LEFT_ROOK_HOME = 56
RIGHT_ROOK_HOME = 63
KING_HOME: dict[Color, int] = {Color.WHITE: 60, Color.BLACK: 59}


class CastleSide(Enum):
    """Which rook the king castles with: the one in the left corner (56) or the right corner (63)."""

    LEFT = "left"
    RIGHT = "right"


# Squares beside the king (offsets from its home square) that may not hold a piece the opponent can capture.
# They lie on the wing opposite to the rook the king castles with.
GUARDED_OFFSETS: dict[CastleSide, tuple[int, int]] = {
    CastleSide.LEFT: (1, 2),
    CastleSide.RIGHT: (-1, -2),
}


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    NOTE: If castling rights have not been revoked, we already know the king / rook are still at their starting squares.
    """

    king_from: int
    king_to: int
    rook_from: int
    rook_to: int

    @property
    def between(self) -> list[int]:
        """Squares strictly between king and rook. All must be empty to castle."""
        low, high = sorted((self.king_from, self.rook_from))
        return list(range(low + 1, high))

    @property
    def touched(self) -> set[int]:
        return {self.king_from, self.king_to, self.rook_from, self.rook_to}


# The moves made when castling
CASTLING_RULES: dict[tuple[Color, CastleSide], CastlingSquares] = {
    (Color.WHITE, CastleSide.LEFT): CastlingSquares(60, 58, 56, 59),
    (Color.WHITE, CastleSide.RIGHT): CastlingSquares(60, 62, 63, 61),
    (Color.BLACK, CastleSide.LEFT): CastlingSquares(59, 57, 56, 58),
    (Color.BLACK, CastleSide.RIGHT): CastlingSquares(59, 61, 63, 60),
}


@dataclass(frozen=True)
class MovedFlags:
    """Has the player ever moved their king / rooks? Carried forward from round to round."""

    king: bool = False
    left_rook: bool = False
    right_rook: bool = False


def update_moved_flags(previous: MovedFlags, board: Board, color: Color) -> MovedFlags:
    """
    Once a piece leaves its home square the flag stays set, even if it comes back later.
    (A rook that gets captured on its home square also counts as moved.)
    """
    king_home = KING_HOME[color]
    return MovedFlags(
        king=previous.king or board.piece(king_home) != own(PieceType.KING),
        left_rook=previous.left_rook
        or board.piece(LEFT_ROOK_HOME) != own(PieceType.ROOK),
        right_rook=previous.right_rook
        or board.piece(RIGHT_ROOK_HOME) != own(PieceType.ROOK),
    )


def castle_side(diff: list[int]) -> CastleSide:
    """A castling move always touches one of the corners"""
    if LEFT_ROOK_HOME in diff:
        return CastleSide.LEFT
    if RIGHT_ROOK_HOME in diff:
        return CastleSide.RIGHT
    raise IllegalCastleError("Illegal castle: neither rook took part in the move.")


def is_castle_pattern(
    prev_board: Board, board: Board, squares: CastlingSquares
) -> bool:
    """Exactly the king and the rook swapped sides over empty squares, nothing else changed."""
    king = own(PieceType.KING)
    rook = own(PieceType.ROOK)
    return (
        set(prev_board.diff(board)) == squares.touched
        and prev_board.piece(squares.king_from) == king
        and prev_board.piece(squares.rook_from) == rook
        and all(prev_board.is_empty(square) for square in squares.between)
        and board.is_empty(squares.king_from)
        and board.is_empty(squares.rook_from)
        and board.piece(squares.king_to) == king
        and board.piece(squares.rook_to) == rook
    )


def validate_castle(
    prev_board: Board,
    board: Board,
    color: Color,
    diff: list[int],
    castle_left: bool,
    castle_right: bool,
) -> CastlingSquares:
    """
    Check a submitted castling move against the eligibility computed in the previous round.
    Returns the squares involved, raises IllegalCastleError otherwise.
    """
    if not castle_left and not castle_right:
        raise IllegalCastleError("You cannot castle.")

    side = castle_side(diff)
    allowed = castle_left if side == CastleSide.LEFT else castle_right
    if not allowed:
        raise IllegalCastleError(f"You cannot castle {side.value}.")

    squares = CASTLING_RULES[(color, side)]
    if not is_castle_pattern(prev_board, board, squares):
        raise IllegalCastleError(f"Illegal {side.value} castle.")
    return squares


def castle_rights(
    board: Board, color: Color, moved: MovedFlags, in_check: bool
) -> tuple[bool, bool]:
    """
    Can the player to move next castle (left, right)?
    ---

    board is in the perspective of that player (so their pieces are OWN).

    **you are allowed to castle if**

    * You are not currently in check (you cannot castle out of a check).
    * Neither your king nor the rook of choice ever moved.
    * All squares in between king and rook are empty.
    * The two squares beside the king on the opposite wing (GUARDED_OFFSETS) hold nothing the opponent can capture.
      Empty squares never count, even when an enemy piece covers them.
    """
    if in_check or moved.king:
        return False, False

    capturable = enemy_captures(board)
    rights: dict[CastleSide, bool] = {}
    for side, rook_moved in (
        (CastleSide.LEFT, moved.left_rook),
        (CastleSide.RIGHT, moved.right_rook),
    ):
        squares = CASTLING_RULES[(color, side)]
        rights[side] = (
            not rook_moved
            and board.piece(squares.king_from) == own(PieceType.KING)
            and board.piece(squares.rook_from) == own(PieceType.ROOK)
            and all(board.is_empty(square) for square in squares.between)
            and not any(
                squares.king_from + offset in capturable
                for offset in GUARDED_OFFSETS[side]
            )
        )

    logger.debug("castle rights for %s: %s", color, rights)
    return rights[CastleSide.LEFT], rights[CastleSide.RIGHT]
