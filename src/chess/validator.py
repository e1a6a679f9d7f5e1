"""
Reconstruct which move was made from two snapshots of the board, and decide if it was legal.

Players do not submit moves, they submit the board after their move. The squares that changed tell us what happened:
* 2 squares: a normal move or capture (also pawn double steps and promotions)
* 3 squares: an en passant capture (the captured pawn is not on the destination square)
* 4 squares: castling (king and rook both move)
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol

from src.chess.board import Board
from src.chess.castling import validate_castle
from src.chess.check import moves_into_check
from src.chess.moves import generate, pawn_attacks
from src.chess.pieces import PROMOTION_OPTIONS, Piece, PieceType, enemy, own
from src.chess.square import NO_SQUARE, mirror, row_of
from src.core.exceptions import (
    IllegalCaptureError,
    IllegalMoveError,
    IllegalPieceError,
    SelfCheckError,
)
from src.core.shared_types import Color

logger = logging.getLogger(__name__)

PROMOTION_ROW = 0


class PreviousRound(Protocol):
    """Just the parts of the previous round the validator needs"""

    en_passant: int
    castle_left: bool
    castle_right: bool


class MoveKind(Enum):
    NORMAL = auto()
    CAPTURE = auto()
    DOUBLE_STEP = auto()
    EN_PASSANT = auto()
    CASTLE = auto()


@dataclass(frozen=True)
class ClassifiedMove:
    """
    What the submitted board turned out to be
    ---

    * origin / destination are in the mover's perspective (for castling: the king's squares)
    * en_passant is the square (in the opponent's perspective) where the opponent may capture en passant next round
    """

    kind: MoveKind
    origin: int
    destination: int
    en_passant: int = NO_SQUARE


def classify_move(
    prev_board: Board, board: Board, color: Color, previous: PreviousRound
) -> ClassifiedMove:
    """Figure out which move was made and check it against the movement rules. Does not look at checks."""
    diff = prev_board.diff(board)
    if len(diff) == 2:
        return _classify_two_squares(prev_board, board, diff)
    if len(diff) == 3:
        return _classify_en_passant(prev_board, board, diff, previous.en_passant)
    if len(diff) == 4:
        squares = validate_castle(
            prev_board,
            board,
            color,
            diff,
            previous.castle_left,
            previous.castle_right,
        )
        return ClassifiedMove(MoveKind.CASTLE, squares.king_from, squares.king_to)
    raise IllegalMoveError(f"Illegal move: {len(diff)} squares changed.")


def validate_move(
    prev_board: Board, board: Board, color: Color, previous: PreviousRound
) -> ClassifiedMove:
    """
    Full legality check of a submitted board
    ----

    1. the changed squares must describe a move allowed by the movement rules
    2. the move may not leave your own king in check (even if step 1 passed)
    """
    move = classify_move(prev_board, board, color, previous)
    if moves_into_check(board):
        raise SelfCheckError("You have moved your piece to a check position.")
    logger.debug("%s played %s %s -> %s", color, move.kind.name, move.origin, move.destination)
    return move


# --- HELPERS ---
def _classify_two_squares(
    prev_board: Board, board: Board, diff: list[int]
) -> ClassifiedMove:
    """One of the squares must have held your own piece before the move (origin), the other is the destination."""
    first, second = diff
    first_own = prev_board.piece(first).is_own
    second_own = prev_board.piece(second).is_own
    if first_own == second_own:
        raise IllegalPieceError("Illegal piece: cannot tell which of your pieces moved.")
    origin, destination = (first, second) if first_own else (second, first)

    if not _arrived_intact(prev_board.piece(origin), board, origin, destination):
        raise IllegalPieceError("Illegal piece: the piece changed on its way.")

    move_set = generate(prev_board, origin)
    target = prev_board.piece(destination)
    if target.is_enemy:
        if destination not in move_set.captures:
            raise IllegalCaptureError("Illegal capture.")
        return ClassifiedMove(MoveKind.CAPTURE, origin, destination)

    if destination in move_set.moves:
        return ClassifiedMove(MoveKind.NORMAL, origin, destination)

    if destination in move_set.en_passant_moves:
        # the square the pawn skipped over, seen from the opponent
        return ClassifiedMove(
            MoveKind.DOUBLE_STEP,
            origin,
            destination,
            en_passant=mirror(destination + 8),
        )
    raise IllegalMoveError("Illegal move.")


def _arrived_intact(
    moving: Piece, board: Board, origin: int, destination: int
) -> bool:
    """The origin is left empty, and the piece shows up unchanged (or promoted) on the destination"""
    if not board.is_empty(origin):
        return False

    arrived = board.piece(destination)
    if arrived == moving:
        return True
    is_promotion = (
        moving.type == PieceType.PAWN
        and row_of(destination) == PROMOTION_ROW
        and arrived in {own(piece_type) for piece_type in PROMOTION_OPTIONS}
    )
    return is_promotion


def _classify_en_passant(
    prev_board: Board, board: Board, diff: list[int], target: int
) -> ClassifiedMove:
    """
    En passant capture
    ---

    target is the square the previous round made available (already in our perspective).
    Your pawn lands on target, the enemy pawn that skipped over it stands one row below it.
    """
    if target == NO_SQUARE:
        raise IllegalPieceError("Illegal piece: no en passant capture available.")

    captured = target + 8
    if target not in diff or captured not in diff:
        raise IllegalPieceError("Illegal piece: not an en passant capture.")
    (origin,) = [square for square in diff if square not in (target, captured)]

    pawn = own(PieceType.PAWN)
    is_pattern = (
        prev_board.piece(origin) == pawn
        and prev_board.is_empty(target)
        and prev_board.piece(captured) == enemy(PieceType.PAWN)
        and board.is_empty(origin)
        and board.piece(target) == pawn
        and board.is_empty(captured)
        and target in pawn_attacks(origin)
    )
    if not is_pattern:
        raise IllegalPieceError("Illegal piece: not an en passant capture.")
    return ClassifiedMove(MoveKind.EN_PASSANT, origin, target)
