"""Unit tests for /src/chess/castling.py"""

import pytest

from src.chess.board import Board
from src.chess.castling import (
    CASTLING_RULES,
    CastleSide,
    MovedFlags,
    castle_rights,
    castle_side,
    update_moved_flags,
    validate_castle,
)
from src.chess.pieces import PieceType, enemy, own
from src.core.exceptions import IllegalCastleError
from src.core.shared_types import Color


@pytest.fixture
def white_castling_board() -> Board:
    """White's perspective, only kings and rooks. Ready to castle both ways (if allowed)."""
    return Board.from_pieces(
        {
            56: own(PieceType.ROOK),
            60: own(PieceType.KING),
            63: own(PieceType.ROOK),
            4: enemy(PieceType.KING),
        }
    )


@pytest.fixture
def black_castling_board() -> Board:
    """Black's perspective: the king starts on 59."""
    return Board.from_pieces(
        {
            56: own(PieceType.ROOK),
            59: own(PieceType.KING),
            63: own(PieceType.ROOK),
            3: enemy(PieceType.KING),
        }
    )


def castled(board: Board, color: Color, side: CastleSide) -> Board:
    squares = CASTLING_RULES[(color, side)]
    after = board.copy()
    after.move_piece(squares.king_from, squares.king_to)
    after.move_piece(squares.rook_from, squares.rook_to)
    return after


# --- SQUARES ---
def test_castling_squares() -> None:
    white_left = CASTLING_RULES[(Color.WHITE, CastleSide.LEFT)]
    assert white_left.between == [57, 58, 59]
    assert white_left.touched == {56, 58, 59, 60}

    black_right = CASTLING_RULES[(Color.BLACK, CastleSide.RIGHT)]
    assert black_right.between == [60, 61, 62]
    assert black_right.touched == {59, 60, 61, 63}


# --- RIGHTS ---
def test_both_sides_available(white_castling_board: Board, black_castling_board: Board) -> None:
    assert castle_rights(white_castling_board, Color.WHITE, MovedFlags(), False) == (True, True)
    assert castle_rights(black_castling_board, Color.BLACK, MovedFlags(), False) == (True, True)


def test_cannot_castle_out_of_check(white_castling_board: Board) -> None:
    assert castle_rights(white_castling_board, Color.WHITE, MovedFlags(), True) == (False, False)


@pytest.mark.parametrize(
    "moved, expected",
    [
        (MovedFlags(king=True), (False, False)),
        (MovedFlags(left_rook=True), (False, True)),
        (MovedFlags(right_rook=True), (True, False)),
        (MovedFlags(left_rook=True, right_rook=True), (False, False)),
    ],
)
def test_moved_pieces_revoke_rights(
    white_castling_board: Board, moved: MovedFlags, expected: tuple[bool, bool]
) -> None:
    assert castle_rights(white_castling_board, Color.WHITE, moved, False) == expected


def test_pieces_in_between(white_castling_board: Board) -> None:
    white_castling_board.place_piece(own(PieceType.KNIGHT), 57)
    assert castle_rights(white_castling_board, Color.WHITE, MovedFlags(), False) == (False, True)


def test_covered_empty_squares_do_not_matter(white_castling_board: Board) -> None:
    """An enemy rook on the f-file covers the empty f1: only squares with something to capture count"""
    white_castling_board.place_piece(enemy(PieceType.ROOK), 5)
    assert castle_rights(white_castling_board, Color.WHITE, MovedFlags(), False) == (True, True)


def test_capturable_piece_beside_the_king(white_castling_board: Board) -> None:
    """
    A bishop on f1 blocks castling right. When the enemy rook can take it,
    castling left is revoked as well: f1 and g1 are the guarded squares for the left side.
    """
    white_castling_board.place_piece(own(PieceType.BISHOP), 61)
    assert castle_rights(white_castling_board, Color.WHITE, MovedFlags(), False) == (True, False)

    white_castling_board.place_piece(enemy(PieceType.ROOK), 5)
    assert castle_rights(white_castling_board, Color.WHITE, MovedFlags(), False) == (False, False)


def test_capturable_piece_beside_black_king(black_castling_board: Board) -> None:
    """For Black the king sits on 59: castling right is guarded by 58 and 57"""
    black_castling_board.place_piece(own(PieceType.KNIGHT), 57)
    assert castle_rights(black_castling_board, Color.BLACK, MovedFlags(), False) == (False, True)

    black_castling_board.place_piece(enemy(PieceType.BISHOP), 29)
    assert castle_rights(black_castling_board, Color.BLACK, MovedFlags(), False) == (False, False)


def test_attacked_rook_does_not_matter(white_castling_board: Board) -> None:
    """The enemy rook covers the empty b1: empty squares never revoke castling"""
    white_castling_board.place_piece(enemy(PieceType.ROOK), 1)
    assert castle_rights(white_castling_board, Color.WHITE, MovedFlags(), False) == (True, True)


def test_captured_rook(white_castling_board: Board) -> None:
    white_castling_board.place_piece(enemy(PieceType.BISHOP), 63)
    _, right = castle_rights(white_castling_board, Color.WHITE, MovedFlags(), False)
    assert not right


# --- MOVED FLAGS ---
def test_update_moved_flags() -> None:
    start = Board.starting_position()
    assert update_moved_flags(MovedFlags(), start, Color.WHITE) == MovedFlags()

    board = start.copy()
    board.move_piece(63, 47)
    assert update_moved_flags(MovedFlags(), board, Color.WHITE) == MovedFlags(right_rook=True)


def test_moved_flags_stay_set() -> None:
    """Returning to the home square does not restore the right to castle"""
    start = Board.starting_position()
    assert update_moved_flags(MovedFlags(king=True), start, Color.WHITE).king


def test_black_king_home() -> None:
    black_start = Board.starting_position().to_opponent_view()
    assert update_moved_flags(MovedFlags(), black_start, Color.BLACK) == MovedFlags()


# --- VALIDATION ---
@pytest.mark.parametrize("side", [CastleSide.LEFT, CastleSide.RIGHT])
def test_validate_castle_white(white_castling_board: Board, side: CastleSide) -> None:
    after = castled(white_castling_board, Color.WHITE, side)
    squares = validate_castle(
        white_castling_board, after, Color.WHITE, white_castling_board.diff(after), True, True
    )
    assert squares == CASTLING_RULES[(Color.WHITE, side)]


def test_validate_castle_black(black_castling_board: Board) -> None:
    after = castled(black_castling_board, Color.BLACK, CastleSide.RIGHT)
    assert after.piece(61) == own(PieceType.KING)
    assert after.piece(60) == own(PieceType.ROOK)
    squares = validate_castle(
        black_castling_board, after, Color.BLACK, black_castling_board.diff(after), False, True
    )
    assert squares.king_to == 61


def test_castle_without_rights(white_castling_board: Board) -> None:
    after = castled(white_castling_board, Color.WHITE, CastleSide.LEFT)
    diff = white_castling_board.diff(after)
    with pytest.raises(IllegalCastleError):
        _ = validate_castle(white_castling_board, after, Color.WHITE, diff, False, False)
    with pytest.raises(IllegalCastleError):
        _ = validate_castle(white_castling_board, after, Color.WHITE, diff, False, True)


def test_castle_wrong_pattern(white_castling_board: Board) -> None:
    """King and rook end up on the wrong squares"""
    after = white_castling_board.copy()
    after.move_piece(60, 61)
    after.move_piece(63, 62)
    with pytest.raises(IllegalCastleError):
        _ = validate_castle(
            white_castling_board, after, Color.WHITE, white_castling_board.diff(after), True, True
        )


def test_castle_side_needs_a_corner() -> None:
    assert castle_side([56, 58, 59, 60]) == CastleSide.LEFT
    assert castle_side([60, 61, 62, 63]) == CastleSide.RIGHT
    with pytest.raises(IllegalCastleError):
        _ = castle_side([57, 58, 59, 60])


def test_castle_through_pieces() -> None:
    """Knight and bishop are still home: the king would jump over (and onto) them"""
    board = Board.starting_position()
    after = castled(board, Color.WHITE, CastleSide.RIGHT)
    with pytest.raises(IllegalCastleError):
        _ = validate_castle(board, after, Color.WHITE, board.diff(after), True, True)
