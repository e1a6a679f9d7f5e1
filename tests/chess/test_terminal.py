"""Unit tests for /src/chess/terminal.py"""

import pytest

from src.chess.board import Board
from src.chess.pieces import PieceType, enemy, own
from src.chess.terminal import Reply, candidate_replies, decide_winner, has_mobility, is_safe_reply
from src.core.shared_types import Color


@pytest.fixture
def stalemate_board() -> Board:
    """King in the corner, not in check, every square around it covered by the queen"""
    return Board.from_pieces(
        {0: own(PieceType.KING), 17: enemy(PieceType.QUEEN), 63: enemy(PieceType.KING)}
    )


@pytest.fixture
def back_rank_mate_board() -> Board:
    """King locked in by its own pawns, rook gives check along the back rank"""
    return Board.from_pieces(
        {
            62: own(PieceType.KING),
            53: own(PieceType.PAWN),
            54: own(PieceType.PAWN),
            55: own(PieceType.PAWN),
            56: enemy(PieceType.ROOK),
            0: enemy(PieceType.KING),
        }
    )


@pytest.fixture
def en_passant_board() -> Board:
    """The enemy pawn that just double stepped gives check, taking it en passant is a way out"""
    return Board.from_pieces(
        {
            36: own(PieceType.KING),
            28: own(PieceType.PAWN),
            27: enemy(PieceType.PAWN),
            0: enemy(PieceType.KING),
        }
    )


def test_starting_position_has_mobility() -> None:
    assert has_mobility(Board.starting_position())


def test_stalemate(stalemate_board: Board) -> None:
    assert not has_mobility(stalemate_board)


def test_checkmate(back_rank_mate_board: Board) -> None:
    assert not has_mobility(back_rank_mate_board)


def test_stepping_away_from_the_rook_along_its_line(back_rank_mate_board: Board) -> None:
    """h1 looks free while the king blocks the ray, but it is not once the king stands there"""
    assert not is_safe_reply(back_rank_mate_board, Reply(62, 63))


def test_castling_counts_as_mobility(stalemate_board: Board) -> None:
    assert has_mobility(stalemate_board, castle_right=True)


def test_en_passant_reply(en_passant_board: Board) -> None:
    replies = list(candidate_replies(en_passant_board, en_passant=19))
    assert Reply(28, 19, captured_square=27) in replies
    assert Reply(28, 19, captured_square=27) not in list(candidate_replies(en_passant_board))


def test_en_passant_removes_the_checking_pawn(en_passant_board: Board) -> None:
    assert is_safe_reply(en_passant_board, Reply(28, 19, captured_square=27))
    assert not is_safe_reply(en_passant_board, Reply(28, 20))


def test_replies_leave_board_untouched(en_passant_board: Board) -> None:
    codes = en_passant_board.to_codes()
    assert has_mobility(en_passant_board, en_passant=19)
    assert en_passant_board.to_codes() == codes


@pytest.mark.parametrize(
    "check, mobility, mover, expected",
    [
        (False, True, Color.WHITE, ""),
        (True, True, Color.BLACK, ""),
        (True, False, Color.WHITE, "White"),
        (True, False, Color.BLACK, "Black"),
        (False, False, Color.BLACK, "tie"),
    ],
)
def test_decide_winner(check: bool, mobility: bool, mover: Color, expected: str) -> None:
    assert decide_winner(check, mobility, mover) == expected
