"""
Is a king under attack?

Both questions get answered by collecting the attacked squares of one side:
* did the player who just moved leave their own king in check? (not allowed)
* does the move put the opponent in check? (stored in the Round)
"""

from src.chess.board import Board
from src.chess.moves import attacked_squares, generate_all
from src.chess.pieces import Owner
from src.chess.square import mirror


def enemy_attacks(board: Board) -> set[int]:
    """
    Squares the ENEMY pieces attack (in this board's coordinates)

    The movement rules only work for OWN pieces, so look at the board from the opponent's chair and map the result back.
    """
    opponent_view = board.to_opponent_view()
    return {mirror(square) for square in attacked_squares(opponent_view)}


def enemy_captures(board: Board) -> set[int]:
    """Squares holding OWN pieces that an ENEMY piece could capture right now (empty squares never count)"""
    captures: set[int] = set()
    for move_set in generate_all(board.to_opponent_view()).values():
        captures |= move_set.captures
    return {mirror(square) for square in captures}


def is_own_king_attacked(board: Board) -> bool:
    """Is the OWN king in check?"""
    king = board.king_square(Owner.OWN)
    if king is None:
        return False
    return king in enemy_attacks(board)


def is_enemy_king_attacked(board: Board) -> bool:
    """Do the OWN pieces give check to the ENEMY king?"""
    king = board.king_square(Owner.ENEMY)
    if king is None:
        return False
    return king in attacked_squares(board)


def moves_into_check(board: Board) -> bool:
    """Board is the position right after your move (in your perspective)"""
    return is_own_king_attacked(board)


def gives_check(board: Board) -> bool:
    """Board is the position right after your move (in your perspective)"""
    return is_enemy_king_attacked(board)
