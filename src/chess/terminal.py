"""
Checkmate / stalemate detection.

After every accepted move, try every reply the opponent has. As soon as one of them leaves the opponent's king safe,
the game goes on. Each reply is played on a throw-away copy of the board, so nothing leaks into the stored position.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from src.chess.board import Board
from src.chess.check import is_own_king_attacked
from src.chess.moves import generate_all, pawn_attacks
from src.chess.pieces import PieceType, enemy
from src.chess.square import NO_SQUARE
from src.core.shared_types import NO_WINNER, TIE, Color

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reply:
    origin: int
    destination: int
    captured_square: Optional[int] = None  # only set for en passant: the captured pawn is not on the destination


def candidate_replies(board: Board, en_passant: int = NO_SQUARE) -> Iterator[Reply]:
    """
    Every pseudo-legal move of the OWN pieces (moves, double steps, captures)
    + the en passant capture made available by the previous move.
    """
    for origin, move_set in generate_all(board).items():
        for destination in sorted(move_set.destinations()):
            yield Reply(origin, destination)

        if board.piece(origin).type != PieceType.PAWN or en_passant == NO_SQUARE:
            continue
        captured = en_passant + 8
        if (
            en_passant in pawn_attacks(origin)
            and board.is_empty(en_passant)
            and board.piece(captured) == enemy(PieceType.PAWN)
        ):
            yield Reply(origin, en_passant, captured_square=captured)


def is_safe_reply(board: Board, reply: Reply) -> bool:
    """Play the reply on a copy of the board, and check the king is not attacked afterwards"""
    after = board.after_move(reply.origin, reply.destination, reply.captured_square)
    return not is_own_king_attacked(after)


def has_mobility(
    board: Board,
    en_passant: int = NO_SQUARE,
    castle_left: bool = False,
    castle_right: bool = False,
) -> bool:
    """
    Can the player whose perspective the board is in make any legal move?

    en_passant / castle flags are the ones just computed for this player's upcoming turn.
    """
    if castle_left or castle_right:
        return True

    for reply in candidate_replies(board, en_passant):
        if is_safe_reply(board, reply):
            logger.debug("found a legal reply: %s", reply)
            return True
    return False


def decide_winner(check: bool, mobility: bool, mover: Color) -> str:
    """
    No legal moves left for the opponent:
    * in check: checkmate, the player who just moved wins
    * not in check: stalemate, a tie
    """
    if mobility:
        return NO_WINNER
    return str(mover) if check else TIE
