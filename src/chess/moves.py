"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the pseudo-legal move sets for each piece type.
Boards are always seen from the moving player's perspective: OWN pieces move, and pawns move "up" the board (towards row 0).
That way a single set of rules serves both colors.

Legality (not leaving your own king in check) is checked later by the validator.
"""

from dataclasses import dataclass, field
from typing import Callable, Protocol

from src.chess.pieces import Owner, Piece, PieceType
from src.chess.square import PAWN_HOME_ROW, row_of, shift


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, index: int) -> Piece: ...
    def locate_owner(self, owner: Owner) -> list[int]: ...


Vector = tuple[int, int]


@dataclass
class MoveSet:
    """
    Target squares for a single piece
    ----

    * moves: onto empty squares
    * captures: onto squares occupied by the opponent
    * en_passant_moves: pawn double steps (a move, not a capture). Named after the en passant capture they make possible.
    """

    moves: set[int] = field(default_factory=set)
    captures: set[int] = field(default_factory=set)
    en_passant_moves: set[int] = field(default_factory=set)

    def update(self, other: "MoveSet") -> None:
        self.moves |= other.moves
        self.captures |= other.captures
        self.en_passant_moves |= other.en_passant_moves

    def destinations(self) -> set[int]:
        return self.moves | self.captures | self.en_passant_moves


STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (-2, -1),
    (-2, 1),
    (-1, 2),
    (-1, -2),
    (1, 2),
    (2, 1),
    (2, -1),
    (1, -2),
]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS
# pawns move towards row 0, and take diagonally forward
PAWN_PUSH: Vector = (-1, 0)
PAWN_TAKES: list[Vector] = [(-1, -1), (-1, 1)]


# --- MOVEMENT RULES ---
def raycasting_move(square: int, board: Board, directions: list[Vector]) -> MoveSet:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.
    """
    move_set = MoveSet()
    for d_row, d_col in directions:
        target = shift(square, d_row, d_col)
        while target is not None:
            piece = board.piece(target)
            if not piece.is_empty:
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if piece.is_enemy:
                    move_set.captures.add(target)
                break

            move_set.moves.add(target)
            target = shift(target, d_row, d_col)
    return move_set


def single_step_move(square: int, board: Board, deltas: list[Vector]) -> MoveSet:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump to a fixed set of squares"""
    move_set = MoveSet()
    for d_row, d_col in deltas:
        target = shift(square, d_row, d_col)
        if target is None:
            continue

        piece = board.piece(target)
        if piece.is_empty:
            move_set.moves.add(target)
        elif piece.is_enemy:
            move_set.captures.add(target)
    return move_set


def candidate_pawn_moves(square: int, board: Board) -> MoveSet:
    """
    A pawn:
    - moves by a single square forward.
    - It can move by two in their first move (so when on their starting row). Tracked separately, as it opens up en passant.
    - takes diagonally

    NOTE: The en passant capture itself depends on the previous round, so it is left to the validator/scanner
    """
    move_set = MoveSet()
    for d_row, d_col in PAWN_TAKES:
        target = shift(square, d_row, d_col)
        if target is not None and board.piece(target).is_enemy:
            move_set.captures.add(target)

    one_step = shift(square, *PAWN_PUSH)
    if one_step is None or not board.piece(one_step).is_empty:
        return move_set
    move_set.moves.add(one_step)

    if row_of(square) == PAWN_HOME_ROW:
        two_steps = shift(one_step, *PAWN_PUSH)
        if two_steps is not None and board.piece(two_steps).is_empty:
            move_set.en_passant_moves.add(two_steps)
    return move_set


def candidate_knight_moves(square: int, board: Board) -> MoveSet:
    """Knights always move such that |delta_row| + |delta_col| = 3"""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(square: int, board: Board) -> MoveSet:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: int, board: Board) -> MoveSet:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(square: int, board: Board) -> MoveSet:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    move_set = candidate_rook_moves(square, board)
    move_set.update(candidate_bishop_moves(square, board))
    return move_set


def candidate_king_moves(square: int, board: Board) -> MoveSet:
    """
    The king can move by a single square at the time.

    Castling is modelled separately (see castling.py).
    """
    return single_step_move(square, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[int, Board], MoveSet]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def generate(board: Board, origin: int) -> MoveSet:
    """Pseudo-legal targets of the piece on origin. Only OWN pieces can move: anything else yields empty sets."""
    piece = board.piece(origin)
    if not piece.is_own:
        return MoveSet()
    return MOVEMENT_RULES[piece.type](origin, board)


def generate_all(board: Board) -> dict[int, MoveSet]:
    """Pseudo-legal targets for every OWN piece on the board, keyed by starting square"""
    return {origin: generate(board, origin) for origin in board.locate_owner(Owner.OWN)}


# --- ATTACKING RULES ---
def pawn_attacks(square: int) -> set[int]:
    """Pawns attack diagonally forward, whether or not anything stands there."""
    attacked: set[int] = set()
    for d_row, d_col in PAWN_TAKES:
        target = shift(square, d_row, d_col)
        if target is not None:
            attacked.add(target)
    return attacked


def attacked_squares(board: Board) -> set[int]:
    """
    All squares the OWN pieces attack
    ----

    For every piece apart from the pawn, the attacked squares are exactly its moves + captures.
    Pawns move forward but attack diagonally, so those are handled separately.
    """
    attacked: set[int] = set()
    for origin in board.locate_owner(Owner.OWN):
        if board.piece(origin).type == PieceType.PAWN:
            attacked |= pawn_attacks(origin)
            continue
        move_set = generate(board, origin)
        attacked |= move_set.moves | move_set.captures
    return attacked
