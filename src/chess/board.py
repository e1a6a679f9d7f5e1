"""The Game board: 64 squares seen from one player's perspective. Also implements the conversion to the opponent's perspective."""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Self

from src.chess.pieces import EMPTY, Owner, Piece, PieceType, enemy, own
from src.chess.square import NUM_SQUARES, mirror
from src.core.exceptions import InvalidRequestError

# Back rank, read left-to-right in White's perspective (queen on d-file, king on e-file)
BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


@dataclass
class Board:
    squares: list[Piece] = field(default_factory=lambda: [EMPTY] * NUM_SQUARES)

    def __post_init__(self):
        if len(self.squares) != NUM_SQUARES:
            raise InvalidRequestError(
                f"A board has {NUM_SQUARES} squares, got {len(self.squares)}."
            )

    @classmethod
    def from_codes(cls, codes: Iterable[str]) -> Self:
        """Construct a board from the 2-character square codes used on the wire. ex) ["R2", "H2", ..., "X0", ..., "R1"]"""
        return cls([Piece.from_code(code) for code in codes])

    def to_codes(self) -> list[str]:
        return [piece.to_code() for piece in self.squares]

    @classmethod
    def starting_position(cls) -> Self:
        """
        Standard starting position in White's perspective.
        The opponent's pieces are on rows 0 and 1, yours on rows 6 and 7.
        """
        squares: list[Piece] = [enemy(piece_type) for piece_type in BACK_RANK]
        squares.extend([enemy(PieceType.PAWN)] * 8)
        squares.extend([EMPTY] * 32)
        squares.extend([own(PieceType.PAWN)] * 8)
        squares.extend(own(piece_type) for piece_type in BACK_RANK)
        return cls(squares)

    @classmethod
    def from_pieces(cls, pieces: dict[int, Piece]) -> Self:
        """Convenience method: empty board with only the given pieces placed."""
        board = cls()
        for index, piece in pieces.items():
            board.place_piece(piece, index)
        return board

    def piece(self, index: int) -> Piece:
        return self.squares[index]

    def is_empty(self, index: int) -> bool:
        return self.squares[index].is_empty

    def copy(self) -> "Board":
        # Piece is frozen, so a shallow copy of the list is a full copy of the board
        return Board(list(self.squares))

    def to_opponent_view(self) -> "Board":
        """
        The same position, seen from the other player's chair
        ----

        The board is rotated by 180 degrees (square i becomes 63 - i) and OWN/ENEMY swap roles.
        Empty squares stay empty. Converting twice gives back the original board.
        """
        converted = Board()
        for index, piece in enumerate(self.squares):
            converted.squares[mirror(index)] = piece.flipped()
        return converted

    def locate(self, piece: Piece) -> list[int]:
        return [index for index, found in enumerate(self.squares) if found == piece]

    def locate_owner(self, owner: Owner) -> list[int]:
        return [
            index for index, piece in enumerate(self.squares) if piece.owner == owner
        ]

    def king_square(self, owner: Owner) -> Optional[int]:
        """Location of the king of the given owner (None on boards without one, which happens in constructed positions)."""
        kings = self.locate(Piece(PieceType.KING, owner))
        return kings[0] if kings else None

    def diff(self, other: "Board") -> list[int]:
        """Squares that hold different pieces on both boards (ascending order)"""
        return [
            index
            for index, (mine, theirs) in enumerate(zip(self.squares, other.squares))
            if mine != theirs
        ]

    def place_piece(self, piece: Piece, index: int) -> None:
        self.squares[index] = piece

    def remove_piece(self, index: int) -> None:
        self.squares[index] = EMPTY

    def move_piece(self, from_square: int, to_square: int) -> None:
        """Update the position on the board. Whatever stood on to_square is gone."""
        self.squares[to_square] = self.squares[from_square]
        self.squares[from_square] = EMPTY

    def after_move(
        self, from_square: int, to_square: int, captured_square: Optional[int] = None
    ) -> "Board":
        """Position after a move, as a new board (this board is left untouched)."""
        board = self.copy()
        board.move_piece(from_square, to_square)
        if captured_square is not None:
            board.remove_piece(captured_square)
        return board


def to_opponent_view(board: Board) -> Board:
    """Module level alias of Board.to_opponent_view()"""
    return board.to_opponent_view()
