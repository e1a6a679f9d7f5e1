"""
A square on the board is just its index 0-63

index = row * 8 + col, where row 0 is the far side of the board (seen from the player whose perspective the board is in)
(placed in its own module as multiple other modules need to import it)
"""

from typing import Optional

from src.core.shared_types import Color

# Chess board is always 8x8.
BOARD_DIMENSIONS = (8, 8)
NUM_SQUARES = BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1]
NO_SQUARE = -1

# Pawns start their march on this row (in their owner's perspective)
PAWN_HOME_ROW = 6


def row_of(index: int) -> int:
    return index // BOARD_DIMENSIONS[1]


def col_of(index: int) -> int:
    return index % BOARD_DIMENSIONS[1]


def is_within_bounds(row: int, col: int) -> bool:
    return (0 <= row < BOARD_DIMENSIONS[0]) and (0 <= col < BOARD_DIMENSIONS[1])


def shift(index: int, d_row: int, d_col: int) -> Optional[int]:
    """Square reached by moving d_row rows / d_col columns from index. None if that leaves the board."""
    row = row_of(index) + d_row
    col = col_of(index) + d_col
    if not is_within_bounds(row, col):
        return None
    return row * BOARD_DIMENSIONS[1] + col


def mirror(index: int) -> int:
    """The same square, seen from the opponent's side of the board."""
    return NUM_SQUARES - 1 - index


def from_algebraic(sq: str, perspective: Color = Color.WHITE) -> int:
    """
    Algebraic notation: 'a8' is index 0 and 'h1' index 63 in White's perspective.
    In Black's perspective the board is rotated, so 'h1' becomes index 0.
    """
    col = ord(sq[0]) - ord("a")
    row = BOARD_DIMENSIONS[0] - int(sq[1])
    index = row * BOARD_DIMENSIONS[1] + col
    return index if perspective == Color.WHITE else mirror(index)


def to_algebraic(index: int, perspective: Color = Color.WHITE) -> str:
    if perspective == Color.BLACK:
        index = mirror(index)
    return f"{chr(col_of(index) + ord('a'))}{BOARD_DIMENSIONS[0] - row_of(index)}"
