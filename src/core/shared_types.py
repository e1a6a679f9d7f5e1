"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    AWAITING_COLORS = "awaiting colors"
    IN_PROGRESS = "in progress"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


class Color(StrEnum):
    """Values double as the winner names written into a Round."""

    WHITE = "White"
    BLACK = "Black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


# Outcome strings stored in Round.winner
NO_WINNER = ""
TIE = "tie"
