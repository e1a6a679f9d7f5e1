"""A Round is one entry in the game history: the position after a move, from both perspectives, plus derived state."""

from dataclasses import dataclass
from typing import Self

from src.chess.board import Board
from src.chess.castling import MovedFlags
from src.chess.square import NO_SQUARE
from src.core.models import RoundModel
from src.core.shared_types import NO_WINNER, Color


@dataclass(frozen=True)
class RoundView:
    """A Round as one of the players gets to see it (their own board perspective)"""

    step: int
    board: list[str]
    prev_piece: int
    en_passant: int
    check: bool
    winner: str
    castle_left: bool
    castle_right: bool


@dataclass(frozen=True)
class Round:
    """
    * prev_piece_white / prev_piece_black: where the piece that just moved ended up, in either perspective.
    * en_passant: square (in the perspective of the player to move next) where they can capture en passant.
    * moved: has the player who made this round ever moved their king / rooks.
    * castle_left / castle_right: can the player to move next castle.
    """

    step: int
    board_white: Board
    board_black: Board
    prev_piece_white: int = NO_SQUARE
    prev_piece_black: int = NO_SQUARE
    en_passant: int = NO_SQUARE
    check: bool = False
    winner: str = NO_WINNER
    moved: MovedFlags = MovedFlags()
    castle_left: bool = False
    castle_right: bool = False

    @classmethod
    def initial(cls) -> Self:
        """Round 0: the starting position, White to move."""
        board_white = Board.starting_position()
        return cls(step=0, board_white=board_white, board_black=board_white.to_opponent_view())

    @classmethod
    def from_model(cls, model: RoundModel) -> Self:
        return cls(
            step=model.step,
            board_white=Board.from_codes(model.board_white),
            board_black=Board.from_codes(model.board_black),
            prev_piece_white=model.prev_piece_white,
            prev_piece_black=model.prev_piece_black,
            en_passant=model.en_passant,
            check=model.check,
            winner=model.winner,
            moved=MovedFlags(
                king=model.has_king_moved,
                left_rook=model.has_left_rook_moved,
                right_rook=model.has_right_rook_moved,
            ),
            castle_left=model.castle_left,
            castle_right=model.castle_right,
        )

    def to_model(self) -> RoundModel:
        return RoundModel(
            step=self.step,
            board_white=self.board_white.to_codes(),
            board_black=self.board_black.to_codes(),
            prev_piece_white=self.prev_piece_white,
            prev_piece_black=self.prev_piece_black,
            en_passant=self.en_passant,
            check=self.check,
            winner=self.winner,
            has_king_moved=self.moved.king,
            has_left_rook_moved=self.moved.left_rook,
            has_right_rook_moved=self.moved.right_rook,
            castle_left=self.castle_left,
            castle_right=self.castle_right,
        )

    def board(self, color: Color) -> Board:
        return self.board_white if color == Color.WHITE else self.board_black

    def prev_piece(self, color: Color) -> int:
        return self.prev_piece_white if color == Color.WHITE else self.prev_piece_black

    def view(self, color: Color) -> RoundView:
        return RoundView(
            step=self.step,
            board=self.board(color).to_codes(),
            prev_piece=self.prev_piece(color),
            en_passant=self.en_passant,
            check=self.check,
            winner=self.winner,
            castle_left=self.castle_left,
            castle_right=self.castle_right,
        )
