"""
A game and its ledger of rounds.

Players take turns submitting the board after their move. Each submission is checked against the latest round,
the derived state (check, en passant, castling rights, winner) is computed, and the result is appended as a new Round.
Rounds are never changed once appended.
"""

import logging
from dataclasses import dataclass
from typing import Self

from src.chess.board import Board
from src.chess.castling import MovedFlags, castle_rights, update_moved_flags
from src.chess.check import gives_check
from src.chess.round import Round, RoundView
from src.chess.square import mirror
from src.chess.terminal import decide_winner, has_mobility
from src.chess.validator import validate_move
from src.core.exceptions import (
    GameStateError,
    NotYourTurnError,
    PlayerNotFoundError,
)
from src.core.models import GameModel
from src.core.shared_types import NO_WINNER, TIE, Color, Status

logger = logging.getLogger(__name__)


def turn_color(step: int) -> Color:
    """Color that plays the round with the given step number. White makes the odd rounds (1, 3, 5, ...)"""
    return Color.WHITE if step % 2 == 1 else Color.BLACK


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    room_name: str
    players: list[str]
    colors: dict[Color, str]
    step: int
    history: list[Round]
    status: Status

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if model.status not in {status.value for status in Status}:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(status.value for status in Status)}"
            )
        if model.history and len(model.history) != model.step + 1:
            raise GameStateError(
                f"History has {len(model.history)} rounds, expected {model.step + 1}."
            )

        return cls(
            room_name=model.room_name,
            players=list(model.players),
            colors={Color(color): player for color, player in model.registered_colors.items()},
            step=model.step,
            history=[Round.from_model(round_model) for round_model in model.history],
            status=Status(model.status),
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            room_name=self.room_name,
            players=list(self.players),
            registered_colors={color.value: player for color, player in self.colors.items()},
            step=self.step,
            status=self.status.value,
            history=[game_round.to_model() for game_round in self.history],
        )

    @classmethod
    def new_game(cls, room_name: str, players: list[str]) -> Self:
        """A room with its players. Colors get assigned later (not decided here)."""
        if len(players) != 2 or players[0] == players[1]:
            raise GameStateError(
                f"A game needs two different players, got {players}."
            )
        return cls(
            room_name=room_name,
            players=list(players),
            colors={},
            step=0,
            history=[],
            status=Status.AWAITING_COLORS,
        )

    @property
    def winner(self) -> str:
        """"", "tie", "White" or "Black"."""
        if not self.history:
            return NO_WINNER
        return self.history[-1].winner

    @property
    def latest_round(self) -> Round:
        return self.history[self.step]

    def assign_colors(self, white: str, black: str) -> None:
        """Start the game: seed the history with the starting position. White plays round 1."""
        if self.status != Status.AWAITING_COLORS:
            raise GameStateError(
                f"Cannot assign colors. Game is not waiting for colors. status: {self.status}"
            )
        for player in (white, black):
            if player not in self.players:
                raise PlayerNotFoundError(f"Player {player!r} is not in this game.")
        if white == black:
            raise GameStateError("A player cannot play both colors.")

        self.colors = {Color.WHITE: white, Color.BLACK: black}
        self.step = 0
        self.history = [Round.initial()]
        self._change_status(Status.IN_PROGRESS)
        logger.info("game %r started: white=%s black=%s", self.room_name, white, black)

    def color_of(self, player: str) -> Color:
        for color, name in self.colors.items():
            if name == player:
                return color
        raise PlayerNotFoundError(f"Player {player!r} does not play in this game.")

    def player_of(self, color: Color) -> str:
        return self.colors[color]

    def history_view(self, color: Color) -> list[RoundView]:
        """The whole history, as the player with the given color sees it"""
        return [game_round.view(color) for game_round in self.history]

    def submit_round(self, player: str, step: int, board: Board) -> Round:
        """
        A player submits the board after their move
        -----

        1. make sure the game is in progress and it is this player's turn
        2. classify + validate the move (incl. not moving into check)
        3. does it give check?
        4. castling rights of the opponent for their upcoming turn
        5. can the opponent still move? --> checkmate / stalemate
        6. append the new round to the history

        Nothing is changed before step 6, so a rejected round leaves the game as it was.
        """
        # make sure the game is (still) in progress
        self._assert_in_progress()

        # make sure it is your turn
        color = self.color_of(player)
        self._assert_your_turn(color, step)

        # validate the move in your own perspective
        previous = self.latest_round
        move = validate_move(previous.board(color), board, color, previous)

        # derived state
        check = gives_check(board)
        moved = update_moved_flags(self._own_moved_flags(), board, color)
        board = board.copy()
        opponent_board = board.to_opponent_view()
        castle_left, castle_right = castle_rights(
            opponent_board, color.opponent, previous.moved, check
        )
        mobility = has_mobility(opponent_board, move.en_passant, castle_left, castle_right)
        winner = decide_winner(check, mobility, color)

        new_round = Round(
            step=step,
            board_white=board if color == Color.WHITE else opponent_board,
            board_black=opponent_board if color == Color.WHITE else board,
            prev_piece_white=move.destination if color == Color.WHITE else mirror(move.destination),
            prev_piece_black=mirror(move.destination) if color == Color.WHITE else move.destination,
            en_passant=move.en_passant,
            check=check,
            winner=winner,
            moved=moved,
            castle_left=castle_left,
            castle_right=castle_right,
        )

        # commit
        self._append_round(new_round)
        return new_round

    # -- PRIVATE HELPERS ---
    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _assert_your_turn(self, color: Color, step: int) -> None:
        """Rounds come in strictly one after the other, and the colors alternate."""
        if step != self.step + 1:
            raise NotYourTurnError(
                f"Round number {step} not in line with the game (expected {self.step + 1})."
            )
        if turn_color(step) != color:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {self.player_of(color.opponent)} to make a move first."
            )

    def _own_moved_flags(self) -> MovedFlags:
        """The flags of the player about to move are stored in their own previous round, two rounds back."""
        if self.step == 0:
            return MovedFlags()
        return self.history[self.step - 1].moved

    def _append_round(self, new_round: Round) -> None:
        self.history.append(new_round)
        self.step = new_round.step
        if new_round.winner == TIE:
            self._change_status(Status.STALEMATE)
        elif new_round.winner != NO_WINNER:
            self._change_status(Status.CHECKMATE)
        logger.info(
            "game %r: round %d accepted (check=%s, winner=%r)",
            self.room_name,
            new_round.step,
            new_round.check,
            new_round.winner,
        )

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status
