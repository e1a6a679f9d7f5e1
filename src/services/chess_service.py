"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from typing import Optional
from uuid import UUID

from src.api.models import (
    AssignColorsRequest,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GameViewResponse,
    GetGameRequest,
    RoundResponse,
    SubmitRoundRequest,
)
from src.chess.board import Board
from src.chess.game import Game
from src.core.exceptions import GameError, GameNotFoundError
from src.core.models import GameModel
from src.core.shared_types import Color
from src.db.repository import GameRepository
from src.services.locks import GameLocks
from src.services.notifier import NullNotifier, SessionNotifier

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(
        self,
        repository: GameRepository,
        notifier: Optional[SessionNotifier] = None,
        locks: Optional[GameLocks] = None,
    ) -> None:
        self.repo = repository
        self.notifier = notifier or NullNotifier()
        self.locks = locks or GameLocks()

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Open a game for the two players of a room."""

        # Use info in CreateGameRequest to create a new Game, and convert into GameModel
        new_game = Game.new_game(room_name=request.room_name, players=request.players)

        # Store the GameModel in the repository
        stored_game, game_id = self.repo.create_game(new_game.to_model())
        logger.info("created game %s for room %r", game_id, request.room_name)

        # Return a GameResponse
        return self._create_game_response(game_id, stored_game)

    def assign_colors(self, request: AssignColorsRequest) -> GameResponse:
        """Colors are chosen by the caller. Starts the game."""
        with self.locks.hold(request.game_id):
            # Retrieve persisted GameModel from repository
            game = Game.from_model(self._fetch_game(request.game_id))

            game.assign_colors(white=request.white, black=request.black)

            # Capture updated state in GameModel and store in repository
            started = game.to_model()
            self.repo.update_game(request.game_id, started)

        return self._create_game_response(request.game_id, started)

    def get_game_view(self, request: GetGameRequest) -> GameViewResponse:
        """
        Retrieve current game state, in the requesting player's perspective.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game = Game.from_model(self._fetch_game(request.game_id))
        color = game.color_of(request.player_id)
        return self._create_view_response(request.game_id, game, color)

    def submit_round(self, request: SubmitRoundRequest) -> GameViewResponse:
        """
        A player submits the board after their move.
        ----

        1. validate the round in the domain layer (raises on anything illegal, nothing stored then)
        2. compare-and-append the new round in the repository
        3. return the mover's view, push the opponent's view to the opponent
        """
        with self.locks.hold(request.game_id):
            # Retrieve persisted GameModel from repository
            game = Game.from_model(self._fetch_game(request.game_id))

            # Attempt the round
            try:
                board = Board.from_codes(request.round.board)
                new_round = game.submit_round(
                    request.player_id, request.round.step, board
                )
            except GameError as exc:
                logger.warning(
                    "round %d of game %s by %s rejected: %s",
                    request.round.step,
                    request.game_id,
                    request.player_id,
                    exc,
                )
                raise

            # store in repository
            self.repo.append_round(
                request.game_id,
                expected_step=new_round.step - 1,
                new_round=new_round.to_model(),
                status=game.status.value,
            )

        mover = game.color_of(request.player_id)
        mover_view = self._create_view_response(request.game_id, game, mover)
        opponent_view = self._create_view_response(request.game_id, game, mover.opponent)
        self.notifier.push(
            game.player_of(mover.opponent),
            {"action": "round", "game": opponent_view.model_dump(mode="json", by_alias=True)},
        )
        return mover_view

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        with self.locks.hold(request.game_id):
            self.repo.delete_game(request.game_id)
        self.locks.discard(request.game_id)

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        return GameResponse(
            game_id=game_id,
            room_name=model.room_name,
            players=model.players,
            colors={Color(color): player for color, player in model.registered_colors.items()},
            status=model.status,
        )

    def _create_view_response(
        self, game_id: UUID, game: Game, color: Color
    ) -> GameViewResponse:
        return GameViewResponse(
            game_id=game_id,
            color=color,
            step=game.step,
            history=[RoundResponse.from_view(view) for view in game.history_view(color)],
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game_model
