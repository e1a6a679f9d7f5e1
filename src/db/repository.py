"""Protocol repository (can implement later for SQL Alchemy / simple Excel table etc.)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel, RoundModel


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID (incl. its full history), if record exists."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite an existing record (players, colors, status, step and the full history)."""
        ...

    def append_round(
        self, game_id: UUID, expected_step: int, new_round: RoundModel, status: str
    ) -> GameModel:
        """
        Atomically add a round to the history and advance the step.

        Must fail (NotYourTurnError) if the stored step is no longer expected_step: someone else committed first.
        """
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        ...
