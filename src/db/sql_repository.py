"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from uuid import UUID, uuid4

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import GameNotFoundError, NotYourTurnError, PersistenceError
from src.core.models import GameModel, RoundModel
from src.db.schema import DBGame, DBRound, utc_now

logger = logging.getLogger(__name__)

ROUND_FIELDS: tuple[str, ...] = (
    "step",
    "board_white",
    "board_black",
    "prev_piece_white",
    "prev_piece_black",
    "en_passant",
    "check",
    "winner",
    "has_king_moved",
    "has_left_rook_moved",
    "has_right_rook_moved",
    "castle_left",
    "castle_right",
)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(
            id=new_id,
            room_name=game.room_name,
            players=game.players,
            registered_colors=game.registered_colors,
            step=game.step,
            status=game.status,
            rounds=[self._round_to_db(new_id, round_model) for round_model in game.history],
        )
        self.db.add(game_db)
        self._commit()
        self.db.refresh(game_db)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_db.room_name = game.room_name
        game_db.players = game.players
        game_db.registered_colors = game.registered_colors
        game_db.step = game.step
        game_db.status = game.status
        self._sync_rounds(game_db, game.history)
        self._commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def append_round(
        self, game_id: UUID, expected_step: int, new_round: RoundModel, status: str
    ) -> GameModel:
        """
        Compare-and-append
        ----

        The step only advances if it still equals expected_step, in the same transaction that inserts the round.
        Two concurrent writers can therefore never both append a round for the same step.
        """
        try:
            result = self.db.execute(
                update(DBGame)
                .where(DBGame.id == game_id, DBGame.step == expected_step)
                .values(step=new_round.step, status=status, updated_at=utc_now())
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                self.db.rollback()
                if self._fetch_game(game_id) is None:
                    raise GameNotFoundError(f"Game with {game_id=} not found.")
                raise NotYourTurnError(
                    f"Round {new_round.step} was not appended: game is no longer at step {expected_step}."
                )
            self.db.add(self._round_to_db(game_id, new_round))
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("appending round %d to game %s failed: %s", new_round.step, game_id, exc)
            raise PersistenceError(f"Could not store round {new_round.step}.") from exc

        # the bulk UPDATE bypassed the session, so reload from the database
        self.db.expire_all()
        game_db = self._fetch_game(game_id)
        assert game_db is not None
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self._commit()
        return game_model

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        try:
            return self.db.scalar(query)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not load game {game_id}.") from exc

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PersistenceError("Could not store game.") from exc

    def _sync_rounds(self, game_db: DBGame, history: list[RoundModel]) -> None:
        """History is append-only: add the new rounds, drop rounds that no longer exist (game restarted)."""
        wanted_steps = {round_model.step for round_model in history}
        stored_steps = {round_db.step for round_db in game_db.rounds}
        game_db.rounds = [
            round_db for round_db in game_db.rounds if round_db.step in wanted_steps
        ]
        for round_model in history:
            if round_model.step not in stored_steps:
                game_db.rounds.append(self._round_to_db(game_db.id, round_model))

    @staticmethod
    def _round_to_db(game_id: UUID, round_model: RoundModel) -> DBRound:
        return DBRound(
            game_id=game_id,
            **{name: getattr(round_model, name) for name in ROUND_FIELDS},
        )

    @staticmethod
    def _round_to_model(round_db: DBRound) -> RoundModel:
        return RoundModel(**{name: getattr(round_db, name) for name in ROUND_FIELDS})

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            room_name=game_db.room_name,
            players=list(game_db.players),
            registered_colors=dict(game_db.registered_colors),
            step=game_db.step,
            status=game_db.status,
            history=[
                self._round_to_model(round_db)
                for round_db in sorted(game_db.rounds, key=lambda r: r.step)
            ],
        )
