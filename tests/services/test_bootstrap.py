"""Unit tests for src/services/bootstrap.py and src/db/database.py"""

import threading
from uuid import uuid4

from src.api.models import AssignColorsRequest, CreateGameRequest, GetGameRequest
from src.core.shared_types import Status
from src.db.database import create_session_factory, get_db
from src.services.bootstrap import build_service
from src.services.locks import GameLocks


def test_service_on_sqlite() -> None:
    """The full stack against an in-memory database"""
    sessions = get_db(create_session_factory("sqlite:///:memory:", echo=False))
    db = next(sessions)
    try:
        service = build_service(db)
        created = service.create_new_game(
            CreateGameRequest(room_name="lobby", players=["alice", "bob"])
        )
        started = service.assign_colors(
            AssignColorsRequest(game_id=created.game_id, white="alice", black="bob")
        )
        assert started.status == Status.IN_PROGRESS.value

        view = service.get_game_view(GetGameRequest(game_id=created.game_id, player_id="bob"))
        assert view.step == 0
        assert len(view.history) == 1
    finally:
        sessions.close()


def test_locks_are_per_game() -> None:
    locks = GameLocks()
    game_id, other_id = uuid4(), uuid4()
    entered = threading.Event()

    def other_game() -> None:
        with locks.hold(other_id):
            entered.set()

    with locks.hold(game_id):
        worker = threading.Thread(target=other_game)
        worker.start()
        assert entered.wait(timeout=5)
        worker.join()

    locks.discard(game_id)
    with locks.hold(game_id):
        pass
