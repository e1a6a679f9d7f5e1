"""Single-writer-per-game: round submissions for the same game are handled one at a time."""

import threading
from collections import defaultdict
from contextlib import contextmanager
from typing import Iterator
from uuid import UUID


class GameLocks:
    """One lock per game ID, created on first use."""

    def __init__(self) -> None:
        self._registry_lock = threading.Lock()
        self._locks: defaultdict[UUID, threading.Lock] = defaultdict(threading.Lock)

    @contextmanager
    def hold(self, game_id: UUID) -> Iterator[None]:
        with self._registry_lock:
            lock = self._locks[game_id]
        with lock:
            yield

    def discard(self, game_id: UUID) -> None:
        """Forget the lock of a deleted game."""
        with self._registry_lock:
            self._locks.pop(game_id, None)
