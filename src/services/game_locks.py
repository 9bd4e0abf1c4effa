"""One lock per game, so that actions on the same game are applied one after the other."""

import threading
from contextlib import contextmanager
from typing import Iterator
from uuid import UUID


class GameLockRegistry:
    """
    Hands out a lock per game id.
    ----

    An action is a read-modify-write of the whole game record. Two requests for the same game must not interleave,
    or one of them overwrites the other. Different games never wait on each other.
    """

    def __init__(self) -> None:
        self._locks: dict[UUID, threading.Lock] = {}
        # Guards self._locks itself (creation/removal), never held during an action.
        self._registry_lock = threading.Lock()

    def lock_for(self, game_id: UUID) -> threading.Lock:
        with self._registry_lock:
            if game_id not in self._locks:
                self._locks[game_id] = threading.Lock()
            return self._locks[game_id]

    @contextmanager
    def hold(self, game_id: UUID) -> Iterator[None]:
        """Hold the game's lock for the duration of the with-block (released on every exit path)."""
        lock = self.lock_for(game_id)
        with lock:
            yield

    def forget(self, game_id: UUID) -> None:
        with self._registry_lock:
            self._locks.pop(game_id, None)

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._locks)
