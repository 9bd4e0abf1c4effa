"""
What the service needs from a store of games.

Only whole games are read and written. The repository does no locking of its own: the service serializes
actions per game id before it reads, and writes back once the action has been applied.
"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    def get_game(self, game_id: UUID) -> GameModel | None:
        """The stored game, or None for an unknown id."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store a new game. The repository picks the id."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite the stored state. None if there was nothing to overwrite."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Drop the game and return what was stored (None if unknown)."""
        ...
