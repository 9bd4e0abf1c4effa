"""Implementation of (Game)Repository using SQLAlchemy"""

from copy import deepcopy
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import GameModel
from src.db.schema import DBGame


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
            player_count=game.player_count,
            status=game.status,
            current_turn=game.current_turn,
            actions_this_turn=game.actions_this_turn,
            players=game.players,
            bones=game.bones,
            bowls=game.bowls,
            yard_cards=game.yard_cards,
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Replace the state of an existing record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_db.player_count = game.player_count
        game_db.status = game.status
        game_db.current_turn = game.current_turn
        game_db.actions_this_turn = game.actions_this_turn
        # JSON columns only register a change on re-assignment, so always hand over new lists
        game_db.players = deepcopy(game.players)
        game_db.bones = deepcopy(game.bones)
        game_db.bowls = deepcopy(game.bowls)
        game_db.yard_cards = deepcopy(game.yard_cards)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            player_count=game_db.player_count,
            status=game_db.status,
            current_turn=game_db.current_turn,
            actions_this_turn=game_db.actions_this_turn,
            players=deepcopy(game_db.players),
            bones=deepcopy(game_db.bones),
            bowls=deepcopy(game_db.bowls),
            yard_cards=deepcopy(game_db.yard_cards),
        )
