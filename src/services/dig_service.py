"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from random import Random
from typing import Callable, Optional
from uuid import UUID

from src.api.models import (
    BoneView,
    BowlView,
    BuriedBoneView,
    CardView,
    CreateGameRequest,
    DeleteGameRequest,
    DigRequest,
    DropAllRequest,
    DropRequest,
    EndTurnRequest,
    GameResponse,
    GetGameRequest,
    MoveRequest,
    PlayerView,
)
from src.core.config import settings
from src.core.exceptions import GameError, GameNotFoundError
from src.core.models import GameModel
from src.db.repository import GameRepository
from src.dig.bones import Bone
from src.dig.game import Game
from src.dig.scoring import buried_bones
from src.services.game_locks import GameLockRegistry

logger = logging.getLogger(__name__)

GameAction = Callable[[Game], None]


class DigService:
    """Orchestration of layers for a game of DIG."""

    def __init__(
        self,
        repository: GameRepository,
        locks: Optional[GameLockRegistry] = None,
        rng: Optional[Random] = None,
        poll_interval_seconds: float = settings.poll_interval_seconds,
    ) -> None:
        self.repo = repository
        self.locks = locks or GameLockRegistry()
        self.rng = rng
        self.poll_interval_seconds = poll_interval_seconds

    # -- API routes logic ---
    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Set up a new game and store it."""

        new_game = Game.new_game(
            player_count=request.player_count,
            player_names=request.player_names,
            player_icons=request.player_icons,
            rng=self.rng,
        )
        stored_game, game_id = self.repo.create_game(new_game.to_model())
        logger.info("Created game %s", game_id)
        return self._create_game_response(game_id, Game.from_model(stored_game))

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game = Game.from_model(self._fetch_game(request.game_id))
        return self._create_game_response(request.game_id, game)

    def move(self, request: MoveRequest) -> GameResponse:
        return self._apply(
            request.game_id,
            lambda game: game.move(request.player_id, request.spaces),
        )

    def dig(self, request: DigRequest) -> GameResponse:
        return self._apply(
            request.game_id,
            lambda game: game.dig(request.player_id, request.replacement_bone_id),
        )

    def drop(self, request: DropRequest) -> GameResponse:
        return self._apply(
            request.game_id,
            lambda game: game.drop(request.player_id, request.bone_id),
        )

    def drop_all(self, request: DropAllRequest) -> GameResponse:
        return self._apply(
            request.game_id,
            lambda game: game.drop_all(request.player_id, request.color),
        )

    def end_turn(self, request: EndTurnRequest) -> GameResponse:
        return self._apply(request.game_id, lambda game: game.end_turn())

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        with self.locks.hold(request.game_id):
            self.repo.delete_game(request.game_id)
        self.locks.forget(request.game_id)

    # -- Internal helpers --
    def _apply(self, game_id: UUID, action: GameAction) -> GameResponse:
        """
        Run one action as a single unit.
        ----

        1. take the game's lock
        2. load the game, apply the action (which validates everything before changing anything)
        3. only if that succeeded: store the new state
        A rejected action leaves the stored game exactly as it was.
        """
        with self.locks.hold(game_id):
            game = Game.from_model(self._fetch_game(game_id))
            try:
                action(game)
            except GameError as error:
                logger.warning("Rejected action on game %s: %s", game_id, error)
                raise
            updated = game.to_model()
            self.repo.update_game(game_id, updated)
        return self._create_game_response(game_id, game)

    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert a Game into a GameResponse, including the values derived from the current layout."""
        values = game.bowl_values()
        scores = game.scores()
        all_bones = list(game.bones.values())
        positions = game.track.sorted_cards()

        return GameResponse(
            game_id=game_id,
            status=game.status,
            player_count=game.player_count,
            current_turn=game.current_turn,
            current_player_id=game.current_player.id,
            actions_this_turn=game.actions_this_turn,
            players=[
                PlayerView(
                    id=player.id,
                    name=player.name,
                    icon=player.icon,
                    order=player.order,
                    yard_position=player.yard_position,
                    hand=[_bone_view(bone) for bone in game.hand(player.id)],
                    score=scores[player.id],
                    buried_bones=[
                        BuriedBoneView(
                            bone_id=buried.bone_id,
                            color=buried.color,
                            current_value=buried.current_value,
                        )
                        for buried in buried_bones(player.id, all_bones, values)
                    ],
                )
                for player in game.players
            ],
            bones=[_bone_view(bone) for bone in all_bones],
            bowls=[
                BowlView(
                    id=bowl.id,
                    color=bowl.color,
                    position=bowl.position,
                    value=values.get(bowl.color, 0),
                )
                for bowl in sorted(game.bowls.values(), key=lambda b: b.position)
            ],
            track=[
                CardView(
                    id=card.id,
                    type=card.type,
                    position=card.position,
                    visual_index=index,
                    color=card.color,
                    bone_id=card.bone_id,
                )
                for index, card in enumerate(positions)
            ],
            bowl_values=values,
            scores=scores,
            bones_remaining_in_yard=game.bones_in_yard,
            winner_ids=game.winner_ids(),
            poll_interval_seconds=self.poll_interval_seconds,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game_model


def _bone_view(bone: Bone) -> BoneView:
    return BoneView(
        id=bone.id,
        color=bone.color,
        decoy_color=bone.decoy_color,
        revealed=bone.revealed,
        position=bone.position,
        holder_id=bone.holder_id,
        in_bowl=bone.in_bowl,
        buried_by=bone.buried_by,
    )
