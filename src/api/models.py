"""Requests and Response models"""

from typing import Optional, Self
from uuid import UUID

from pydantic import BaseModel, field_validator, model_validator

from src.core.exceptions import GameError, InvalidRequestError
from src.core.shared_types import BoneColor, CardType, Status

PlayerId = str
MIN_PLAYERS = 2
MAX_PLAYERS = 4


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_count: int
    player_names: list[str]
    player_icons: list[str]

    @field_validator("player_count")
    @classmethod
    def validate_player_count(cls, value: int) -> int:
        if not MIN_PLAYERS <= value <= MAX_PLAYERS:
            raise InvalidRequestError(
                f"Game requires {MIN_PLAYERS}-{MAX_PLAYERS} players, got {value}."
            )
        return value

    @model_validator(mode="after")
    def validate_one_name_and_icon_per_player(self) -> Self:
        if (
            len(self.player_names) != self.player_count
            or len(self.player_icons) != self.player_count
        ):
            raise InvalidRequestError(
                "Player names and icons count must match player count."
            )
        return self


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


class EndTurnRequest(BaseModel):
    game_id: UUID


class MoveRequest(BaseModel):
    game_id: UUID
    player_id: PlayerId
    spaces: int

    @field_validator("spaces")
    @classmethod
    def validate_spaces(cls, value: int) -> int:
        if value == 0:
            raise InvalidRequestError("Cannot move 0 spaces.")
        return value


class DigRequest(BaseModel):
    """`replacement_bone_id` is either a bone id from the hand, the string PUT_BACK, or left out."""

    game_id: UUID
    player_id: PlayerId
    replacement_bone_id: Optional[str] = None


class DropRequest(BaseModel):
    game_id: UUID
    player_id: PlayerId
    bone_id: str


class DropAllRequest(BaseModel):
    game_id: UUID
    player_id: PlayerId
    color: BoneColor


# --- RESPONSE MODELS ---
class BoneView(BaseModel):
    id: str
    color: BoneColor
    decoy_color: BoneColor
    revealed: bool
    position: Optional[int]
    holder_id: Optional[PlayerId]
    in_bowl: bool
    buried_by: Optional[PlayerId]


class BuriedBoneView(BaseModel):
    bone_id: str
    color: BoneColor
    current_value: int


class PlayerView(BaseModel):
    id: PlayerId
    name: str
    icon: str
    order: int
    yard_position: int
    hand: list[BoneView]
    score: int
    buried_bones: list[BuriedBoneView]


class BowlView(BaseModel):
    id: str
    color: BoneColor
    position: int
    value: int


class CardView(BaseModel):
    id: str
    type: CardType
    position: int
    visual_index: int
    color: Optional[BoneColor]
    bone_id: Optional[str]


class GameResponse(BaseModel):
    game_id: UUID
    status: Status
    player_count: int
    current_turn: int
    current_player_id: PlayerId
    actions_this_turn: int
    players: list[PlayerView]
    bones: list[BoneView]
    bowls: list[BowlView]
    track: list[CardView]
    bowl_values: dict[BoneColor, int]
    scores: dict[PlayerId, int]
    bones_remaining_in_yard: int
    winner_ids: list[PlayerId]
    poll_interval_seconds: float


class ActionResponse(BaseModel):
    """Uniform shape of a successful mutating call."""

    success: bool = True
    game: GameResponse


class ErrorResponse(BaseModel):
    """Uniform shape of a rejected call. `error` is the category (TurnError, BudgetError, ...)."""

    success: bool = False
    error: str
    message: str

    @classmethod
    def from_error(cls, error: GameError) -> Self:
        return cls(error=error.category, message=str(error))
