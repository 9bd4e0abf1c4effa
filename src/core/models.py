"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Any

# Type aliases to make GameModel easier to read. Each record is a JSON-safe dict.
PlayerRecord = dict[str, Any]
BoneRecord = dict[str, Any]
BowlRecord = dict[str, Any]
CardRecord = dict[str, Any]


@dataclass
class GameModel:
    """Transport-safe representation of a DIG game used between API, Service, DB, and Game layers."""

    player_count: int
    status: str
    current_turn: int
    actions_this_turn: int
    players: list[PlayerRecord] = field(default_factory=list)
    bones: list[BoneRecord] = field(default_factory=list)
    bowls: list[BowlRecord] = field(default_factory=list)
    yard_cards: list[CardRecord] = field(default_factory=list)
