"""Bones and bowls, and how they are dealt onto the track at the start of a game."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Any, Optional, Self
from uuid import uuid4

from src.core.shared_types import BoneColor, CardType
from src.dig.track import Card, Track

BONES_PER_COLOR = 4
PALETTE: tuple[BoneColor, ...] = tuple(BoneColor)


class BoneLocation(Enum):
    YARD = auto()
    HAND = auto()
    BOWL = auto()
    # Held when the game ended. Never buried, so it does not score.
    RELEASED = auto()


@dataclass
class Bone:
    """
    A bone has a true color and a decoy color.
    ----

    Until it gets dug up, players only see the decoy (which is always a different color).
    Once dug, it stays revealed for the rest of the game, even if it goes back into the yard.
    """

    id: str
    color: BoneColor
    decoy_color: BoneColor
    revealed: bool = False
    position: Optional[int] = None
    holder_id: Optional[str] = None
    in_bowl: bool = False
    buried_by: Optional[str] = None

    @property
    def location(self) -> BoneLocation:
        if self.in_bowl:
            return BoneLocation.BOWL
        if self.holder_id is not None:
            return BoneLocation.HAND
        if self.position is not None:
            return BoneLocation.YARD
        return BoneLocation.RELEASED

    @property
    def visible_color(self) -> BoneColor:
        return self.color if self.revealed else self.decoy_color

    def reveal(self) -> None:
        self.revealed = True

    def place(self, position: int) -> None:
        self.position = position
        self.holder_id = None

    def pick_up(self, player_id: str) -> None:
        self.position = None
        self.holder_id = player_id

    def bury(self, player_id: str) -> None:
        self.in_bowl = True
        self.holder_id = None
        self.position = None
        self.buried_by = player_id

    def release(self) -> None:
        self.holder_id = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Self:
        position = record.get("position")
        return cls(
            id=record["id"],
            color=BoneColor(record["color"]),
            decoy_color=BoneColor(record["decoy_color"]),
            revealed=bool(record.get("revealed", False)),
            position=int(position) if position is not None else None,
            holder_id=record.get("holder_id"),
            in_bowl=bool(record.get("in_bowl", False)),
            buried_by=record.get("buried_by"),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "color": str(self.color),
            "decoy_color": str(self.decoy_color),
            "revealed": self.revealed,
            "position": self.position,
            "holder_id": self.holder_id,
            "in_bowl": self.in_bowl,
            "buried_by": self.buried_by,
        }


@dataclass
class Bowl:
    """One bowl per color. Its point value is not stored: see src/dig/scoring.py"""

    id: str
    color: BoneColor
    position: int

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Self:
        return cls(
            id=record["id"],
            color=BoneColor(record["color"]),
            position=int(record["position"]),
        )

    def to_record(self) -> dict[str, Any]:
        return {"id": self.id, "color": str(self.color), "position": self.position}


# --- SETUP ---
def new_id() -> str:
    return str(uuid4())


def assign_decoy_colors(
    rng: Random,
    palette: tuple[BoneColor, ...] = PALETTE,
    bones_per_color: int = BONES_PER_COLOR,
) -> list[tuple[BoneColor, BoneColor]]:
    """
    Pair every bone (true color) with a decoy color.
    ----

    1. Build a pool with every color repeated once per bone-per-color, so each color shows up as a decoy equally often.
    2. Shuffle the pool and hand it out round robin (color-major: all red bones first, then blue, ...).
    3. If a bone drew its own color, swap in the first other color of the palette instead.
    """
    pool = [color for _ in range(bones_per_color) for color in palette]
    rng.shuffle(pool)

    pairs: list[tuple[BoneColor, BoneColor]] = []
    draw = iter(pool)
    for color in palette:
        for _ in range(bones_per_color):
            decoy = next(draw)
            if decoy == color:
                decoy = next(c for c in palette if c != color)
            pairs.append((color, decoy))
    return pairs


def create_bones(rng: Random) -> list[Bone]:
    return [
        Bone(id=new_id(), color=color, decoy_color=decoy)
        for color, decoy in assign_decoy_colors(rng)
    ]


def create_bowls() -> list[Bowl]:
    """Positions get assigned once the bowls are shuffled into the track."""
    return [Bowl(id=new_id(), color=color, position=-1) for color in PALETTE]


def shuffle_track(bones: list[Bone], bowls: list[Bowl], rng: Random) -> Track:
    """
    Lay out the yard.
    ----

    All bone and bowl cards get shuffled and placed at positions 0..n-1. The doghouse goes at the far end (position n).
    Bones and bowls are told where they ended up.
    """
    cards = [
        Card(
            id=new_id(),
            type=CardType.BONE,
            position=-1,
            color=bone.color,
            bone_id=bone.id,
        )
        for bone in bones
    ]
    cards.extend(
        Card(
            id=new_id(),
            type=CardType.BOWL,
            position=-1,
            color=bowl.color,
            bowl_id=bowl.id,
        )
        for bowl in bowls
    )
    rng.shuffle(cards)

    bones_by_id = {bone.id: bone for bone in bones}
    bowls_by_id = {bowl.id: bowl for bowl in bowls}
    for position, card in enumerate(cards):
        card.position = position
        if card.bone_id is not None:
            bones_by_id[card.bone_id].place(position)
        if card.bowl_id is not None:
            bowls_by_id[card.bowl_id].position = position

    cards.append(Card(id=new_id(), type=CardType.DOGHOUSE, position=len(cards)))
    return Track.from_cards(cards)
