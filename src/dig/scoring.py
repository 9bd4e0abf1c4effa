"""
Scores are never stored. They are recomputed from the current layout of the track every time somebody asks.

Bowls can be moved by the leapfrog rule, so the value of a bowl (and with it the score of everyone who already
buried bones in it) can change after the fact.
"""

from dataclasses import dataclass
from typing import Iterable

from src.core.shared_types import BoneColor
from src.dig.bones import Bone
from src.dig.track import Track

BowlValues = dict[BoneColor, int]


@dataclass(frozen=True)
class BuriedBone:
    bone_id: str
    color: BoneColor
    current_value: int


def bowl_values(track: Track) -> BowlValues:
    """
    Rank the bowls by distance to the doghouse: the closest one is worth the most.
    ----

    With 5 bowls the values are 5, 4, 3, 2, 1. Distance is measured in position units (not visual index).
    NOTE sorting is stable, so bowls at equal distance keep their track order (lower position first).
    """
    doghouse = track.doghouse()
    bowls = track.bowl_cards()
    by_distance = sorted(bowls, key=lambda card: abs(card.position - doghouse.position))
    values: BowlValues = {}
    for rank, card in enumerate(by_distance):
        assert card.color is not None
        values[card.color] = len(bowls) - rank
    return values


def buried_bones(
    player_id: str, bones: Iterable[Bone], values: BowlValues
) -> list[BuriedBone]:
    return [
        BuriedBone(bone.id, bone.color, values.get(bone.color, 0))
        for bone in bones
        if bone.in_bowl and bone.buried_by == player_id
    ]


def player_score(player_id: str, bones: Iterable[Bone], values: BowlValues) -> int:
    return sum(buried.current_value for buried in buried_bones(player_id, bones, values))


def player_scores(
    player_ids: Iterable[str], bones: Iterable[Bone], values: BowlValues
) -> dict[str, int]:
    all_bones = list(bones)
    return {
        player_id: player_score(player_id, all_bones, values)
        for player_id in player_ids
    }
