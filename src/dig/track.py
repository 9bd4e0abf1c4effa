"""
The yard: a row of cards (bone, bowl, doghouse) that the players walk along.

Positions are plain integers, but they are NOT dense. Digging removes a card entirely and leaves a gap, and the
leapfrog rule drops a card into a hole somewhere else. So distance on the track is never measured in raw position
units: the "visual index" (rank of a card when all cards are sorted by position) is the unit of movement.
"""

from dataclasses import dataclass
from typing import Any, Optional, Self

from src.core.exceptions import TrackError
from src.core.shared_types import BoneColor, CardType


@dataclass
class Card:
    id: str
    type: CardType
    position: int
    color: Optional[BoneColor] = None
    bone_id: Optional[str] = None
    bowl_id: Optional[str] = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Self:
        color = record.get("color")
        return cls(
            id=record["id"],
            type=CardType(record["type"]),
            position=int(record["position"]),
            color=BoneColor(color) if color else None,
            bone_id=record.get("bone_id"),
            bowl_id=record.get("bowl_id"),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": str(self.type),
            "position": self.position,
            "color": str(self.color) if self.color else None,
            "bone_id": self.bone_id,
            "bowl_id": self.bowl_id,
        }


def _sort_key(card: Card) -> tuple[int, str]:
    # Two cards never share a position after setup, the id only makes the order total.
    return (card.position, card.id)


@dataclass
class Track:
    cards: dict[str, Card]

    @classmethod
    def from_cards(cls, cards: list[Card]) -> Self:
        return cls({card.id: card for card in cards})

    def __len__(self) -> int:
        return len(self.cards)

    # --- LOOKUPS ---
    def sorted_cards(self) -> list[Card]:
        """All cards, ordered by position. The list index of a card is its visual index."""
        return sorted(self.cards.values(), key=_sort_key)

    def positions(self) -> list[int]:
        return [card.position for card in self.sorted_cards()]

    def card_at(self, position: int) -> Optional[Card]:
        return next(
            (card for card in self.sorted_cards() if card.position == position), None
        )

    def bone_card_at(self, position: int) -> Optional[Card]:
        return next(
            (
                card
                for card in self.sorted_cards()
                if card.position == position and card.type == CardType.BONE
            ),
            None,
        )

    def bowl_card_at(self, position: int, color: BoneColor) -> Optional[Card]:
        """Bowl of exactly this color at exactly this position (or None)."""
        return next(
            (
                card
                for card in self.sorted_cards()
                if card.position == position
                and card.type == CardType.BOWL
                and card.color == color
            ),
            None,
        )

    def cards_of_type(self, card_type: CardType) -> list[Card]:
        return [card for card in self.sorted_cards() if card.type == card_type]

    def bone_cards(self) -> list[Card]:
        return self.cards_of_type(CardType.BONE)

    def bowl_cards(self) -> list[Card]:
        return self.cards_of_type(CardType.BOWL)

    def doghouse(self) -> Card:
        doghouses = self.cards_of_type(CardType.DOGHOUSE)
        if not doghouses:
            raise TrackError("There is no doghouse on the track.")
        return doghouses[0]

    def visual_index(self, position: int) -> int:
        for index, card in enumerate(self.sorted_cards()):
            if card.position == position:
                return index
        raise TrackError(f"No card at position {position} on the track.")

    def card_at_visual_index(self, index: int) -> Card:
        ordered = self.sorted_cards()
        if not 0 <= index < len(ordered):
            raise TrackError(
                f"Visual index {index} outside of the track (0-{len(ordered) - 1})."
            )
        return ordered[index]

    def leftmost_before(
        self, position: int, exclude: Optional[Card] = None
    ) -> Optional[Card]:
        """The card with the smallest position strictly below `position`."""
        return next(
            (
                card
                for card in self.sorted_cards()
                if card.position < position and card is not exclude
            ),
            None,
        )

    def nearest(self, position: int) -> Optional[Card]:
        """
        Card closest to `position` by absolute distance.

        NOTE Ties go to the card found first when scanning in ascending order: the lower position, then the lower card id.
        """
        closest: Optional[Card] = None
        closest_distance = 0
        for card in self.sorted_cards():
            distance = abs(card.position - position)
            if closest is None or distance < closest_distance:
                closest = card
                closest_distance = distance
        return closest

    # --- MUTATIONS ---
    def remove(self, card: Card) -> None:
        if card.id not in self.cards:
            raise TrackError(f"Card {card.id} is not on the track.")
        del self.cards[card.id]

    def insert(self, card: Card) -> None:
        if card.id in self.cards:
            raise TrackError(f"Card {card.id} is already on the track.")
        self.cards[card.id] = card

    def relocate(self, card: Card, position: int) -> None:
        """Pick up the card and put it down at another position (the card keeps its id)."""
        if card.id not in self.cards:
            raise TrackError(f"Card {card.id} is not on the track.")
        card.position = position
