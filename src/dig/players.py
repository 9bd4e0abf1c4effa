"""A player on the track. The hand is not stored here: a bone knows who holds it."""

from dataclasses import dataclass
from typing import Any, Self


@dataclass
class Player:
    id: str
    name: str
    icon: str
    order: int
    yard_position: int

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Self:
        return cls(
            id=record["id"],
            name=record["name"],
            icon=record["icon"],
            order=int(record["order"]),
            yard_position=int(record["yard_position"]),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "order": self.order,
            "yard_position": self.yard_position,
        }
