"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    """
    One row per game. Players, bones, bowls and the track are stored as JSON lists:
    they are always read and written together with the game.
    """

    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    player_count: Mapped[int]
    status: Mapped[str]
    current_turn: Mapped[int] = mapped_column(default=0)
    actions_this_turn: Mapped[int] = mapped_column(default=0)
    players: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    bones: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    bowls: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    yard_cards: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
