"""
Fixtures shared by the test packages.

* an in-memory SQLite database (one engine, sessions handed out per test)
* a seeded random generator, so that dealt yards are the same on every run
"""

from random import Random
from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.models import GameModel
from src.db.schema import Base
from src.dig.game import Game

# StaticPool: every session talks to the same in-memory database
engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def rng() -> Random:
    return Random(20)


@pytest.fixture
def dealt_model(rng: Random) -> GameModel:
    """A freshly dealt two player game, as the service hands it to the repository."""
    return Game.new_game(2, ["A", "B"], ["🐕", "🐶"], rng=rng).to_model()


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Session on a clean database. Tables are dropped at teardown so repository tests stay independent."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session_shared() -> Generator[Session, None, None]:
    """Second session on the same database, like two requests served side by side."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
