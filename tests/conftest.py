import os

# Configure the service for an in-memory store before anything imports config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["HISTORY_TOP_N"] = "3"
os.environ["HISTORY_POLICY"] = "top_n"
os.environ["HISTORY_NORMALIZE_NAMES"] = "false"
os.environ["HISTORY_TIMEZONE"] = "UTC"

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import get_db, init_db
from main import app
from services import LogEntry


def make_entry(entry_id, exercise, weight, reps, when="2024-01-15 10:00"):
    """Build a LogEntry with a UTC timestamp given as 'YYYY-MM-DD HH:MM'"""
    timestamp = datetime.strptime(when, "%Y-%m-%d %H:%M").replace(tzinfo=timezone.utc)
    return LogEntry(id=entry_id, timestamp=timestamp, exercise_name=exercise,
                    weight=weight, reps=reps)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
