"""
Database Configuration
Handles the connection to the workout store using SQLAlchemy
"""

from sqlalchemy import (
    Column, DateTime, Float, Integer, MetaData, String, Table, create_engine, func,
)
from sqlalchemy.orm import sessionmaker

from config import settings

metadata = MetaData()

# One row per recorded set
workouts = Table(
    "workouts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("exercise", String(100), nullable=False),
    Column("weight", Float, nullable=False),
    Column("reps", Integer, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
)


def make_engine(url: str):
    """
    Create a SQLAlchemy engine for the given URL.

    - pool_pre_ping: Tests connections before using them
    - pool_size: Number of connections to keep open (server databases only)
    """
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10
    )


# Create SQLAlchemy engine
engine = make_engine(settings.database_url)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    """Create the workouts table if it does not exist yet"""
    metadata.create_all(bind=bind or engine)


def get_db():
    """
    Dependency that provides a database session.
    Use with FastAPI's Depends() for automatic cleanup.

    Usage:
        @app.get("/items")
        def get_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
