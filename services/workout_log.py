"""
Workout Log Repository
Reads and writes recorded sets in the workouts table

These are the boundary operations around the history view: fetch
everything, record a set, correct a set, delete a set. Store failures are
raised as LogStoreError so callers never aggregate partial data.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import DateTime, Float, Integer, String, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import workouts
from .errors import EntryNotFound, LogStoreError
from .models import LogEntry

logger = logging.getLogger(__name__)

ENTRY_COLUMNS = dict(
    id=Integer,
    exercise=String,
    weight=Float,
    reps=Integer,
    created_at=DateTime(timezone=True),
)

SELECT_ALL = text("""
    SELECT id, exercise, weight, reps, created_at
    FROM workouts
    ORDER BY created_at DESC, id DESC
""").columns(**ENTRY_COLUMNS)

SELECT_ONE = text("""
    SELECT id, exercise, weight, reps, created_at
    FROM workouts
    WHERE id = :id
""").columns(**ENTRY_COLUMNS)

UPDATE_ONE = text("""
    UPDATE workouts
    SET weight = :weight, reps = :reps
    WHERE id = :id
""")

DELETE_ONE = text("DELETE FROM workouts WHERE id = :id")


def _to_entry(row) -> LogEntry:
    return LogEntry(
        id=row.id,
        timestamp=row.created_at,
        exercise_name=row.exercise,
        weight=float(row.weight),
        reps=int(row.reps),
    )


class WorkoutLogRepository:
    """CRUD access to recorded sets for one database session"""

    def __init__(self, db: Session):
        self.db = db

    def _fail(self, action: str, error: SQLAlchemyError):
        self.db.rollback()
        logger.error("Failed to %s: %s", action, error)
        raise LogStoreError(f"Could not {action}") from error

    def fetch_all(self) -> List[LogEntry]:
        """Every recorded set, newest first"""
        try:
            rows = self.db.execute(SELECT_ALL).fetchall()
        except SQLAlchemyError as e:
            self._fail("fetch workout entries", e)
        return [_to_entry(row) for row in rows]

    def get(self, entry_id: int) -> LogEntry:
        try:
            row = self.db.execute(SELECT_ONE, {"id": entry_id}).fetchone()
        except SQLAlchemyError as e:
            self._fail(f"fetch workout entry {entry_id}", e)
        if row is None:
            raise EntryNotFound(entry_id)
        return _to_entry(row)

    def insert(
        self,
        exercise: str,
        weight: float,
        reps: int,
        created_at: Optional[datetime] = None,
    ) -> LogEntry:
        """
        Record a set. created_at defaults to now.

        Timestamps are stored as UTC; naive values are taken to be UTC already.
        """
        created_at = created_at or datetime.now(timezone.utc)
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        created_at = created_at.astimezone(timezone.utc)
        try:
            result = self.db.execute(
                workouts.insert().values(
                    exercise=exercise,
                    weight=weight,
                    reps=reps,
                    created_at=created_at,
                )
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("record workout entry", e)

        entry_id = result.inserted_primary_key[0]
        logger.info("Recorded %s %skg x %s (id=%s)", exercise, weight, reps, entry_id)
        return self.get(entry_id)

    def update(self, entry_id: int, weight: float, reps: int) -> LogEntry:
        """Correct the weight and reps of a recorded set"""
        try:
            result = self.db.execute(
                UPDATE_ONE, {"id": entry_id, "weight": weight, "reps": reps}
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail(f"update workout entry {entry_id}", e)

        if result.rowcount == 0:
            raise EntryNotFound(entry_id)
        logger.info("Updated entry %s to %skg x %s", entry_id, weight, reps)
        return self.get(entry_id)

    def delete(self, entry_id: int) -> None:
        try:
            result = self.db.execute(DELETE_ONE, {"id": entry_id})
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail(f"delete workout entry {entry_id}", e)

        if result.rowcount == 0:
            raise EntryNotFound(entry_id)
        logger.info("Deleted entry %s", entry_id)
