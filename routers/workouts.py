"""
Workouts Router
API endpoints for recording, correcting and deleting sets
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from database import get_db
from services import EntryNotFound, Lift, LogStoreError
from services.workout_log import WorkoutLogRepository

router = APIRouter(prefix="/workouts", tags=["Workouts"])

# Suggestions offered on the assistance recording screen
DEFAULT_ASSISTANCE_EXERCISES = [
    "Dumbbell Press",
    "Shoulder Press",
    "Chin-up",
    "Dip",
    "Lunge",
    "Rowing",
]

# Starting values and step for the primary-lift recording screens
LIFT_DEFAULTS = {"weight": 60, "reps": 10, "weight_step": 2.5}

# Starting values and step for the assistance recording screen
ASSISTANCE_DEFAULTS = {"weight": 20, "reps": 10, "weight_step": 1}


class SetIn(BaseModel):
    weight: float = Field(..., ge=0, description="Weight in kg")
    reps: int = Field(..., ge=0)


class EntryIn(SetIn):
    exercise: str = Field(..., max_length=100)

    @field_validator("exercise")
    @classmethod
    def exercise_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("exercise must not be blank")
        return value


def _entry_json(entry) -> dict:
    data = asdict(entry)
    data["timestamp"] = entry.timestamp.isoformat()
    return data


@router.get("")
async def list_entries(db: Session = Depends(get_db)):
    """All recorded sets, newest first"""
    try:
        entries = WorkoutLogRepository(db).fetch_all()
    except LogStoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return [_entry_json(e) for e in entries]


@router.get("/assistance-exercises")
async def get_recording_defaults():
    """Default assistance exercise list and starting values for each recording screen"""
    return {
        "assistance_exercises": DEFAULT_ASSISTANCE_EXERCISES,
        "lifts": [lift.value for lift in Lift],
        "lift_defaults": LIFT_DEFAULTS,
        "assistance_defaults": ASSISTANCE_DEFAULTS,
    }


@router.get("/{entry_id}")
async def get_entry(entry_id: int, db: Session = Depends(get_db)):
    try:
        entry = WorkoutLogRepository(db).get(entry_id)
    except EntryNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except LogStoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return _entry_json(entry)


@router.post("", status_code=201)
async def record_entry(body: EntryIn, db: Session = Depends(get_db)):
    """
    Record a set of any exercise.

    Names other than bench, squat and deadlift are treated as assistance work.
    """
    try:
        entry = WorkoutLogRepository(db).insert(body.exercise, body.weight, body.reps)
    except LogStoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return _entry_json(entry)


@router.post("/{lift}", status_code=201)
async def record_lift(lift: Lift, body: SetIn, db: Session = Depends(get_db)):
    """
    Record a set of one of the primary lifts.

    - **lift**: bench, squat or deadlift
    """
    try:
        entry = WorkoutLogRepository(db).insert(lift.value, body.weight, body.reps)
    except LogStoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return _entry_json(entry)


@router.patch("/{entry_id}")
async def update_entry(entry_id: int, body: SetIn, db: Session = Depends(get_db)):
    """Correct the weight and reps of a recorded set"""
    try:
        entry = WorkoutLogRepository(db).update(entry_id, body.weight, body.reps)
    except EntryNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except LogStoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return _entry_json(entry)


@router.delete("/{entry_id}", status_code=204)
async def delete_entry(entry_id: int, db: Session = Depends(get_db)):
    try:
        WorkoutLogRepository(db).delete(entry_id)
    except EntryNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except LogStoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return Response(status_code=204)
