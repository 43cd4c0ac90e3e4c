"""
Data models for the lift log.

- LogEntry: one recorded set, as stored
- ScoredSet: a primary-lift set with its strength index
- OtherSet: an assistance-exercise set (not scored)
- DayGroup: everything recorded on one calendar day
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Union


class Lift(str, Enum):
    """The three primary lifts. Values are the reserved exercise names."""
    BENCH = "bench"
    SQUAT = "squat"
    DEADLIFT = "deadlift"


class SelectionPolicy(str, Enum):
    """How many ranked sets per lift per day are kept"""
    TOP_N = "top_n"
    BEST_OF_DAY = "best_of_day"


@dataclass(frozen=True)
class LogEntry:
    """One recorded set."""
    id: int
    timestamp: datetime
    exercise_name: str
    weight: float
    reps: int


@dataclass
class ScoredSet:
    id: int
    weight: float
    reps: int
    strength_index: Union[int, float]


@dataclass
class OtherSet:
    id: int
    name: str
    weight: float
    reps: int


@dataclass
class DayGroup:
    """All sets recorded on one calendar day, keyed as YYYY/MM/DD."""
    date: str
    bench: List[ScoredSet] = field(default_factory=list)
    squat: List[ScoredSet] = field(default_factory=list)
    deadlift: List[ScoredSet] = field(default_factory=list)
    others: List[OtherSet] = field(default_factory=list)

    def sets_for(self, lift: Lift) -> List[ScoredSet]:
        return getattr(self, lift.value)
