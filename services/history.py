"""
History Aggregation Service
Turns a flat list of logged sets into per-day, per-lift ranked summaries

CONCEPTS:
1. Day grouping - every entry lands in exactly one calendar-day group
2. Classification - reserved lift names are scored, everything else is
   kept as assistance work
3. Selection - each lift keeps its best N sets (or the single best set)
"""

import logging
from datetime import date, datetime, timezone as dt_timezone
from typing import Dict, Iterable, List, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .models import DayGroup, Lift, LogEntry, OtherSet, ScoredSet, SelectionPolicy
from .strength import strength_index

logger = logging.getLogger(__name__)

DAY_KEY_FORMAT = "%Y/%m/%d"
DEFAULT_TOP_N = 3

LIFT_NAMES = {lift.value: lift for lift in Lift}

DateBound = Optional[Union[str, date]]


def day_key(timestamp: datetime, tz: ZoneInfo) -> str:
    """
    Calendar-day key for a timestamp in the given zone.

    Naive timestamps are taken to be UTC, which is how the store hands
    them back from SQLite.
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=dt_timezone.utc)
    return timestamp.astimezone(tz).strftime(DAY_KEY_FORMAT)


class HistoryAggregator:
    """
    Groups log entries by day and ranks primary-lift sets by strength index.

    Holds configuration only; every call to aggregate() builds and returns
    fresh DayGroup objects.
    """

    def __init__(
        self,
        top_n: int = DEFAULT_TOP_N,
        policy: Union[SelectionPolicy, str] = SelectionPolicy.TOP_N,
        normalize_names: bool = False,
        timezone: str = "UTC",
    ):
        """
        Args:
            top_n: Sets kept per lift per day under the top_n policy
            policy: SelectionPolicy.TOP_N or SelectionPolicy.BEST_OF_DAY
            normalize_names: Trim and lower-case names before matching lifts
            timezone: IANA zone that defines calendar days
        """
        if top_n < 1:
            raise ValueError(f"top_n must be at least 1, got {top_n}")
        self.policy = SelectionPolicy(policy)
        self.top_n = top_n
        self.normalize_names = normalize_names
        try:
            self.tz = ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Invalid timezone '{timezone}'. Use IANA timezone identifiers.")

    @classmethod
    def from_settings(cls, settings) -> "HistoryAggregator":
        """Build an aggregator from the service Settings"""
        return cls(
            top_n=settings.top_n,
            policy=settings.policy,
            normalize_names=settings.normalize_names,
            timezone=settings.timezone,
        )

    @property
    def slots(self) -> int:
        """How many sets per lift can survive selection"""
        return 1 if self.policy == SelectionPolicy.BEST_OF_DAY else self.top_n

    def classify(self, exercise_name: str) -> Optional[Lift]:
        """Return the primary lift an exercise name denotes, or None for assistance work"""
        name = exercise_name or ""
        if self.normalize_names:
            name = name.strip().lower()
        return LIFT_NAMES.get(name)

    def aggregate(self, entries: Iterable[LogEntry]) -> List[DayGroup]:
        """
        Build day groups from a collection of entries.

        Args:
            entries: Log entries in any order

        Returns:
            DayGroups, most recent day first. Within a group each lift's sets
            are sorted by strength index (descending) and bounded by the
            selection policy; assistance sets keep their input order.
        """
        groups: Dict[str, DayGroup] = {}
        count = 0

        for entry in entries:
            count += 1
            key = day_key(entry.timestamp, self.tz)
            group = groups.get(key)
            if group is None:
                group = groups[key] = DayGroup(date=key)

            lift = self.classify(entry.exercise_name)
            if lift is None:
                group.others.append(OtherSet(
                    id=entry.id,
                    name=entry.exercise_name or "",
                    weight=entry.weight,
                    reps=entry.reps,
                ))
            else:
                group.sets_for(lift).append(ScoredSet(
                    id=entry.id,
                    weight=entry.weight,
                    reps=entry.reps,
                    strength_index=strength_index(entry.weight, entry.reps),
                ))

        for group in groups.values():
            for lift in Lift:
                ranked = sorted(
                    group.sets_for(lift),
                    key=lambda s: s.strength_index,
                    reverse=True,
                )
                setattr(group, lift.value, ranked[:self.slots])

        logger.debug("Aggregated %d entries into %d day groups", count, len(groups))

        return [groups[key] for key in sorted(groups, reverse=True)]


def normalize_bound(bound: DateBound) -> Optional[str]:
    """Convert a date or YYYY-MM-DD / YYYY/MM/DD string into a day key"""
    if bound is None or bound == "":
        return None
    if isinstance(bound, (date, datetime)):
        return bound.strftime(DAY_KEY_FORMAT)

    text = str(bound).strip().replace("-", "/")
    try:
        return datetime.strptime(text, DAY_KEY_FORMAT).strftime(DAY_KEY_FORMAT)
    except ValueError:
        raise ValueError(f"Invalid date '{bound}'. Expected YYYY-MM-DD or YYYY/MM/DD")


def filter_by_range(
    groups: Iterable[DayGroup],
    start: DateBound = None,
    end: DateBound = None,
) -> List[DayGroup]:
    """
    Keep the groups whose day key falls within [start, end].

    Either bound may be omitted for an open-ended range. Comparison is
    lexicographic on the zero-padded day key.
    """
    low = normalize_bound(start)
    high = normalize_bound(end)

    return [
        g for g in groups
        if (low is None or g.date >= low) and (high is None or g.date <= high)
    ]
