"""
Lift Log Services Package

Contains the core logic:
- strength_index: Estimated 1RM used to rank sets
- HistoryAggregator: Groups entries by day and ranks primary lifts
- Export helpers: CSV / spreadsheet projection of the history
- workout_log.WorkoutLogRepository: Reads and writes recorded sets (imported
  separately since it needs the database module)
"""

from .errors import EntryNotFound, LiftLogError, LogStoreError, NoDataForRange
from .models import DayGroup, Lift, LogEntry, OtherSet, ScoredSet, SelectionPolicy
from .strength import strength_index
from .history import HistoryAggregator, filter_by_range
from .export import build_export_rows, export_columns, export_csv, export_xlsx

__all__ = [
    'strength_index',
    'HistoryAggregator',
    'filter_by_range',
    'build_export_rows',
    'export_columns',
    'export_csv',
    'export_xlsx',
    'DayGroup',
    'Lift',
    'LogEntry',
    'OtherSet',
    'ScoredSet',
    'SelectionPolicy',
    'LiftLogError',
    'LogStoreError',
    'EntryNotFound',
    'NoDataForRange',
]
