"""
Domain errors raised by the lift log services.
Routers translate these into HTTP responses.
"""


class LiftLogError(Exception):
    """Base class for lift log errors"""


class LogStoreError(LiftLogError):
    """The workout store could not be read or written"""


class EntryNotFound(LiftLogError):
    """No workout entry exists with the requested id"""

    def __init__(self, entry_id: int):
        super().__init__(f"Workout entry {entry_id} not found")
        self.entry_id = entry_id


class NoDataForRange(LiftLogError):
    """An export was requested for a range without any recorded days"""

    def __init__(self, start=None, end=None):
        super().__init__(f"No data for range {start or '...'} - {end or '...'}")
        self.start = start
        self.end = end
