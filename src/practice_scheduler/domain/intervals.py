"""Half-open time intervals used by the scheduling core."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from practice_scheduler.domain.errors import InvalidDuration, InvalidInterval

_MINUTE = timedelta(minutes=1)


@dataclass(frozen=True)
class Interval:
    """A span of time covering [start, end)."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise InvalidInterval("Interval bounds must be timezone-aware.")
        if self.end <= self.start:
            raise InvalidInterval("Interval end must be after its start.")

    @classmethod
    def from_start(cls, start: datetime, minutes: int) -> "Interval":
        """Build an interval of a whole number of minutes from its start."""
        if minutes <= 0:
            raise InvalidDuration("Duration must be a positive number of minutes.")
        try:
            end = start + timedelta(minutes=minutes)
        except OverflowError as exc:
            raise InvalidDuration("Duration is out of range.") from exc
        return cls(start=start, end=end)

    @property
    def duration_minutes(self) -> int:
        """Length of the interval in whole minutes."""
        return duration_minutes(self)


def make_interval(start: datetime, end: datetime) -> Interval:
    """Return an interval, raising InvalidInterval when end <= start."""
    return Interval(start=start, end=end)


def overlaps(a: Interval, b: Interval) -> bool:
    """Return true when two intervals share time; touching ends do not count."""
    return a.start < b.end and b.start < a.end


def duration_minutes(interval: Interval) -> int:
    """Return the interval length in minutes."""
    return (interval.end - interval.start) // _MINUTE
