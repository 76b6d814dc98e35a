"""Overlap detection and free-slot computation over a session snapshot."""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta

from practice_scheduler.domain.errors import InvalidDuration
from practice_scheduler.domain.intervals import Interval, overlaps
from practice_scheduler.domain.models import SessionRecord


@dataclass(frozen=True)
class SessionStoreView:
    """Read-only view over the sessions loaded for one command."""

    sessions: Sequence[SessionRecord]

    def sessions_for_client(self, client_id: str) -> list[SessionRecord]:
        """Return all sessions booked for a client, unordered."""
        return [s for s in self.sessions if s.client_id == client_id]

    def sessions_on_day(self, day: date) -> list[SessionRecord]:
        """Return all sessions starting on the given UTC calendar day."""
        return [s for s in self.sessions if session_day(s) == day]


def session_day(session: SessionRecord) -> date:
    """Calendar day of a session start in UTC."""
    return session.interval.start.astimezone(UTC).date()


def find_conflicts(
    candidate: Interval, scope: Iterable[SessionRecord]
) -> list[SessionRecord]:
    """Return the sessions in scope that overlap the candidate."""
    return [s for s in scope if overlaps(candidate, s.interval)]


def has_conflict(candidate: Interval, scope: Iterable[SessionRecord]) -> bool:
    """Return true when the candidate overlaps any session in scope."""
    return any(overlaps(candidate, s.interval) for s in scope)


def generate_slots(
    day: date, window_start: time, window_end: time, slot_minutes: int
) -> Iterator[Interval]:
    """Tile the working window into contiguous slots of a fixed length.

    The window is read in UTC. Slots that would run past ``window_end`` are
    not emitted, and an empty or inverted window yields nothing.
    """
    if slot_minutes <= 0:
        raise InvalidDuration("Slot duration must be a positive number of minutes.")
    start = datetime.combine(day, window_start, tzinfo=UTC)
    end = datetime.combine(day, window_end, tzinfo=UTC)
    if slot_minutes > (end - start) // timedelta(minutes=1):
        return iter(())
    return _tile(start, end, timedelta(minutes=slot_minutes))


def _tile(start: datetime, end: datetime, step: timedelta) -> Iterator[Interval]:
    cursor = start
    while cursor + step <= end:
        yield Interval(start=cursor, end=cursor + step)
        cursor += step


def find_available_slots(
    view: SessionStoreView,
    day: date,
    window_start: time,
    window_end: time,
    slot_minutes: int,
) -> list[Interval]:
    """Return the free slots of the window in chronological order."""
    booked = view.sessions_on_day(day)
    return [
        slot
        for slot in generate_slots(day, window_start, window_end, slot_minutes)
        if not has_conflict(slot, booked)
    ]
