"""Supabase-backed session repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from practice_scheduler.adapters.timestamps import parse_timestamp
from practice_scheduler.domain.errors import InvalidInterval, StorageError
from practice_scheduler.domain.intervals import make_interval
from practice_scheduler.domain.models import SessionRecord
from practice_scheduler.services.records import SessionRepository

_COLUMNS = "id, client_id, start_time, end_time, type, location, comment"


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for appointment sessions."""

    client: Client

    def list_sessions(self) -> list[SessionRecord]:
        """Return every session ordered by start time."""
        response = (
            self.client.table("sessions").select(_COLUMNS).order("start_time").execute()
        )
        return [_session_from_row(row) for row in response.data or []]

    def create_session(self, session: SessionRecord) -> SessionRecord:
        """Insert a session row and return it."""
        response = (
            self.client.table("sessions")
            .insert(
                {
                    "id": str(session.id),
                    "client_id": session.client_id,
                    "start_time": session.interval.start.isoformat(),
                    "end_time": session.interval.end.isoformat(),
                    "type": session.session_type,
                    "location": session.location,
                    "comment": session.comment,
                }
            )
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to create session")
        return _session_from_row(response.data[0])


def _session_from_row(row: dict) -> SessionRecord:
    try:
        return SessionRecord(
            id=UUID(row["id"]),
            client_id=row["client_id"],
            interval=make_interval(
                parse_timestamp(row["start_time"]), parse_timestamp(row["end_time"])
            ),
            session_type=row.get("type") or "",
            location=row.get("location"),
            comment=row.get("comment"),
        )
    except (InvalidInterval, ValueError, TypeError, KeyError) as exc:
        raise StorageError(f"Malformed session row {row.get('id')!r}") from exc
