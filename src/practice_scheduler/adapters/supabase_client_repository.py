"""Supabase-backed client repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from practice_scheduler.adapters.timestamps import parse_timestamp
from practice_scheduler.domain.errors import NotFound, StorageError
from practice_scheduler.domain.models import ClientRecord
from practice_scheduler.services.records import ClientRepository

_COLUMNS = (
    "id, name, therapist_id, email, phone, age, gender, city, status, case_type, "
    "doc_link, session_summary_doc_link, notes, created_at, updated_at"
)


@dataclass
class SupabaseClientRepository(ClientRepository):
    """Supabase implementation for client records."""

    client: Client

    def list_clients(self) -> list[ClientRecord]:
        """Return every client ordered by creation time."""
        response = (
            self.client.table("clients").select(_COLUMNS).order("created_at").execute()
        )
        return [_client_from_row(row) for row in response.data or []]

    def get_client(self, client_id: str) -> ClientRecord | None:
        """Return a client by id, if present."""
        response = (
            self.client.table("clients")
            .select(_COLUMNS)
            .eq("id", client_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _client_from_row(response.data[0])

    def create_client(self, client: ClientRecord) -> ClientRecord:
        """Insert a client row and return it."""
        response = (
            self.client.table("clients")
            .insert(
                {
                    "id": client.id,
                    "name": client.name,
                    "therapist_id": client.therapist_id,
                    "status": client.status,
                    "created_at": client.created_at.isoformat(),
                    "updated_at": client.updated_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to create client")
        return _client_from_row(response.data[0])

    def update_client(self, client_id: str, patch: dict[str, object]) -> ClientRecord:
        """Apply a partial update and bump updated_at."""
        response = (
            self.client.table("clients")
            .update({**patch, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", client_id)
            .execute()
        )
        if not response.data:
            raise StorageError(f"Failed to update client {client_id}")
        return _client_from_row(response.data[0])

    def append_note(self, client_id: str, text: str) -> ClientRecord:
        """Append a note line after any existing notes."""
        current = self.get_client(client_id)
        if current is None:
            raise NotFound(f"Client with ID '{client_id}' not found.")
        notes = f"{current.notes}\n{text}" if current.notes else text
        return self.update_client(client_id, {"notes": notes})


def _client_from_row(row: dict) -> ClientRecord:
    try:
        return ClientRecord(
            id=row["id"],
            name=row.get("name"),
            therapist_id=row.get("therapist_id"),
            email=row.get("email"),
            phone=row.get("phone"),
            age=_optional_text(row.get("age")),
            gender=row.get("gender"),
            city=row.get("city"),
            status=row.get("status"),
            case_type=row.get("case_type"),
            doc_link=row.get("doc_link"),
            session_summary_doc_link=row.get("session_summary_doc_link"),
            notes=row.get("notes"),
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )
    except (ValueError, TypeError, KeyError) as exc:
        raise StorageError(f"Malformed client row {row.get('id')!r}") from exc


def _optional_text(value: object) -> str | None:
    return None if value is None else str(value)
