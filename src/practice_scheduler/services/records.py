"""Persistence interfaces for practice records."""

from typing import Protocol

from practice_scheduler.domain.models import (
    ClientRecord,
    SessionRecord,
    TherapistRecord,
)


class ClientRepository(Protocol):
    """Persistence interface for clients."""

    def list_clients(self) -> list[ClientRecord]:
        """Return every client."""

    def get_client(self, client_id: str) -> ClientRecord | None:
        """Return a client by id, if present."""

    def create_client(self, client: ClientRecord) -> ClientRecord:
        """Persist a new client and return it."""

    def update_client(self, client_id: str, patch: dict[str, object]) -> ClientRecord:
        """Apply a partial update to a client and return the updated record."""

    def append_note(self, client_id: str, text: str) -> ClientRecord:
        """Append a note line to a client's notes."""


class SessionRepository(Protocol):
    """Persistence interface for appointment sessions."""

    def list_sessions(self) -> list[SessionRecord]:
        """Return every session."""

    def create_session(self, session: SessionRecord) -> SessionRecord:
        """Persist a new session and return it."""


class TherapistRepository(Protocol):
    """Persistence interface for practitioner accounts."""

    def get_therapist(self, therapist_id: str) -> TherapistRecord | None:
        """Return a therapist by id, if present."""
