"""Domain models for the practice scheduler."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

from practice_scheduler.domain.errors import UsageError
from practice_scheduler.domain.intervals import Interval


class Role(Enum):
    """Access level of a caller."""

    ADMINISTRATOR = "admin"
    STANDARD = "standard"

    @classmethod
    def parse(cls, raw: str | None) -> "Role":
        """Map a wire role value onto a role; only "admin" is privileged."""
        if raw is not None and raw.strip().lower() in {"admin", "administrator"}:
            return cls.ADMINISTRATOR
        return cls.STANDARD


@dataclass(frozen=True)
class Caller:
    """The authenticated user issuing a command."""

    id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMINISTRATOR


class EditableField(Enum):
    """Client fields that may be changed with set_info."""

    NAME = "name"
    EMAIL = "email"
    PHONE = "phone"
    AGE = "age"
    GENDER = "gender"
    CITY = "city"
    STATUS = "status"
    CASE_TYPE = "case_type"

    @classmethod
    def parse(cls, raw: str) -> "EditableField":
        """Parse a field name such as "caseType" or "case_type"."""
        normalized = raw.strip().lower().replace("_", "")
        for member in cls:
            if member.value.replace("_", "") == normalized:
                return member
        valid = ", ".join(member.label for member in cls)
        raise UsageError(f"Invalid field: '{raw}'. Valid fields are: {valid}.")

    @property
    def label(self) -> str:
        """Name used in user-facing messages."""
        head, *rest = self.value.split("_")
        return head + "".join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class ClientRecord:
    """Represents a client of the practice."""

    id: str
    name: str | None
    therapist_id: str | None
    created_at: datetime
    updated_at: datetime
    email: str | None = None
    phone: str | None = None
    age: str | None = None
    gender: str | None = None
    city: str | None = None
    status: str | None = "Open"
    case_type: str | None = None
    doc_link: str | None = None
    session_summary_doc_link: str | None = None
    notes: str | None = None

    @property
    def display_name(self) -> str:
        """Client name, falling back to the id when no name is stored."""
        return self.name or self.id


@dataclass(frozen=True)
class SessionRecord:
    """Represents a booked appointment session."""

    id: UUID
    client_id: str
    interval: Interval
    session_type: str
    location: str | None = None
    comment: str | None = None


@dataclass(frozen=True)
class TherapistRecord:
    """Represents a practitioner account."""

    id: str
    username: str
    name: str | None
    role: Role

    def as_caller(self) -> Caller:
        return Caller(id=self.id, role=self.role)
