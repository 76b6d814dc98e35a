"""Textual command parsing and dispatch."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time
from uuid import uuid4

from practice_scheduler.command_catalog import Command, help_text
from practice_scheduler.domain.errors import (
    AccessDenied,
    AlreadyExists,
    InvalidDuration,
    InvalidInterval,
    NoContextSelected,
    NotFound,
    SchedulerError,
    SchedulingConflict,
    StorageError,
    UnknownCommand,
    UsageError,
)
from practice_scheduler.domain.intervals import Interval, duration_minutes
from practice_scheduler.domain.models import (
    Caller,
    ClientRecord,
    EditableField,
    SessionRecord,
)
from practice_scheduler.services.context import ContextStore
from practice_scheduler.services.records import ClientRepository, SessionRepository
from practice_scheduler.services.scheduling import (
    SessionStoreView,
    find_available_slots,
    find_conflicts,
)

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "An unexpected error occurred."
NO_SLOTS_MESSAGE = "No available slots found in the given range."
_NO_CONTEXT_MESSAGE = 'No client selected. Use "open_user <clientId>" first.'
MAX_MINUTES = 24 * 60
_NOT_SET = "(Not set)"


@dataclass(frozen=True)
class ParsedCommand:
    """A command line split into its name and arguments."""

    name: str
    args: list[str]


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one command, ready for the transport layer."""

    success: bool
    message: str
    is_error: bool = False
    link: str | None = None

    @classmethod
    def ok(cls, message: str, link: str | None = None) -> "CommandResult":
        return cls(success=True, message=message, link=link)

    @classmethod
    def failure(cls, message: str) -> "CommandResult":
        return cls(success=False, message=message, is_error=True)


def parse_command(command_line: str) -> ParsedCommand:
    """Split a command line on whitespace, keeping double-quoted spans whole."""
    parts: list[str] = []
    current = ""
    in_quote = False
    for char in command_line:
        if char == '"':
            in_quote = not in_quote
            if not in_quote and current:
                parts.append(current)
                current = ""
            continue
        if char.isspace() and not in_quote:
            if current:
                parts.append(current)
                current = ""
            continue
        current += char
    if current:
        parts.append(current)
    name = parts[0].lower() if parts else ""
    return ParsedCommand(name=name, args=parts[1:])


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


Handler = Callable[[list[str], Caller], Awaitable[CommandResult]]


@dataclass
class CommandDispatcher:
    """Route command lines to handlers and convert failures into results."""

    client_repository: ClientRepository
    session_repository: SessionRepository
    context_store: ContextStore
    default_session_type: str = "Individual"
    clock: Callable[[], datetime] = field(default=_utcnow)

    async def process_command(self, command_line: str, caller: Caller) -> CommandResult:
        """Parse, authorize, execute and format a single command."""
        parsed = parse_command(command_line)
        async with self.context_store.lock_for(caller.id):
            try:
                return await self._dispatch(parsed, caller)
            except StorageError:
                logger.exception(
                    "Record store failure", extra={"command": parsed.name}
                )
                return CommandResult.failure(GENERIC_FAILURE)
            except SchedulerError as exc:
                logger.info(
                    "Command rejected: %s",
                    exc,
                    extra={"command": parsed.name, "caller_id": caller.id},
                )
                return CommandResult.failure(str(exc))
            except Exception:
                logger.exception(
                    "Error processing command", extra={"command": parsed.name}
                )
                return CommandResult.failure(GENERIC_FAILURE)

    async def _dispatch(self, parsed: ParsedCommand, caller: Caller) -> CommandResult:
        command = Command.lookup(parsed.name)
        if command is None:
            raise UnknownCommand(f'Unknown command: "{parsed.name}".')
        handler = self._handlers()[command]
        return await handler(parsed.args, caller)

    def _handlers(self) -> dict[Command, Handler]:
        return {
            Command.HELP: self._help,
            Command.CREATE_USER: self._create_user,
            Command.LIST_USERS: self._list_users,
            Command.SHOW_USER: self._show_user,
            Command.OPEN_USER: self._open_user,
            Command.SET_INFO: self._set_info,
            Command.SET_DOC: self._set_doc,
            Command.SET_SUMMARY_DOC: self._set_summary_doc,
            Command.OPEN_DOC: self._open_doc,
            Command.ADD_NOTE: self._add_note,
            Command.ADD_SESSION: self._add_session,
            Command.LIST_SESSIONS: self._list_sessions,
            Command.AVAILABLE_SLOTS: self._available_slots,
        }

    async def _help(self, args: list[str], caller: Caller) -> CommandResult:
        return CommandResult.ok(help_text())

    async def _create_user(self, args: list[str], caller: Caller) -> CommandResult:
        if not 1 <= len(args) <= 2:
            raise UsageError(Command.CREATE_USER.usage)
        client_id = args[0]
        name = args[1] if len(args) == 2 else None
        if self.client_repository.get_client(client_id) is not None:
            raise AlreadyExists(f"Client with ID '{client_id}' already exists.")
        now = self.clock()
        client = self.client_repository.create_client(
            ClientRecord(
                id=client_id,
                name=name,
                therapist_id=None if caller.is_admin else caller.id,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("Client created", extra={"client_id": client_id})
        return CommandResult.ok(f"Client '{client.display_name}' created.")

    async def _list_users(self, args: list[str], caller: Caller) -> CommandResult:
        clients = self.client_repository.list_clients()
        if not caller.is_admin:
            clients = [c for c in clients if c.therapist_id == caller.id]
        if not clients:
            return CommandResult.ok("No clients found.")
        lines = [f"{'ID':<12} {'Name':<20} Status", "-" * 41]
        for client in clients:
            lines.append(
                f"{client.id:<12} {client.name or '(No Name)':<20} "
                f"{client.status or 'N/A'}"
            )
        return CommandResult.ok("\n".join(lines))

    async def _show_user(self, args: list[str], caller: Caller) -> CommandResult:
        if len(args) != 1:
            raise UsageError(Command.SHOW_USER.usage)
        client = self._authorized_client(args[0], caller, "view")
        sessions = self._view().sessions_for_client(client.id)
        return CommandResult.ok(_format_client(client, sessions))

    async def _open_user(self, args: list[str], caller: Caller) -> CommandResult:
        if len(args) != 1:
            raise UsageError(Command.OPEN_USER.usage)
        client = self._authorized_client(args[0], caller, "open")
        self.context_store.select(caller.id, client.id)
        return CommandResult.ok(f"Client context set to: '{client.display_name}'.")

    async def _set_info(self, args: list[str], caller: Caller) -> CommandResult:
        client_id = self.context_store.get_context(caller.id).selected_client_id
        if client_id is not None:
            if len(args) < 2:
                raise UsageError("Usage (with context): set_info <field> <value>")
            raw_field, value_parts = args[0], args[1:]
        else:
            if len(args) < 3:
                raise UsageError(
                    "Usage (no context): set_info <clientId> <field> <value>"
                )
            client_id, raw_field, value_parts = args[0], args[1], args[2:]
        info_field = EditableField.parse(raw_field)
        client = self._authorized_client(client_id, caller, "set info for")
        self.client_repository.update_client(
            client.id, {info_field.value: " ".join(value_parts)}
        )
        return CommandResult.ok(f"Client '{client.id}' {info_field.label} updated.")

    async def _set_doc(self, args: list[str], caller: Caller) -> CommandResult:
        return self._attach_doc(args, caller, Command.SET_DOC, "doc_link")

    async def _set_summary_doc(self, args: list[str], caller: Caller) -> CommandResult:
        return self._attach_doc(
            args, caller, Command.SET_SUMMARY_DOC, "session_summary_doc_link"
        )

    def _attach_doc(
        self, args: list[str], caller: Caller, command: Command, attribute: str
    ) -> CommandResult:
        client_id = self._selected_client_id(caller)
        if len(args) != 1:
            raise UsageError(command.usage)
        client = self._authorized_client(client_id, caller, "edit")
        self.client_repository.update_client(client.id, {attribute: args[0]})
        return CommandResult.ok(f"Doc link for client '{client.id}' set.")

    async def _open_doc(self, args: list[str], caller: Caller) -> CommandResult:
        client_id = self._selected_client_id(caller)
        if args:
            raise UsageError(Command.OPEN_DOC.usage)
        client = self._authorized_client(client_id, caller, "open")
        if not client.doc_link:
            raise NotFound("No docLink set for this client.")
        return CommandResult.ok(f"Opening doc: {client.doc_link}", link=client.doc_link)

    async def _add_note(self, args: list[str], caller: Caller) -> CommandResult:
        client_id = self._selected_client_id(caller)
        if not args:
            raise UsageError(Command.ADD_NOTE.usage)
        client = self._authorized_client(client_id, caller, "add notes to")
        note = f"[{self.clock():%Y-%m-%d %H:%M}] {' '.join(args)}"
        self.client_repository.append_note(client.id, note)
        return CommandResult.ok(f"Note added to client '{client.id}'.")

    async def _add_session(self, args: list[str], caller: Caller) -> CommandResult:
        if len(args) not in {4, 5}:
            raise UsageError(Command.ADD_SESSION.usage)
        client_id, raw_day, raw_time, raw_minutes = args[:4]
        session_type = args[4] if len(args) == 5 else self.default_session_type
        start = datetime.combine(_parse_day(raw_day), _parse_clock(raw_time), UTC)
        interval = Interval.from_start(start, _parse_minutes(raw_minutes))

        client = self._authorized_client(client_id, caller, "add sessions for")
        conflicts = find_conflicts(
            interval, self._view().sessions_for_client(client.id)
        )
        if conflicts:
            logger.info(
                "Session overlaps existing booking",
                extra={"client_id": client.id, "session_id": str(conflicts[0].id)},
            )
            raise SchedulingConflict(
                "This session overlaps with an existing session "
                f"for client '{client.id}'."
            )
        session = self.session_repository.create_session(
            SessionRecord(
                id=uuid4(),
                client_id=client.id,
                interval=interval,
                session_type=session_type,
            )
        )
        logger.info(
            "Session created",
            extra={"client_id": client.id, "session_id": str(session.id)},
        )
        return CommandResult.ok(
            f"Session for '{client.display_name}' on {start:%Y-%m-%d} "
            f"at {start:%H:%M} added."
        )

    async def _list_sessions(self, args: list[str], caller: Caller) -> CommandResult:
        if len(args) != 1:
            raise UsageError(Command.LIST_SESSIONS.usage)
        client = self._authorized_client(args[0], caller, "list sessions for")
        sessions = _chronological(self._view().sessions_for_client(client.id))
        if not sessions:
            return CommandResult.ok(f"No sessions found for client '{client.id}'.")
        lines = [f"Sessions for {client.display_name}:"]
        for session in sessions:
            lines.append(
                f"- {session.interval.start:%Y-%m-%d %H:%M} "
                f"({duration_minutes(session.interval)} mins) - "
                f"{session.session_type or 'N/A'}"
            )
        return CommandResult.ok("\n".join(lines))

    async def _available_slots(self, args: list[str], caller: Caller) -> CommandResult:
        if len(args) != 4:
            raise UsageError(Command.AVAILABLE_SLOTS.usage)
        day = _parse_day(args[0])
        window_start = _parse_clock(args[1])
        window_end = _parse_clock(args[2])
        slot_minutes = _parse_minutes(args[3])
        slots = find_available_slots(
            self._view(), day, window_start, window_end, slot_minutes
        )
        if not slots:
            return CommandResult.ok(NO_SLOTS_MESSAGE)
        listing = "\n".join(f"- {slot.start:%H:%M}" for slot in slots)
        return CommandResult.ok(f"Available slots for {day.isoformat()}:\n{listing}")

    def _view(self) -> SessionStoreView:
        return SessionStoreView(self.session_repository.list_sessions())

    def _selected_client_id(self, caller: Caller) -> str:
        client_id = self.context_store.get_context(caller.id).selected_client_id
        if client_id is None:
            raise NoContextSelected(_NO_CONTEXT_MESSAGE)
        return client_id

    def _authorized_client(
        self, client_id: str, caller: Caller, action: str
    ) -> ClientRecord:
        client = self.client_repository.get_client(client_id)
        if client is None:
            raise NotFound(f"Client with ID '{client_id}' not found.")
        if not caller.is_admin and client.therapist_id != caller.id:
            raise AccessDenied(
                f"Access denied. You can only {action} your own clients."
            )
        return client


def _parse_day(raw: str) -> date:
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError as exc:
        raise InvalidInterval(f"Invalid date '{raw}', expected YYYY-MM-DD.") from exc


def _parse_clock(raw: str) -> time:
    try:
        return datetime.strptime(raw, "%H:%M").time()
    except ValueError as exc:
        raise InvalidInterval(f"Invalid time '{raw}', expected HH:MM.") from exc


def _parse_minutes(raw: str) -> int:
    try:
        minutes = int(raw)
    except ValueError as exc:
        raise InvalidDuration("Duration must be a number of minutes.") from exc
    if minutes <= 0:
        raise InvalidDuration("Duration must be a positive number of minutes.")
    if minutes > MAX_MINUTES:
        raise InvalidDuration(f"Duration must be at most {MAX_MINUTES} minutes.")
    return minutes


def _chronological(sessions: list[SessionRecord]) -> list[SessionRecord]:
    return sorted(sessions, key=lambda session: session.interval.start)


def _format_client(client: ClientRecord, sessions: list[SessionRecord]) -> str:
    rows = [
        ("Client ID", client.id),
        ("Name", client.name),
        ("Age", client.age),
        ("Gender", client.gender),
        ("City", client.city),
        ("Status", client.status),
        ("Case Type", client.case_type),
        ("Email", client.email),
        ("Phone", client.phone),
        ("Case History", client.doc_link),
        ("Session Doc", client.session_summary_doc_link),
    ]
    lines = [f"{label + ':':<14}{value or _NOT_SET}" for label, value in rows]
    lines.append(f"{'Notes:':<14}")
    lines.append(client.notes or "(No notes)")
    lines.append(f"{'Created At:':<14}{client.created_at:%Y-%m-%d %H:%M} UTC")
    lines.append(f"{'Updated At:':<14}{client.updated_at:%Y-%m-%d %H:%M} UTC")
    lines.append("")
    ordered = _chronological(sessions)
    if not ordered:
        lines.append("No sessions booked.")
        return "\n".join(lines)
    lines.append("Sessions:")
    for session in ordered:
        lines.append(
            f"  - {session.interval.start:%Y-%m-%d %H:%M} to "
            f"{session.interval.end:%H:%M} ({session.session_type or 'N/A'})"
        )
    return "\n".join(lines)
