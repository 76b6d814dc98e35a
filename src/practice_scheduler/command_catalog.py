"""Console command definitions."""

from dataclasses import dataclass
from enum import Enum

from practice_scheduler.domain.models import EditableField


@dataclass(frozen=True)
class CommandSpec:
    """Declarative console command definition."""

    name: str
    usage: str
    description: str


class Command(Enum):
    """Enum of console commands (single source of truth)."""

    HELP = CommandSpec("help", "help", "Show this help message.")
    CREATE_USER = CommandSpec(
        "create_user", "create_user <clientId> [name]", "Create a new client."
    )
    LIST_USERS = CommandSpec("list_users", "list_users", "List all clients.")
    SHOW_USER = CommandSpec(
        "show_user", "show_user <clientId>", "Show detailed info for a client."
    )
    OPEN_USER = CommandSpec(
        "open_user",
        "open_user <clientId>",
        "Set the current client context for subsequent commands.",
    )
    SET_INFO = CommandSpec(
        "set_info",
        "set_info [clientId] <field> <value>",
        "Set info for a client. If clientId is omitted, uses the current client.",
    )
    SET_DOC = CommandSpec(
        "set_doc",
        "set_doc <url>",
        "Attach a Case History document URL to the current client.",
    )
    SET_SUMMARY_DOC = CommandSpec(
        "set_summary_doc",
        "set_summary_doc <url>",
        "Attach a Session Summary document URL to the current client.",
    )
    OPEN_DOC = CommandSpec(
        "open_doc", "open_doc", "Open the Case History document of the current client."
    )
    ADD_NOTE = CommandSpec(
        "add_note", "add_note <text>", "Append a note to the current client."
    )
    ADD_SESSION = CommandSpec(
        "add_session",
        "add_session <clientId> <YYYY-MM-DD> <HH:MM> <durationInMinutes> [type]",
        "Add a session.",
    )
    LIST_SESSIONS = CommandSpec(
        "list_sessions", "list_sessions <clientId>", "List all sessions for a client."
    )
    AVAILABLE_SLOTS = CommandSpec(
        "available_slots",
        "available_slots <YYYY-MM-DD> <startHH:MM> <endHH:MM> <slotDurationMinutes>",
        "Show free slots.",
    )

    @classmethod
    def lookup(cls, name: str) -> "Command | None":
        """Return the command with the given name, if any."""
        for entry in cls:
            if entry.value.name == name:
                return entry
        return None

    @property
    def usage(self) -> str:
        return f"Usage: {self.value.usage}"


def help_text() -> str:
    """Return the help listing for all commands."""
    width = max(len(entry.value.usage) for entry in Command)
    lines = ["Available Commands:"]
    for entry in Command:
        lines.append(f"  {entry.value.usage.ljust(width)}  - {entry.value.description}")
    fields = ", ".join(field.label for field in EditableField)
    lines.append(f"Valid set_info fields: {fields}.")
    return "\n".join(lines)
