"""Error taxonomy for command handling and scheduling."""


class SchedulerError(Exception):
    """Base class for failures reported back to the caller as a result."""


class UsageError(SchedulerError):
    """Raised when a command has the wrong arity or malformed arguments."""


class NotFound(SchedulerError):
    """Raised when a referenced client or session does not exist."""


class AccessDenied(SchedulerError):
    """Raised when the caller may not act on the referenced client."""


class NoContextSelected(SchedulerError):
    """Raised when a command needs a selected client and none is set."""


class InvalidInterval(SchedulerError):
    """Raised when an interval is malformed (end not after start)."""


class InvalidDuration(SchedulerError):
    """Raised when a duration is not a positive number of minutes."""


class SchedulingConflict(SchedulerError):
    """Raised when a new session overlaps an existing one for the client."""


class StorageError(SchedulerError):
    """Raised when the record store fails to persist or return data."""


class UnknownCommand(SchedulerError):
    """Raised when the command name is not recognized."""


class AlreadyExists(SchedulerError):
    """Raised when creating a record whose id is already taken."""
