"""Per-caller command context."""

import asyncio
from dataclasses import dataclass


@dataclass
class CommandContext:
    """Mutable state remembered between commands from one caller."""

    selected_client_id: str | None = None


@dataclass
class ContextStore:
    """In-process store of command contexts keyed by caller id.

    Entries are created on first use and live as long as the process. Each
    key is written only by commands from its own caller, which the
    dispatcher serializes through ``lock_for``.
    """

    _contexts: dict[str, CommandContext]
    _locks: dict[str, asyncio.Lock]

    def __init__(self) -> None:
        self._contexts = {}
        self._locks = {}

    def get_context(self, caller_id: str) -> CommandContext:
        """Return the caller's context, creating an empty one if needed."""
        context = self._contexts.get(caller_id)
        if context is None:
            context = CommandContext()
            self._contexts[caller_id] = context
        return context

    def select(self, caller_id: str, client_id: str) -> None:
        """Remember the client subsequent commands operate on."""
        self.get_context(caller_id).selected_client_id = client_id

    def lock_for(self, caller_id: str) -> asyncio.Lock:
        """Return the lock that orders commands from one caller."""
        lock = self._locks.get(caller_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[caller_id] = lock
        return lock
