"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from practice_scheduler.adapters.supabase_client_repository import (
    SupabaseClientRepository,
)
from practice_scheduler.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from practice_scheduler.adapters.supabase_therapist_repository import (
    SupabaseTherapistRepository,
)
from practice_scheduler.config import Settings
from practice_scheduler.services.commands import CommandDispatcher
from practice_scheduler.services.context import ContextStore
from practice_scheduler.services.records import (
    ClientRepository,
    SessionRepository,
    TherapistRepository,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    client_repository: ClientRepository
    session_repository: SessionRepository
    therapist_repository: TherapistRepository
    context_store: ContextStore
    command_dispatcher: CommandDispatcher


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    client_repository = SupabaseClientRepository(supabase_client)
    session_repository = SupabaseSessionRepository(supabase_client)
    therapist_repository = SupabaseTherapistRepository(supabase_client)
    context_store = ContextStore()
    command_dispatcher = CommandDispatcher(
        client_repository=client_repository,
        session_repository=session_repository,
        context_store=context_store,
        default_session_type=resolved_settings.default_session_type,
    )
    return AppContainer(
        settings=resolved_settings,
        client_repository=client_repository,
        session_repository=session_repository,
        therapist_repository=therapist_repository,
        context_store=context_store,
        command_dispatcher=command_dispatcher,
    )
