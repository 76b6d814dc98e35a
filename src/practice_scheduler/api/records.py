"""Read-only record endpoints authenticated by therapist id."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from practice_scheduler.domain.intervals import duration_minutes
from practice_scheduler.domain.models import Caller, ClientRecord, SessionRecord

if TYPE_CHECKING:
    from practice_scheduler.containers import AppContainer

router = APIRouter(prefix="/api", tags=["records"])


async def require_caller(
    request: Request, authorization: str | None = Header(default=None)
) -> Caller:
    """Resolve the bearer therapist id into a caller."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    container: AppContainer = request.app.state.container
    therapist = container.therapist_repository.get_therapist(token.strip())
    if therapist is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return therapist.as_caller()


@router.get("/clients")
async def list_clients(
    request: Request, caller: Caller = Depends(require_caller)
) -> list[dict[str, object]]:
    """Return the clients visible to the caller."""
    container: AppContainer = request.app.state.container
    clients = container.client_repository.list_clients()
    return [_serialize_client(c) for c in clients if _can_access(caller, c)]


@router.get("/clients/{client_id}")
async def client_detail(
    client_id: str, request: Request, caller: Caller = Depends(require_caller)
) -> dict[str, object]:
    """Return a single client."""
    container: AppContainer = request.app.state.container
    client = container.client_repository.get_client(client_id)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Client not found"
        )
    if not _can_access(caller, client):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return _serialize_client(client)


@router.get("/sessions")
async def list_sessions(
    request: Request, caller: Caller = Depends(require_caller)
) -> list[dict[str, object]]:
    """Return the caller's sessions enriched with client names."""
    container: AppContainer = request.app.state.container
    clients = {c.id: c for c in container.client_repository.list_clients()}
    visible = []
    for session in container.session_repository.list_sessions():
        client = clients.get(session.client_id)
        if caller.is_admin or (client is not None and _can_access(caller, client)):
            visible.append(_serialize_session(session, client))
    return visible


def _can_access(caller: Caller, client: ClientRecord) -> bool:
    return caller.is_admin or client.therapist_id == caller.id


def _serialize_client(client: ClientRecord) -> dict[str, object]:
    return {
        "id": client.id,
        "name": client.name,
        "display_name": client.display_name,
        "therapist_id": client.therapist_id,
        "email": client.email,
        "phone": client.phone,
        "age": client.age,
        "gender": client.gender,
        "city": client.city,
        "status": client.status,
        "case_type": client.case_type,
        "doc_link": client.doc_link,
        "session_summary_doc_link": client.session_summary_doc_link,
        "notes": client.notes,
        "created_at": client.created_at.isoformat(),
        "updated_at": client.updated_at.isoformat(),
    }


def _serialize_session(
    session: SessionRecord, client: ClientRecord | None
) -> dict[str, object]:
    return {
        "id": str(session.id),
        "client_id": session.client_id,
        "client_name": client.display_name if client else "Unknown Client",
        "start_time": session.interval.start.isoformat(),
        "end_time": session.interval.end.isoformat(),
        "duration_minutes": duration_minutes(session.interval),
        "type": session.session_type,
        "location": session.location,
        "comment": session.comment,
    }
