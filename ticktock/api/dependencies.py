"""FastAPI dependencies: session access, reconciler wiring and auth."""

from typing import Any, MutableMapping, Optional

from fastapi import Depends, HTTPException, Request, status

from ticktock.aggregators.reconciler import TimesheetReconciler
from ticktock.auth import principal_from_session
from ticktock.models.user import Principal
from ticktock.services.additions_repository import AdditionsRepository
from ticktock.services.key_value_store import SessionDataBackend
from ticktock.utils.identifiers import generate_session_id

# Session cookie key holding the id of the server-side session data
SESSION_ID_KEY = "sid"


def get_session(request: Request) -> Optional[MutableMapping[str, Any]]:
    """Return the request's session, or None if sessions are not installed."""
    if "session" not in request.scope:
        return None
    return request.session


def get_repository(
    request: Request,
    session: Optional[MutableMapping[str, Any]] = Depends(get_session),
) -> AdditionsRepository:
    """Additions repository bound to the request's server-side session data.

    A session id is assigned on first use; the cookie carries only that id.
    """
    if session is None:
        return AdditionsRepository(None)

    session_id = session.get(SESSION_ID_KEY)
    if not isinstance(session_id, str) or not session_id:
        session_id = generate_session_id()
        session[SESSION_ID_KEY] = session_id

    backend: SessionDataBackend = request.app.state.session_backend
    return AdditionsRepository(backend.for_session(session_id))


def get_reconciler(
    request: Request,
    repository: AdditionsRepository = Depends(get_repository),
) -> TimesheetReconciler:
    """Reconciler over the application baseline and this session's additions."""
    return TimesheetReconciler(
        request.app.state.baseline,
        repository,
        completed_threshold=request.app.state.config.completed_hours_threshold,
    )


def require_principal(
    session: Optional[MutableMapping[str, Any]] = Depends(get_session),
) -> Principal:
    """Return the signed-in principal or reject the request with 401."""
    principal = principal_from_session(session)
    if principal is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return principal
