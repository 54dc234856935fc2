"""Sign-in, sign-out and session routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from ticktock.aggregators.reconciler import TimesheetReconciler
from ticktock.api.dependencies import SESSION_ID_KEY, get_reconciler, require_principal
from ticktock.api.schemas import ErrorResponse
from ticktock.auth import SESSION_USER_KEY, DemoIdentityProvider
from ticktock.exceptions import AuthenticationError
from ticktock.models.user import LoginCredentials, Principal
from ticktock.utils.logging_utils import sanitize_sensitive_data

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/auth",
    tags=["auth"],
    responses={401: {"model": ErrorResponse}},
)


@router.post("/login", response_model=Principal)
def login(credentials: LoginCredentials, request: Request) -> Principal:
    """Sign in with the demo credentials and attach the principal to the session."""
    logger.debug(f"Login attempt: {sanitize_sensitive_data(credentials.model_dump())}")

    provider: DemoIdentityProvider = request.app.state.identity_provider
    try:
        principal = provider.authenticate(credentials)
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    request.session[SESSION_USER_KEY] = principal.model_dump()
    return principal


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    request: Request,
    reconciler: TimesheetReconciler = Depends(get_reconciler),
) -> Response:
    """Discard the session's timesheet additions and sign out."""
    reconciler.clear()
    request.session.pop(SESSION_USER_KEY, None)
    request.session.pop(SESSION_ID_KEY, None)
    logger.info("Signed out")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/session", response_model=Principal)
def current_session(principal: Principal = Depends(require_principal)) -> Principal:
    """Return the signed-in principal."""
    return principal
