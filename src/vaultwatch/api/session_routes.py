# Session API - login, register and logout
#
# Login and register are forwarded to the external authentication service.
# A successful login starts the session that unlocks the vault endpoints.

from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status
from pydantic import BaseModel, Field

from ..auth import AuthClient, AuthenticationError, NetworkError
from ..core import EventSeverity, EventType, get_audit_logger, get_settings
from .security import get_session_manager

router = APIRouter(prefix="/api/session", tags=["session"])


def get_auth_client():
    """FastAPI dependency yielding a client for the configured auth service."""
    settings = get_settings()
    client = AuthClient(settings.auth_url, timeout=settings.auth_timeout)
    try:
        yield client
    finally:
        client.close()


# Request/Response Models
class CredentialsRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SessionStatusResponse(BaseModel):
    logged_in: bool
    username: Optional[str] = None
    started_at: Optional[str] = None


# Endpoints

@router.post("/login")
def login(
    request: CredentialsRequest,
    client: AuthClient = Depends(get_auth_client),
):
    """
    Log in through the authentication service.

    Returns the session token to send as X-Session-Token on vault calls.
    """
    try:
        session = client.login(request.username, request.password)
    except AuthenticationError as e:
        get_audit_logger().log_event(
            event_type=EventType.USER_LOGIN_FAILED,
            severity=EventSeverity.INVESTIGATE,
            message="Login rejected by authentication service",
            details={"username": request.username, "status_code": e.status_code},
        )
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)
    except NetworkError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    token = get_session_manager().start(session)

    get_audit_logger().log_event(
        event_type=EventType.USER_LOGIN,
        severity=EventSeverity.INFO,
        message=f"User logged in: {session.username}",
        user_context={"username": session.username},
    )

    return {"success": True, "username": session.username, "session_token": token}


@router.post("/register")
def register(
    request: CredentialsRequest,
    client: AuthClient = Depends(get_auth_client),
):
    """Create an account on the authentication service."""
    try:
        client.register(request.username, request.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except NetworkError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    get_audit_logger().log_event(
        event_type=EventType.USER_REGISTER,
        severity=EventSeverity.INFO,
        message=f"User registered: {request.username}",
        user_context={"username": request.username},
    )

    return {"success": True, "message": "Registration successful"}


@router.post("/logout")
def logout(x_session_token: str = Header(None)):
    """End the current session. Idempotent."""
    manager = get_session_manager()
    if not manager.verify(x_session_token):
        return {"success": True, "message": "No active session"}

    previous = manager.end()
    get_audit_logger().log_event(
        event_type=EventType.USER_LOGOUT,
        severity=EventSeverity.INFO,
        message=f"User logged out: {previous.username}",
        user_context={"username": previous.username},
    )
    return {"success": True, "message": "Logged out"}


@router.get("/status", response_model=SessionStatusResponse)
def session_status():
    """Whether a user is logged in (no token required)."""
    return SessionStatusResponse(**get_session_manager().current.to_dict())
