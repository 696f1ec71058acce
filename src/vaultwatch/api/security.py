# API Security - Session-based access to the vault
#
# A random session token is issued when the authentication service accepts
# a login. Every vault endpoint requires that token in the X-Session-Token
# header; logout invalidates it.

import secrets
import threading
from typing import Optional

from fastapi import Header, HTTPException, status

from ..auth import SessionContext


class SessionManager:
    """
    Owns the current SessionContext for this backend instance.

    Single-user: a new login replaces any previous session.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._session = SessionContext.anonymous()

    @property
    def current(self) -> SessionContext:
        return self._session

    def start(self, session: SessionContext) -> str:
        """
        Activate a logged-in session and issue its token.

        Returns:
            The new session token (256 bits, URL-safe)
        """
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._session = session.with_token(token)
        return token

    def end(self) -> SessionContext:
        """Log out. Returns the session that was active."""
        with self._lock:
            previous = self._session
            self._session = SessionContext.anonymous()
        return previous

    def verify(self, token: Optional[str]) -> bool:
        session = self._session
        if not session.logged_in or session.token is None or token is None:
            return False
        # Constant-time comparison to prevent timing attacks
        return secrets.compare_digest(token, session.token)


# Global session manager (single-user desktop backend)
_session_manager: Optional[SessionManager] = None


def get_session_manager() -> SessionManager:
    """Get or create the global SessionManager singleton."""
    global _session_manager
    if _session_manager is None:
        _session_manager = SessionManager()
    return _session_manager


def set_session_manager(manager: Optional[SessionManager]):
    """Allow DI for testing."""
    global _session_manager
    _session_manager = manager


async def verify_session_token(x_session_token: str = Header(None)) -> SessionContext:
    """
    FastAPI dependency guarding vault endpoints.

    Returns:
        The active SessionContext

    Raises:
        HTTPException: 401 if not logged in, header missing, or token invalid
    """
    manager = get_session_manager()

    if not manager.current.logged_in:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not logged in"
        )

    if x_session_token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-Session-Token header"
        )

    if not manager.verify(x_session_token):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid session token"
        )

    return manager.current
