# Auth - Authentication Service Client
#
# Thin client for the external authentication service:
#   POST {base}/login     {"username": ..., "password": ...}
#   POST {base}/register  {"username": ..., "password": ...}
#
# Any 2xx status is success. On failure the service may answer with a JSON
# body {"message": "..."} which is shown to the user verbatim.
# Requests are never retried.

import logging
from typing import Any, Dict, Optional

import httpx

from .session import SessionContext

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error. Please try again."
LOGIN_FAILED_MESSAGE = "Login failed"
REGISTER_FAILED_MESSAGE = "Registration failed"


class AuthError(Exception):
    """Base class for authentication boundary errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AuthenticationError(AuthError):
    """The service answered and rejected the request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkError(AuthError):
    """The service could not be reached or its answer could not be read."""

    def __init__(self, message: str = NETWORK_ERROR_MESSAGE):
        super().__init__(message)


class AuthClient:
    """
    Client for the login/register endpoints.

    Usage::

        with AuthClient("http://localhost:8000") as client:
            session = client.login("alice", "hunter2")

    Args:
        base_url: Service root, without trailing slash
        timeout: Per-request timeout in seconds
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def __enter__(self) -> "AuthClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    def _post(self, path: str, payload: Dict[str, Any]) -> httpx.Response:
        try:
            return self._client.post(path, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("Auth service request to %s failed: %s", path, exc)
            raise NetworkError() from exc

    @staticmethod
    def _failure_message(resp: httpx.Response, default: str) -> str:
        """Extract the user-visible message from an error response."""
        try:
            data = resp.json()
        except ValueError as exc:
            logger.warning(
                "Auth service returned %d with an unreadable body",
                resp.status_code,
            )
            raise NetworkError() from exc

        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return default

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def login(self, username: str, password: str) -> SessionContext:
        """
        Authenticate against the service.

        Returns:
            A logged-in SessionContext for username

        Raises:
            AuthenticationError: Service rejected the credentials
            NetworkError: Service unreachable or response unreadable
        """
        resp = self._post("/login", {"username": username, "password": password})

        if resp.is_success:
            logger.info("Login accepted for %s", username)
            return SessionContext(username=username, logged_in=True)

        raise AuthenticationError(
            self._failure_message(resp, LOGIN_FAILED_MESSAGE),
            status_code=resp.status_code,
        )

    def register(self, username: str, password: str) -> None:
        """
        Create an account on the service.

        Raises:
            AuthenticationError: Service refused the registration
            NetworkError: Service unreachable or response unreadable
        """
        resp = self._post("/register", {"username": username, "password": password})

        if resp.is_success:
            logger.info("Registration accepted for %s", username)
            return

        raise AuthenticationError(
            self._failure_message(resp, REGISTER_FAILED_MESSAGE),
            status_code=resp.status_code,
        )
