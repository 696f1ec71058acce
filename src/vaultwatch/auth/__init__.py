# Auth Module - External Authentication Boundary
#
# The vault is reachable only after the authentication service accepts a
# login. This module owns the client for that service and the explicit
# session context handed to the vault's callers.

from .client import (
    AuthClient,
    AuthError,
    AuthenticationError,
    NetworkError,
)
from .session import SessionContext

__all__ = [
    "AuthClient",
    "AuthError",
    "AuthenticationError",
    "NetworkError",
    "SessionContext",
]
