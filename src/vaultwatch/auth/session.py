# Auth - Session Context
#
# The logged-in flag and username are carried as an explicit value passed
# to whatever needs them, never as module-level mutable state.

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class SessionContext:
    """Who is using the vault right now."""

    username: Optional[str] = None
    logged_in: bool = False
    token: Optional[str] = None
    started_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    @classmethod
    def anonymous(cls) -> "SessionContext":
        return cls()

    def with_token(self, token: str) -> "SessionContext":
        return SessionContext(
            username=self.username,
            logged_in=self.logged_in,
            token=token,
            started_at=self.started_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        # The token is handed out once, at login, and never echoed back.
        return {
            "username": self.username,
            "logged_in": self.logged_in,
            "started_at": self.started_at if self.logged_in else None,
        }
