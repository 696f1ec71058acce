# Vault - Credential Record Model
#
# A credential record is immutable once created: records are only ever
# created or removed, never edited in place.

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

REQUIRED_FIELDS = ("title", "username", "secret")
OPTIONAL_FIELDS = ("website", "notes")


class ValidationError(ValueError):
    """Raised when a credential record is missing a field or a field is not text."""

    def __init__(self, missing_fields: Sequence[str], invalid_fields: Sequence[str] = ()):
        self.missing_fields = list(missing_fields)
        self.invalid_fields = list(invalid_fields)

        problems = []
        if self.missing_fields:
            problems.append(f"Missing required field(s): {', '.join(self.missing_fields)}")
        if self.invalid_fields:
            problems.append(f"Field(s) must be strings: {', '.join(self.invalid_fields)}")
        super().__init__("; ".join(problems))


@dataclass(frozen=True)
class CredentialRecord:
    """One stored secret plus its metadata."""

    id: str
    title: str
    username: str
    secret: str
    website: Optional[str] = None
    notes: Optional[str] = None
    created_at: str = ""

    @classmethod
    def new(
        cls,
        title: Optional[str],
        username: Optional[str],
        secret: Optional[str],
        website: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> "CredentialRecord":
        """
        Validate fields and build a record with a fresh id and timestamp.

        Raises:
            ValidationError: If title, username or secret is empty, or any
                field that is given is not a string
        """
        values = {
            "title": title,
            "username": username,
            "secret": secret,
            "website": website,
            "notes": notes,
        }
        missing = [name for name in REQUIRED_FIELDS if values[name] is None or values[name] == ""]
        invalid = [
            name for name in REQUIRED_FIELDS + OPTIONAL_FIELDS
            if values[name] is not None and not isinstance(values[name], str)
        ]
        if missing or invalid:
            raise ValidationError(missing, invalid)

        return cls(
            id=uuid.uuid4().hex,
            title=title,
            username=username,
            secret=secret,
            website=website or None,
            notes=notes or None,
            created_at=datetime.now(timezone.utc).isoformat(),
        )

    def to_dict(self, include_secret: bool = False) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "title": self.title,
            "username": self.username,
            "website": self.website,
            "notes": self.notes,
            "created_at": self.created_at,
        }
        if include_secret:
            data["secret"] = self.secret
        return data
