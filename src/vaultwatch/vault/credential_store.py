# Vault - Credential Store
#
# The only mutation path for credential records.
# - create: validate, assign id + timestamp, prepend (newest first)
# - list:   read-only snapshot, newest first
# - delete: remove by id; a missing id is a no-op, not an error
#
# There is no edit operation: records are created or removed, never changed.

import logging
import threading
from typing import List, Optional

from ..core import EventType, get_audit_logger
from .models import CredentialRecord
from .storage import InMemoryRecordStorage, RecordStorage

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    Holds the authoritative collection of credential records.

    Mutations are serialized by a lock so create/delete are atomic and
    readers always get a fully built snapshot.

    Args:
        storage: Backend holding the records (default: volatile in-memory)
    """

    def __init__(self, storage: Optional[RecordStorage] = None):
        self.storage = storage if storage is not None else InMemoryRecordStorage()
        self._lock = threading.Lock()

    def create(
        self,
        title: str,
        username: str,
        secret: str,
        website: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> CredentialRecord:
        """
        Add a new credential record.

        Args:
            title: Display label (e.g., "Gmail")
            username: Account identifier
            secret: The password itself
            website: Optional URL
            notes: Optional free text

        Returns:
            The stored record

        Raises:
            ValidationError: If title, username or secret is empty
        """
        record = CredentialRecord.new(title, username, secret, website, notes)

        with self._lock:
            self.storage.prepend(record)

        get_audit_logger().log_vault_event(
            EventType.VAULT_RECORD_ADDED,
            f"Record added: {record.title}",
            details={"record_id": record.id},
        )
        return record

    def list(self) -> List[CredentialRecord]:
        """All records, newest first."""
        with self._lock:
            return self.storage.records()

    snapshot = list

    def get(self, record_id: str) -> Optional[CredentialRecord]:
        with self._lock:
            return self.storage.get(record_id)

    def delete(self, record_id: str) -> bool:
        """
        Remove a record by id.

        Returns:
            True if a record was removed, False if the id was not present
        """
        with self._lock:
            removed = self.storage.remove(record_id)

        if removed:
            get_audit_logger().log_vault_event(
                EventType.VAULT_RECORD_DELETED,
                "Record deleted",
                details={"record_id": record_id},
            )
        else:
            logger.debug("Delete ignored, no record with id %s", record_id)
        return removed

    def __len__(self) -> int:
        return len(self.list())
