# Vault - Record Storage Backends
#
# The credential store delegates holding records to a RecordStorage.
# InMemoryRecordStorage is the default and is lost when the process exits.
# SQLiteRecordStorage keeps records across restarts (plaintext; the vault
# has no at-rest encryption).
#
# Both backends return records newest-first.

import sqlite3
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

from .models import CredentialRecord


class RecordStorage(ABC):
    """Backend that holds credential records in newest-first order."""

    @abstractmethod
    def records(self) -> List[CredentialRecord]:
        """Return all records, newest first, as a new list."""

    @abstractmethod
    def prepend(self, record: CredentialRecord) -> None:
        """Insert a record ahead of every existing record."""

    @abstractmethod
    def remove(self, record_id: str) -> bool:
        """Remove a record by id. Returns False if no such record."""

    def get(self, record_id: str) -> Optional[CredentialRecord]:
        for record in self.records():
            if record.id == record_id:
                return record
        return None

    def close(self) -> None:
        """Release backend resources (no-op by default)."""


class InMemoryRecordStorage(RecordStorage):
    """Volatile storage: a plain list kept in process memory."""

    def __init__(self):
        self._records: List[CredentialRecord] = []

    def records(self) -> List[CredentialRecord]:
        return list(self._records)

    def prepend(self, record: CredentialRecord) -> None:
        # Rebind rather than insert so a concurrent reader never sees a
        # half-updated list.
        self._records = [record] + self._records

    def remove(self, record_id: str) -> bool:
        remaining = [r for r in self._records if r.id != record_id]
        if len(remaining) == len(self._records):
            return False
        self._records = remaining
        return True


def _connect(db_path: Union[str, Path]) -> sqlite3.Connection:
    """Open a SQLite connection in WAL mode with row access by name."""
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA busy_timeout=5000")
    conn.row_factory = sqlite3.Row
    return conn


class SQLiteRecordStorage(RecordStorage):
    """
    Persistent storage in a single SQLite table.

    Order is kept by an autoincrement sequence column, so listing by
    descending sequence gives newest-first regardless of timestamps.

    Args:
        db_path: Path to SQLite file. Parent directories are created.
    """

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self.conn = _connect(self.db_path)
        self._init_database()

    def _init_database(self):
        with self._lock:
            self.conn.execute("""
                CREATE TABLE IF NOT EXISTS credentials (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT NOT NULL UNIQUE,
                    title TEXT NOT NULL,
                    username TEXT NOT NULL,
                    secret TEXT NOT NULL,
                    website TEXT,
                    notes TEXT,
                    created_at TEXT NOT NULL
                )
            """)
            self.conn.commit()

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> CredentialRecord:
        return CredentialRecord(
            id=row["id"],
            title=row["title"],
            username=row["username"],
            secret=row["secret"],
            website=row["website"],
            notes=row["notes"],
            created_at=row["created_at"],
        )

    def records(self) -> List[CredentialRecord]:
        with self._lock:
            rows = self.conn.execute(
                "SELECT id, title, username, secret, website, notes, created_at "
                "FROM credentials ORDER BY seq DESC"
            ).fetchall()
        return [self._row_to_record(row) for row in rows]

    def prepend(self, record: CredentialRecord) -> None:
        with self._lock:
            with self.conn:
                self.conn.execute(
                    """
                    INSERT INTO credentials
                    (id, title, username, secret, website, notes, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        record.id,
                        record.title,
                        record.username,
                        record.secret,
                        record.website,
                        record.notes,
                        record.created_at,
                    ),
                )

    def remove(self, record_id: str) -> bool:
        with self._lock:
            with self.conn:
                cursor = self.conn.execute(
                    "DELETE FROM credentials WHERE id = ?", (record_id,)
                )
        return cursor.rowcount > 0

    def get(self, record_id: str) -> Optional[CredentialRecord]:
        with self._lock:
            row = self.conn.execute(
                "SELECT id, title, username, secret, website, notes, created_at "
                "FROM credentials WHERE id = ?",
                (record_id,),
            ).fetchone()
        return self._row_to_record(row) if row else None

    def close(self) -> None:
        with self._lock:
            self.conn.close()
