# Tests for CredentialStore and CredentialRecord
#
# Coverage:
#   - create: validation, id/timestamp assignment, newest-first ordering
#   - list:   snapshot semantics
#   - delete: removal and the missing-id no-op
#   - audit events for mutations
#   - thread safety of concurrent create/delete/list

import json
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

import pytest

from vaultwatch.core import get_audit_logger
from vaultwatch.vault import (
    CredentialRecord,
    CredentialStore,
    InMemoryRecordStorage,
    ValidationError,
    filter_records,
)


@pytest.fixture
def store():
    return CredentialStore()


def _read_audit_events():
    log_file = get_audit_logger().log_file
    lines = log_file.read_text(encoding="utf-8").splitlines()
    return [json.loads(line) for line in lines if line.strip()]


class TestCredentialRecord:
    def test_new_assigns_id_and_timestamp(self):
        record = CredentialRecord.new("Gmail", "alice", "s3cret")
        assert record.id
        datetime.fromisoformat(record.created_at)

    def test_id_is_uuid4_hex(self):
        record = CredentialRecord.new("t", "u", "s")
        assert len(record.id) == 32
        assert uuid.UUID(hex=record.id).version == 4

    def test_ids_are_unique(self):
        ids = {CredentialRecord.new("t", "u", "s").id for _ in range(50)}
        assert len(ids) == 50

    def test_empty_optionals_become_none(self):
        record = CredentialRecord.new("t", "u", "s", website="", notes="")
        assert record.website is None
        assert record.notes is None

    def test_missing_fields_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            CredentialRecord.new("", "u", None)
        assert exc_info.value.missing_fields == ["title", "secret"]

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            CredentialRecord.new("t", "", "s")

    def test_records_are_immutable(self):
        record = CredentialRecord.new("t", "u", "s")
        with pytest.raises(AttributeError):
            record.title = "changed"

    def test_to_dict_hides_secret(self):
        record = CredentialRecord.new("t", "u", "s")
        assert "secret" not in record.to_dict()
        assert record.to_dict(include_secret=True)["secret"] == "s"


class TestCreate:
    def test_returns_stored_record(self, store):
        record = store.create("Gmail", "alice@gmail.com", "pw", website="https://gmail.com")
        assert record.title == "Gmail"
        assert record.website == "https://gmail.com"
        assert store.list() == [record]

    def test_newest_first(self, store):
        a = store.create("A", "u", "s1")
        b = store.create("B", "u", "s2")
        assert store.list() == [b, a]

    @pytest.mark.parametrize("field", ["title", "username", "secret"])
    def test_empty_required_field_rejected(self, store, field):
        values = {"title": "t", "username": "u", "secret": "s"}
        values[field] = ""
        store.create("existing", "u", "s")

        with pytest.raises(ValidationError):
            store.create(**values)
        assert len(store) == 1

    @pytest.mark.parametrize("field,value", [
        ("title", 12345),
        ("username", ["alice"]),
        ("secret", b"bytes"),
        ("website", ["https://a"]),
        ("notes", {"text": "n"}),
    ])
    def test_non_string_field_rejected(self, store, field, value):
        existing = store.create("existing", "u", "s")
        values = {"title": "t", "username": "u", "secret": "s"}
        values[field] = value

        with pytest.raises(ValidationError) as exc_info:
            store.create(**values)
        assert exc_info.value.invalid_fields == [field]
        assert store.list() == [existing]
        assert filter_records(store.list(), "exist") == [existing]

    def test_create_logs_audit_event_without_secret(self, store):
        record = store.create("Bank", "alice", "TopSecret!")
        events = _read_audit_events()
        added = [e for e in events if e.get("event_type") == "vault.record.added"]
        assert added
        assert added[-1]["details"]["record_id"] == record.id
        assert "TopSecret!" not in get_audit_logger().log_file.read_text(encoding="utf-8")


class TestList:
    def test_empty(self, store):
        assert store.list() == []

    def test_snapshot_is_a_copy(self, store):
        store.create("A", "u", "s")
        snapshot = store.list()
        snapshot.clear()
        assert len(store.list()) == 1

    def test_snapshot_alias(self, store):
        store.create("A", "u", "s")
        assert store.snapshot() == store.list()


class TestDelete:
    def test_delete_existing(self, store):
        a = store.create("A", "u", "s1")
        b = store.create("B", "u", "s2")
        assert store.delete(a.id) is True
        assert store.list() == [b]

    def test_delete_missing_is_noop(self, store):
        a = store.create("A", "u", "s1")
        b = store.create("B", "u", "s2")
        before = store.list()

        assert store.delete("no-such-id") is False
        assert store.list() == before == [b, a]

    def test_delete_twice(self, store):
        a = store.create("A", "u", "s1")
        assert store.delete(a.id) is True
        assert store.delete(a.id) is False

    def test_get(self, store):
        a = store.create("A", "u", "s1")
        assert store.get(a.id) == a
        assert store.get("missing") is None


class TestStorageInjection:
    def test_default_is_in_memory(self, store):
        assert isinstance(store.storage, InMemoryRecordStorage)

    def test_uses_given_storage(self):
        storage = InMemoryRecordStorage()
        store = CredentialStore(storage)
        record = store.create("A", "u", "s")
        assert storage.records() == [record]


class TestConcurrency:
    WRITERS = 4
    PER_WRITER = 50
    SEEDED = 40

    def _write(self, store, writer):
        return [store.create(f"w{writer}-{i}", "u", f"s{writer}-{i}") for i in range(self.PER_WRITER)]

    def _delete_all(self, store, ids):
        return sum(store.delete(record_id) for record_id in ids)

    def _read(self, store, rounds=100):
        return [store.list() for _ in range(rounds)]

    def test_parallel_create_delete_and_list(self, store):
        seeded = [store.create(f"seed-{i}", "u", "s") for i in range(self.SEEDED)]
        seeded_ids = [record.id for record in seeded]

        with ThreadPoolExecutor(max_workers=8) as pool:
            writers = [pool.submit(self._write, store, n) for n in range(self.WRITERS)]
            # Two deleters race over the same ids; each id is removed once
            deleters = [pool.submit(self._delete_all, store, seeded_ids) for _ in range(2)]
            readers = [pool.submit(self._read, store) for _ in range(2)]

            created = [record for future in writers for record in future.result()]
            removed = sum(future.result() for future in deleters)
            snapshots = [snap for future in readers for snap in future.result()]

        final = store.list()
        assert removed == self.SEEDED
        assert len(store) == self.WRITERS * self.PER_WRITER
        assert {record.id for record in final} == {record.id for record in created}
        assert len({record.id for record in created}) == len(created)

        final_order = [record.id for record in final]
        final_ids = set(final_order)
        for snap in snapshots:
            ids = [record.id for record in snap]
            assert len(set(ids)) == len(ids)
            assert all(record.title and record.username and record.secret for record in snap)

            # Prepend-only: surviving records keep their relative order
            surviving = [record_id for record_id in ids if record_id in final_ids]
            in_snap = set(ids)
            assert surviving == [record_id for record_id in final_order if record_id in in_snap]

            # Each writer's records appear newest first
            for writer in range(self.WRITERS):
                prefix = f"w{writer}-"
                indices = [int(r.title[len(prefix):]) for r in snap if r.title.startswith(prefix)]
                assert indices == sorted(indices, reverse=True)
