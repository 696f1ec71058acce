"""
Tests for vault API endpoints.

Uses FastAPI TestClient. Auth bypassed via dependency_overrides for the
route tests; TestVaultAuth exercises the real session check.
"""

import pytest
from fastapi.testclient import TestClient

from vaultwatch.api import SessionManager, get_store, set_session_manager
from vaultwatch.api.main import app
from vaultwatch.api.security import verify_session_token
from vaultwatch.auth import SessionContext


@pytest.fixture
def client():
    """TestClient with auth bypass."""
    app.dependency_overrides[verify_session_token] = (
        lambda: SessionContext(username="tester", logged_in=True, token="test-token")
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def unauth_client():
    """TestClient without auth."""
    app.dependency_overrides.pop(verify_session_token, None)
    return TestClient(app)


def _add(client, title, secret="Abcdefgh1!", username="user", **extra):
    resp = client.post("/api/vault/records", json={
        "title": title, "username": username, "secret": secret, **extra,
    })
    assert resp.status_code == 200, resp.text
    return resp.json()["record"]


class TestVaultAuth:
    def test_requires_login(self, unauth_client):
        resp = unauth_client.get("/api/vault/records")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Not logged in"

    def test_missing_header(self, unauth_client):
        manager = SessionManager()
        manager.start(SessionContext(username="alice", logged_in=True))
        set_session_manager(manager)

        resp = unauth_client.get("/api/vault/records")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Missing X-Session-Token header"

    def test_wrong_token(self, unauth_client):
        manager = SessionManager()
        manager.start(SessionContext(username="alice", logged_in=True))
        set_session_manager(manager)

        resp = unauth_client.get(
            "/api/vault/records", headers={"X-Session-Token": "wrong"}
        )
        assert resp.status_code == 401

    def test_valid_token(self, unauth_client):
        manager = SessionManager()
        token = manager.start(SessionContext(username="alice", logged_in=True))
        set_session_manager(manager)

        resp = unauth_client.get(
            "/api/vault/records", headers={"X-Session-Token": token}
        )
        assert resp.status_code == 200
        assert resp.json() == {"records": [], "count": 0}


class TestRecordRoutes:
    def test_add_hides_secret(self, client):
        record = _add(client, "Gmail", website="https://gmail.com")
        assert record["title"] == "Gmail"
        assert record["website"] == "https://gmail.com"
        assert "secret" not in record
        assert len(get_store().list()) == 1

    def test_add_missing_field_rejected(self, client):
        resp = client.post("/api/vault/records", json={"title": "A", "username": "u"})
        assert resp.status_code == 422
        assert get_store().list() == []

    def test_add_empty_field_rejected(self, client):
        resp = client.post(
            "/api/vault/records",
            json={"title": "A", "username": "", "secret": "s"},
        )
        assert resp.status_code == 422
        assert get_store().list() == []

    def test_add_long_title_accepted(self, client):
        record = _add(client, "x" * 500)
        assert record["title"] == "x" * 500

    def test_list_newest_first_with_strength(self, client):
        _add(client, "A", secret="abc")
        _add(client, "B", secret="Abcdefghijkl1!")

        data = client.get("/api/vault/records").json()
        assert data["count"] == 2
        assert [r["title"] for r in data["records"]] == ["B", "A"]
        assert data["records"][0]["strength"] == "Strong"
        assert data["records"][1]["strength_score"] == 1
        assert all("secret" not in r for r in data["records"])

    def test_list_search(self, client):
        _add(client, "my gmail account")
        _add(client, "Netflix")

        data = client.get("/api/vault/records", params={"q": "GMAIL"}).json()
        assert [r["title"] for r in data["records"]] == ["my gmail account"]

    def test_get_includes_secret(self, client):
        record = _add(client, "A", secret="Abcdefgh1!")
        data = client.get(f"/api/vault/records/{record['id']}").json()
        assert data["secret"] == "Abcdefgh1!"
        assert data["strength"]["category"] == "Good"

    def test_get_missing(self, client):
        resp = client.get("/api/vault/records/nope")
        assert resp.status_code == 404

    def test_delete(self, client):
        record = _add(client, "A")
        resp = client.delete(f"/api/vault/records/{record['id']}")
        assert resp.json() == {"success": True, "removed": True}
        assert get_store().list() == []

    def test_delete_missing_is_not_error(self, client):
        _add(client, "A")
        resp = client.delete("/api/vault/records/nope")
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "removed": False}
        assert len(get_store().list()) == 1


class TestSecurityRoute:
    def test_empty_vault(self, client):
        data = client.get("/api/vault/security").json()
        assert data["overall_score"] == 100
        assert data["status"] == "Excellent"
        assert data["weak_records"] == []
        assert data["duplicates"] == []
        assert data["recommendations"] == []

    def test_duplicates_reported_without_secret(self, client):
        _add(client, "A", secret="x")
        _add(client, "B", secret="x")
        _add(client, "C", secret="y")

        data = client.get("/api/vault/security").json()
        assert data["duplicate_count"] == 1
        group = data["duplicates"][0]
        assert group["titles"] == ["B", "A"]
        assert "secret" not in group
        assert data["weak_count"] == 3
        assert len(data["recommendations"]) == 2


class TestToolRoutes:
    def test_strength(self, client):
        resp = client.post("/api/vault/strength", json={"secret": "Abcdefghijkl1!"})
        assert resp.json()["score"] == 6
        assert resp.json()["category"] == "Strong"

    def test_generate_default(self, client):
        data = client.get("/api/vault/generate").json()
        assert len(data["password"]) == 16
        assert "category" in data["strength"]

    def test_generate_length(self, client):
        data = client.get("/api/vault/generate", params={"length": 24}).json()
        assert len(data["password"]) == 24

    def test_generate_out_of_bounds(self, client):
        resp = client.get("/api/vault/generate", params={"length": 4})
        assert resp.status_code == 422


class TestStoreBackend:
    def test_sqlite_backend_from_settings(self, monkeypatch, tmp_path):
        from vaultwatch.core import reset_settings
        from vaultwatch.vault import SQLiteRecordStorage

        monkeypatch.setenv("VAULTWATCH_STORAGE", "sqlite")
        monkeypatch.setenv("VAULTWATCH_DB_PATH", str(tmp_path / "api.db"))
        reset_settings()

        store = get_store()
        try:
            assert isinstance(store.storage, SQLiteRecordStorage)
        finally:
            store.storage.close()
