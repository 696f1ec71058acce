"""
Shared pytest fixtures for the VaultWatch test suite.

Autouse fixtures below isolate tests from the live application data:
  - Audit logger   -> temp directory  (prevents test events in ./audit_logs)
  - Settings       -> reloaded per test from a clean environment
  - Vault store    -> fresh in-memory store per test
  - Session state  -> logged out at the start of every test
"""

import pytest


@pytest.fixture(autouse=True)
def _isolate_settings(tmp_path, monkeypatch):
    """Point configuration at temp paths and drop any cached Settings."""
    import vaultwatch.core.config as config_mod

    for name in (
        "VAULTWATCH_AUTH_URL",
        "VAULTWATCH_AUTH_TIMEOUT",
        "VAULTWATCH_STORAGE",
        "VAULTWATCH_GENERATOR_LENGTH",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("VAULTWATCH_AUDIT_DIR", str(tmp_path / "audit_logs"))
    monkeypatch.setenv("VAULTWATCH_DB_PATH", str(tmp_path / "vault.db"))

    config_mod.reset_settings()
    yield
    config_mod.reset_settings()


@pytest.fixture(autouse=True)
def _isolate_audit_logs(_isolate_settings):
    """Reset the global AuditLogger so each test logs into its own tmp dir.

    Without this, any test that (directly or indirectly) calls
    ``get_audit_logger().log_event(...)`` writes into the real
    ``./audit_logs/`` directory.
    """
    import vaultwatch.core.audit_log as audit_mod

    old_logger = audit_mod._audit_logger
    audit_mod._audit_logger = None

    yield

    if audit_mod._audit_logger is not None:
        audit_mod._audit_logger.close()
    audit_mod._audit_logger = old_logger


@pytest.fixture(autouse=True)
def _isolate_api_state():
    """Fresh credential store and logged-out session for every test."""
    from vaultwatch.api import set_session_manager, set_store

    set_store(None)
    set_session_manager(None)
    yield
    set_store(None)
    set_session_manager(None)
