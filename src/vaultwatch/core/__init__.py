# Core Module - Shared Utilities
#
# Core module provides shared functionality across all VaultWatch modules:
# - Audit logging
# - Configuration

from .audit_log import (
    AuditLogger,
    EventSeverity,
    EventType,
    get_audit_logger,
    log_security_event,
)
from .config import (
    Settings,
    get_settings,
    load_settings,
    reset_settings,
)

__all__ = [
    # Audit Logging
    "AuditLogger",
    "EventType",
    "EventSeverity",
    "get_audit_logger",
    "log_security_event",
    # Configuration
    "Settings",
    "get_settings",
    "load_settings",
    "reset_settings",
]
