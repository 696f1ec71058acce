# VaultWatch - Main Package
#
# Credential vault with per-record strength scoring and a vault-wide
# security report (overall score, weak and duplicate passwords).

__version__ = "0.1.0"
__author__ = "VaultWatch Team"
__description__ = "Credential vault with security analysis"

from .core import (
    EventType,
    EventSeverity,
    get_audit_logger,
    get_settings,
)
from .vault import (
    CredentialRecord,
    CredentialStore,
    SecurityAggregator,
    StrengthEvaluator,
    ValidationError,
    filter_records,
)

__all__ = [
    "__version__",
    "EventType",
    "EventSeverity",
    "get_audit_logger",
    "get_settings",
    "CredentialRecord",
    "CredentialStore",
    "SecurityAggregator",
    "StrengthEvaluator",
    "ValidationError",
    "filter_records",
]
