# Vault Module - Credential Vault and Security Analysis
#
# In-memory credential store (pluggable storage), per-record strength
# scoring, vault-wide security report and search filter.

from .credential_store import CredentialStore
from .models import CredentialRecord, ValidationError
from .search import filter_records, matches_query
from .security_report import (
    DuplicateGroup,
    Recommendation,
    RecommendationKind,
    SecurityAggregator,
    SecurityReport,
    SecurityStatus,
    build_security_report,
)
from .storage import InMemoryRecordStorage, RecordStorage, SQLiteRecordStorage
from .strength import (
    StrengthCategory,
    StrengthEvaluator,
    StrengthResult,
    evaluate_strength,
    generate_password,
)

__all__ = [
    "CredentialStore",
    "CredentialRecord",
    "ValidationError",
    "RecordStorage",
    "InMemoryRecordStorage",
    "SQLiteRecordStorage",
    "StrengthCategory",
    "StrengthEvaluator",
    "StrengthResult",
    "evaluate_strength",
    "generate_password",
    "SecurityAggregator",
    "SecurityReport",
    "SecurityStatus",
    "DuplicateGroup",
    "Recommendation",
    "RecommendationKind",
    "build_security_report",
    "filter_records",
    "matches_query",
]
