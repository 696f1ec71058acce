# Vault - Security Report
#
# Summarizes the security posture of the whole vault:
#   1. Overall score (0-100) from every record's strength score
#   2. Status label (Excellent / Good / Fair / Poor)
#   3. Weak records (strength score <= 3)
#   4. Duplicate groups (two or more records sharing one secret)
#   5. Recommendations driven by 3 and 4
#
# Everything is recomputed from the snapshot passed in; nothing is cached.
#
# The weak-record threshold (<= 3) is one point looser than the Weak display
# category (<= 2). It drives the "needs attention" recommendation, not the
# per-record badge.

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Sequence

from .models import CredentialRecord
from .strength import MAX_SCORE, StrengthCategory, StrengthEvaluator

WEAK_SCORE_THRESHOLD = 3
EMPTY_VAULT_SCORE = 100


# ── Enums ────────────────────────────────────────────────────────────

class SecurityStatus(str, Enum):
    """Status label derived from the overall score."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


class RecommendationKind(str, Enum):
    WEAK_PASSWORDS = "weak_passwords"
    DUPLICATE_PASSWORDS = "duplicate_passwords"


# Inclusive lower bounds, checked in descending order
_STATUS_THRESHOLDS = (
    (80, SecurityStatus.EXCELLENT),
    (60, SecurityStatus.GOOD),
    (40, SecurityStatus.FAIR),
)


# ── Data structures ──────────────────────────────────────────────────

@dataclass
class DuplicateGroup:
    """Records sharing one identical secret."""

    secret: str
    titles: List[str] = field(default_factory=list)
    record_ids: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.titles)

    def to_dict(self, include_secret: bool = False) -> Dict[str, Any]:
        d = {
            "titles": list(self.titles),
            "record_ids": list(self.record_ids),
            "count": self.count,
        }
        if include_secret:
            d["secret"] = self.secret
        return d


@dataclass
class Recommendation:
    kind: RecommendationKind
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message}


@dataclass
class SecurityReport:
    """Complete vault security summary."""

    total_records: int = 0
    overall_score: int = EMPTY_VAULT_SCORE
    status: SecurityStatus = SecurityStatus.EXCELLENT
    weak_records: List[CredentialRecord] = field(default_factory=list)
    duplicates: List[DuplicateGroup] = field(default_factory=list)
    recommendations: List[Recommendation] = field(default_factory=list)
    category_counts: Dict[str, int] = field(default_factory=dict)
    generated_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_dict(self, include_secrets: bool = False) -> Dict[str, Any]:
        return {
            "total_records": self.total_records,
            "overall_score": self.overall_score,
            "status": self.status.value,
            "weak_records": [
                r.to_dict(include_secret=include_secrets) for r in self.weak_records
            ],
            "weak_count": len(self.weak_records),
            "duplicates": [
                g.to_dict(include_secret=include_secrets) for g in self.duplicates
            ],
            "duplicate_count": len(self.duplicates),
            "recommendations": [r.to_dict() for r in self.recommendations],
            "category_counts": dict(self.category_counts),
            "generated_at": self.generated_at,
        }


# ── Helper functions ─────────────────────────────────────────────────

def _round_half_up(value: float) -> int:
    """Round .5 upwards (round() would round 12.5 down to 12)."""
    return int(math.floor(value + 0.5))


# ── Aggregator ───────────────────────────────────────────────────────

class SecurityAggregator:
    """Vault-wide security metrics computed from a record snapshot."""

    @staticmethod
    def overall_score(records: Sequence[CredentialRecord]) -> int:
        """
        Overall score in [0, 100].

        An empty vault scores 100.
        """
        if not records:
            return EMPTY_VAULT_SCORE

        total = sum(StrengthEvaluator.evaluate(r.secret).score for r in records)
        return _round_half_up(total * 100 / (MAX_SCORE * len(records)))

    @staticmethod
    def status(score: int) -> SecurityStatus:
        for threshold, status in _STATUS_THRESHOLDS:
            if score >= threshold:
                return status
        return SecurityStatus.POOR

    @staticmethod
    def weak_records(records: Sequence[CredentialRecord]) -> List[CredentialRecord]:
        """Records scoring <= 3, in snapshot order."""
        return [
            r for r in records
            if StrengthEvaluator.evaluate(r.secret).score <= WEAK_SCORE_THRESHOLD
        ]

    @staticmethod
    def duplicate_groups(records: Sequence[CredentialRecord]) -> List[DuplicateGroup]:
        """
        Group records by exact secret in a single pass.

        Groups appear in order of first occurrence; titles within a group
        follow snapshot order. Secrets used only once are dropped.
        """
        groups: Dict[str, DuplicateGroup] = {}
        for record in records:
            group = groups.get(record.secret)
            if group is None:
                group = groups[record.secret] = DuplicateGroup(secret=record.secret)
            group.titles.append(record.title)
            group.record_ids.append(record.id)

        return [g for g in groups.values() if g.count > 1]

    @staticmethod
    def recommendations(
        weak: Sequence[CredentialRecord],
        duplicates: Sequence[DuplicateGroup],
    ) -> List[Recommendation]:
        result = []
        if weak:
            result.append(Recommendation(
                kind=RecommendationKind.WEAK_PASSWORDS,
                message=f"Consider strengthening {len(weak)} weak password(s)",
            ))
        if duplicates:
            result.append(Recommendation(
                kind=RecommendationKind.DUPLICATE_PASSWORDS,
                message=(
                    f"Found {len(duplicates)} duplicate password(s) - "
                    "use unique passwords for each account"
                ),
            ))
        return result

    @staticmethod
    def category_counts(records: Sequence[CredentialRecord]) -> Dict[str, int]:
        counts = {c.value: 0 for c in StrengthCategory}
        for record in records:
            counts[StrengthEvaluator.evaluate(record.secret).category.value] += 1
        return counts

    @classmethod
    def report(cls, records: Sequence[CredentialRecord]) -> SecurityReport:
        """Build the full report from one snapshot."""
        records = list(records)
        score = cls.overall_score(records)
        weak = cls.weak_records(records)
        duplicates = cls.duplicate_groups(records)

        return SecurityReport(
            total_records=len(records),
            overall_score=score,
            status=cls.status(score),
            weak_records=weak,
            duplicates=duplicates,
            recommendations=cls.recommendations(weak, duplicates),
            category_counts=cls.category_counts(records),
        )


def build_security_report(records: Sequence[CredentialRecord]) -> SecurityReport:
    """Convenience wrapper for SecurityAggregator.report()."""
    return SecurityAggregator.report(records)
