# Vault - Password Strength Evaluation
#
# Six independent criteria, one point each, give a score in [0, 6]:
#   1. length >= 8
#   2. a lowercase letter
#   3. an uppercase letter
#   4. a digit
#   5. a character outside [A-Za-z0-9]
#   6. length >= 12
#
# Category: <=2 Weak, 3-4 Fair, 5 Good, 6 Strong.

import re
import secrets
import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..core.config import GENERATOR_MAX_LENGTH, GENERATOR_MIN_LENGTH, get_settings

MAX_SCORE = 6

# Alphabet used by the password generator
GENERATOR_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "!@#$%^&*"

_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
_SPECIAL = re.compile(r"[^A-Za-z0-9]")


class StrengthCategory(str, Enum):
    """Display category for a single secret."""

    WEAK = "Weak"
    FAIR = "Fair"
    GOOD = "Good"
    STRONG = "Strong"


@dataclass(frozen=True)
class StrengthResult:
    """Score, category and improvement hints for one secret."""

    score: int
    category: StrengthCategory
    feedback: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "category": self.category.value,
            "feedback": list(self.feedback),
        }


def category_for_score(score: int) -> StrengthCategory:
    if score <= 2:
        return StrengthCategory.WEAK
    if score <= 4:
        return StrengthCategory.FAIR
    if score == 5:
        return StrengthCategory.GOOD
    return StrengthCategory.STRONG


class StrengthEvaluator:
    """Deterministic strength scoring of a single secret."""

    # (passes?, hint shown when the criterion fails)
    CRITERIA = (
        (lambda s: len(s) >= 8, "At least 8 characters"),
        (lambda s: _LOWER.search(s) is not None, "Include lowercase letters"),
        (lambda s: _UPPER.search(s) is not None, "Include uppercase letters"),
        (lambda s: _DIGIT.search(s) is not None, "Include numbers"),
        (lambda s: _SPECIAL.search(s) is not None, "Include special characters"),
        (lambda s: len(s) >= 12, None),
    )

    @staticmethod
    def evaluate(secret: str) -> StrengthResult:
        """
        Score a secret.

        Total function: the empty string scores 0 (Weak).
        """
        score = 0
        feedback = []
        for check, hint in StrengthEvaluator.CRITERIA:
            if check(secret):
                score += 1
            elif hint:
                feedback.append(hint)

        return StrengthResult(
            score=score,
            category=category_for_score(score),
            feedback=feedback,
        )


def evaluate_strength(secret: str) -> StrengthResult:
    """Convenience wrapper for StrengthEvaluator.evaluate()."""
    return StrengthEvaluator.evaluate(secret)


def generate_password(length: Optional[int] = None) -> str:
    """
    Generate a random password from GENERATOR_ALPHABET.

    Args:
        length: Password length (default: configured generator length)

    Raises:
        ValueError: If length is outside the generator bounds
    """
    if length is None:
        length = get_settings().generator_length

    if not GENERATOR_MIN_LENGTH <= length <= GENERATOR_MAX_LENGTH:
        raise ValueError(
            f"Password length must be between {GENERATOR_MIN_LENGTH} "
            f"and {GENERATOR_MAX_LENGTH}"
        )

    return "".join(secrets.choice(GENERATOR_ALPHABET) for _ in range(length))
