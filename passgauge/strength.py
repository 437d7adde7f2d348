"""
passgauge.strength

Strength levels and the value object produced by one evaluation.

- parse_score(raw): strict conversion of backend output to an int in 0..4
- strength_from_score(raw): lenient conversion, VERY_GUESSABLE on bad input
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from .errors import UnparsableScore

MIN_SCORE = 0
MAX_SCORE = 4


class PasswordStrength(IntEnum):
    TOO_GUESSABLE = 0
    VERY_GUESSABLE = 1
    SOMEWHAT_GUESSABLE = 2
    SAFELY_UNGUESSABLE = 3
    VERY_UNGUESSABLE = 4

    @property
    def score(self) -> int:
        return int(self)

    @property
    def progress(self) -> float:
        """Fill fraction of the strength bar (0.0 .. 1.0)."""
        return self.score / MAX_SCORE

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").capitalize()


# Score used whenever a backend produces something we cannot trust.
FALLBACK_STRENGTH = PasswordStrength.VERY_GUESSABLE


def parse_score(raw: Any) -> int:
    """
    Convert raw backend output into an integer score.

    Accepts ints, integral floats (JS numbers come back as doubles) and
    decimal text. Text may carry the JSON quotes an embedded browser wraps
    string results in. Raises UnparsableScore for anything else, including
    integers outside 0..4.
    """
    if isinstance(raw, bool) or raw is None:
        raise UnparsableScore(raw)

    if isinstance(raw, int):
        score = raw
    elif isinstance(raw, float):
        if not raw.is_integer():
            raise UnparsableScore(raw)
        score = int(raw)
    elif isinstance(raw, (str, bytes)):
        text = raw.decode("utf-8", "replace") if isinstance(raw, bytes) else raw
        text = text.strip().strip('"').strip()
        try:
            score = int(text, 10)
        except ValueError:
            raise UnparsableScore(raw) from None
    else:
        raise UnparsableScore(raw)

    if not MIN_SCORE <= score <= MAX_SCORE:
        raise UnparsableScore(raw)
    return score


def strength_from_score(raw: Any) -> PasswordStrength:
    try:
        return PasswordStrength(parse_score(raw))
    except UnparsableScore:
        return FALLBACK_STRENGTH


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of one completed evaluation. Superseded, never updated."""

    strength: PasswordStrength
    calculation_time_ms: int


INITIAL_RESULT = EvaluationResult(PasswordStrength.TOO_GUESSABLE, 0)
