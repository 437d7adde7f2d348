"""passgauge: live password strength rating over interchangeable zxcvbn backends."""

from .strength import PasswordStrength, EvaluationResult, strength_from_score
from .backends import BackendChoice
from .dispatcher import StrengthDispatcher
from .pipeline import StrengthPipeline

__all__ = [
    "PasswordStrength",
    "EvaluationResult",
    "strength_from_score",
    "BackendChoice",
    "StrengthDispatcher",
    "StrengthPipeline",
]
