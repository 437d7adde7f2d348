"""
passgauge.errors

Exceptions raised by the backends. The dispatcher catches all of them and
falls back to VERY_GUESSABLE.
"""


class StrengthError(Exception):
    """Base class for passgauge errors."""


class UnparsableScore(StrengthError, ValueError):
    """Backend output is not an integer score in [0, 4]."""

    def __init__(self, raw):
        super().__init__(f"unparsable score: {raw!r}")
        self.raw = raw


class BackendUnavailable(StrengthError):
    """Backend is misconfigured or its engine cannot be created."""
