"""
passgauge.dispatcher

StrengthDispatcher: routes a password to the selected backend and times it.

evaluate(password, backend=None) never raises for backend trouble: blank
input is TOO_GUESSABLE without touching a backend, and any backend error or
unusable output degrades to VERY_GUESSABLE.
"""

import logging
import time
from typing import Dict, Mapping, Optional

from .backends import BackendChoice, StrengthBackend, ZxcvbnBackend
from .sandbox import SandboxBackend
from .script import ScriptTemplate
from .strength import EvaluationResult, FALLBACK_STRENGTH, PasswordStrength
from .webview import WebViewBackend

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def default_backends(bundle_path: Optional[str] = None, user_inputs=None) -> Dict[BackendChoice, StrengthBackend]:
    template = ScriptTemplate.load(bundle_path)
    return {
        BackendChoice.NATIVE: ZxcvbnBackend(user_inputs=user_inputs),
        BackendChoice.WEBVIEW: WebViewBackend(template),
        BackendChoice.JS_ENGINE: SandboxBackend(template),
    }


class StrengthDispatcher:
    def __init__(self, backends: Mapping[BackendChoice, StrengthBackend],
                 selected: BackendChoice = BackendChoice.NATIVE):
        if selected not in backends:
            raise ValueError(f"no backend registered for {selected.label}")
        self._backends = dict(backends)
        self._selected = selected
        self._closed = False

    @classmethod
    def from_config(cls, cfg: Mapping) -> "StrengthDispatcher":
        backends = default_backends(cfg.get("script_bundle_path"), cfg.get("user_inputs"))
        try:
            selected = BackendChoice.from_name(cfg.get("default_backend") or "native")
        except ValueError as e:
            logger.warning("%s; falling back to %s", e, BackendChoice.NATIVE.label)
            selected = BackendChoice.NATIVE
        return cls(backends, selected)

    @property
    def selected(self) -> BackendChoice:
        return self._selected

    @selected.setter
    def selected(self, choice: BackendChoice) -> None:
        if choice not in self._backends:
            raise ValueError(f"no backend registered for {choice.label}")
        if choice is not self._selected:
            logger.info("Backend switched: %s -> %s", self._selected.label, choice.label)
        self._selected = choice

    def backend(self, choice: BackendChoice) -> StrengthBackend:
        return self._backends[choice]

    async def evaluate(self, password: str, backend: Optional[BackendChoice] = None) -> EvaluationResult:
        start = time.perf_counter()
        if not password or password.isspace():
            return EvaluationResult(PasswordStrength.TOO_GUESSABLE, _elapsed_ms(start))

        choice = backend or self._selected
        try:
            strength = await self._backends[choice].measure(password)
        except Exception as e:
            # the password itself is never logged
            logger.warning("%s backend failed (%s: %s); using %s",
                           choice.label, type(e).__name__, e, FALLBACK_STRENGTH.name)
            strength = FALLBACK_STRENGTH
        return EvaluationResult(strength, _elapsed_ms(start))

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for choice, backend in self._backends.items():
            try:
                backend.close()
            except Exception:
                logger.exception("Failed to close %s backend", choice.label)
