"""
passgauge.backends

Strength backends behind one interface:
- StrengthBackend: base class; async measure(password) -> PasswordStrength
- ZxcvbnBackend: the zxcvbn Python library
- BackendChoice: the user-selectable strategies and their labels

The script backends live in webview.py and sandbox.py.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from zxcvbn import zxcvbn

from .errors import BackendUnavailable
from .strength import PasswordStrength, parse_score

logger = logging.getLogger(__name__)


class BackendChoice(Enum):
    NATIVE = "Native"
    WEBVIEW = "WebView"
    JS_ENGINE = "JSEngine"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, text: str) -> "BackendChoice":
        """Look up a choice by enum name or label, ignoring case."""
        key = str(text).strip().lower()
        for choice in cls:
            if key in (choice.name.lower(), choice.value.lower()):
                return choice
        raise ValueError(f"unknown backend: {text!r}")


class StrengthBackend(ABC):
    """
    Base for all backends.

    Subclasses implement raw_score(); measure() turns its output into a
    PasswordStrength and raises UnparsableScore when it cannot. Blocking
    calls go through run_blocking(), which uses one worker thread per
    backend so an engine context is only ever touched from one thread.
    """

    name = "backend"

    def __init__(self):
        self._executor: Optional[ThreadPoolExecutor] = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def measure(self, password: str) -> PasswordStrength:
        if self._closed:
            raise BackendUnavailable(f"{self.name} backend is closed")
        raw = await self.raw_score(password)
        return PasswordStrength(parse_score(raw))

    @abstractmethod
    async def raw_score(self, password: str) -> Any:
        ...

    async def run_blocking(self, fn: Callable, *args) -> Any:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"passgauge-{self.name}")
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, fn, *args)

    def close(self) -> None:
        """Release the backend's resources. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self.release()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def release(self) -> None:
        """Hook for subclasses holding an execution context."""


# zxcvbn refuses longer input; only the prefix is scored
MAX_PASSWORD_LENGTH = 72


class ZxcvbnBackend(StrengthBackend):
    name = "native"

    def __init__(self, user_inputs: Optional[Iterable[str]] = None):
        super().__init__()
        self.user_inputs = list(user_inputs or [])

    def _score_sync(self, password: str) -> int:
        return zxcvbn(password[:MAX_PASSWORD_LENGTH], user_inputs=self.user_inputs)["score"]

    async def raw_score(self, password: str) -> Any:
        return await self.run_blocking(self._score_sync, password)
