"""
passgauge.sandbox

JSEngine backend: runs the zxcvbn-ts script inside a V8 isolate (mini-racer).

The context is created on first use, gets the bundle evaluated into it once,
and is closed exactly once when the backend is closed. All calls into the
context happen on the backend's single worker thread.
"""

import logging
from typing import Any, Callable, Optional

from py_mini_racer import MiniRacer

from .backends import StrengthBackend
from .script import DEFAULT_SCRIPT_TIMEOUT, ScriptTemplate

logger = logging.getLogger(__name__)


class SandboxBackend(StrengthBackend):
    name = "jsengine"

    def __init__(self, template: ScriptTemplate, context_factory: Optional[Callable[[], Any]] = None,
                 timeout: float = DEFAULT_SCRIPT_TIMEOUT):
        super().__init__()
        self.template = template
        self.timeout = timeout
        self._context_factory = context_factory or MiniRacer
        self._context = None

    @property
    def context_created(self) -> bool:
        return self._context is not None

    @property
    def _timeout_ms(self) -> int:
        # mini-racer takes milliseconds
        return int(self.timeout * 1000)

    def _ensure_context(self):
        if self._context is None:
            bundle = self.template.bundle_source
            ctx = self._context_factory()
            try:
                ctx.eval(bundle, timeout=self._timeout_ms)
            except Exception:
                ctx.close()
                raise
            self._context = ctx
            logger.info("Created JS sandbox context")
        return self._context

    def _eval_sync(self, password: str) -> Any:
        return self._ensure_context().eval(self.template.render(password), timeout=self._timeout_ms)

    async def raw_score(self, password: str) -> Any:
        return await self.run_blocking(self._eval_sync, password)

    def _close_context(self) -> None:
        ctx, self._context = self._context, None
        if ctx is not None:
            ctx.close()
            logger.info("Closed JS sandbox context")

    def release(self) -> None:
        if self._context is None:
            return
        if self._executor is not None:
            self._executor.submit(self._close_context).result()
        else:
            self._close_context()
