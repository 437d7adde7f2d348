"""
passgauge.pipeline

StrengthPipeline turns a stream of typed password values into evaluations.

- submit(password): debounced; only the last value after a quiet period is
  evaluated
- select_backend(choice): switches backend and re-evaluates right away
- only the result of the most recently issued request is applied; anything
  that finishes after being superseded is dropped, whatever order the
  backends complete in
"""

import asyncio
import logging
from typing import Callable, List, Optional

from .backends import BackendChoice
from .dispatcher import StrengthDispatcher
from .strength import EvaluationResult, INITIAL_RESULT

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE = 0.5  # seconds

ResultListener = Callable[[EvaluationResult], None]


class StrengthPipeline:
    def __init__(self, dispatcher: StrengthDispatcher, debounce: float = DEFAULT_DEBOUNCE,
                 on_result: Optional[ResultListener] = None):
        self.dispatcher = dispatcher
        self.debounce = debounce
        self._password = ""
        self._result = INITIAL_RESULT
        self._listeners: List[ResultListener] = []
        self._pending: Optional[asyncio.Task] = None
        self._inflight = set()
        self._issued = 0
        self._closed = False
        if on_result is not None:
            self._listeners.append(on_result)

    @property
    def password(self) -> str:
        return self._password

    @property
    def result(self) -> EvaluationResult:
        return self._result

    @property
    def selected(self) -> BackendChoice:
        return self.dispatcher.selected

    def on_result(self, listener: ResultListener) -> None:
        self._listeners.append(listener)

    # ----------------- requests -----------------
    def submit(self, password: str) -> Optional[asyncio.Task]:
        """Record a new password value and restart the quiet period."""
        if self._closed:
            return None
        self._password = password
        self._cancel_pending()
        self._pending = asyncio.ensure_future(self._debounced(password))
        return self._pending

    def select_backend(self, choice: BackendChoice) -> Optional[asyncio.Task]:
        """Switch backend and evaluate the current password immediately."""
        if self._closed:
            return None
        self.dispatcher.selected = choice
        return self.evaluate_now()

    def evaluate_now(self) -> Optional[asyncio.Task]:
        if self._closed:
            return None
        self._cancel_pending()
        return self._start(self._password, self.dispatcher.selected)

    # ----------------- internals -----------------
    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    async def _debounced(self, password: str) -> None:
        await asyncio.sleep(self.debounce)
        if self._pending is asyncio.current_task():
            self._pending = None
        await self._start(password, self.dispatcher.selected)

    def _start(self, password: str, choice: BackendChoice) -> asyncio.Task:
        self._issued += 1
        task = asyncio.ensure_future(self._evaluate(self._issued, password, choice))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    async def _evaluate(self, seq: int, password: str, choice: BackendChoice) -> None:
        result = await self.dispatcher.evaluate(password, choice)
        if seq != self._issued:
            logger.debug("Dropping stale result #%d (latest request is #%d)", seq, self._issued)
            return
        self._apply(result)

    def _apply(self, result: EvaluationResult) -> None:
        self._result = result
        for listener in list(self._listeners):
            try:
                listener(result)
            except Exception:
                logger.exception("Result listener failed")

    def close(self) -> None:
        """Cancel outstanding work and release the backends. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._cancel_pending()
        for task in list(self._inflight):
            task.cancel()
        self.dispatcher.close()
