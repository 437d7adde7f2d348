"""
passgauge.webview

WebView backend: runs the zxcvbn-ts script inside an embedded browser page
(Qt WebEngine). Must be used from the Qt thread with a QApplication alive;
the GUI runs asyncio on top of Qt so callbacks land on the same loop.
"""

import asyncio
import logging
from functools import partial
from typing import Any, Callable, Optional

from .backends import StrengthBackend
from .errors import BackendUnavailable
from .script import DEFAULT_SCRIPT_TIMEOUT, ScriptTemplate

logger = logging.getLogger(__name__)


def _default_page():
    try:
        from PySide6.QtWebEngineCore import QWebEnginePage
    except ImportError as e:
        raise BackendUnavailable(f"Qt WebEngine is not available: {e}") from e
    return QWebEnginePage()


def _resolve(future: asyncio.Future, result: Any) -> None:
    if not future.done():
        future.set_result(result)


def _deliver(loop: asyncio.AbstractEventLoop, future: asyncio.Future, result: Any) -> None:
    # a late callback (after a timeout) may arrive once the loop is gone
    if not loop.is_closed():
        loop.call_soon_threadsafe(_resolve, future, result)


class WebViewBackend(StrengthBackend):
    name = "webview"

    def __init__(self, template: ScriptTemplate, page_factory: Optional[Callable[[], Any]] = None,
                 timeout: float = DEFAULT_SCRIPT_TIMEOUT):
        super().__init__()
        self.template = template
        self.timeout = timeout
        self._page_factory = page_factory or _default_page
        self._page = None
        self._page_lock = asyncio.Lock()

    @property
    def page_created(self) -> bool:
        return self._page is not None

    async def _run_script(self, page, script: str) -> Any:
        loop = asyncio.get_running_loop()
        future = loop.create_future()
        # the callback may fire from Qt's side; hop back onto the loop
        page.runJavaScript(script, 0, partial(_deliver, loop, future))
        return await asyncio.wait_for(future, self.timeout)

    async def _ensure_page(self):
        async with self._page_lock:
            if self._page is None:
                bundle = self.template.bundle_source
                page = self._page_factory()
                try:
                    await self._run_script(page, bundle)
                except BaseException:
                    page.deleteLater()
                    raise
                self._page = page
                logger.info("Created web view page")
        return self._page

    async def raw_score(self, password: str) -> Any:
        page = await self._ensure_page()
        return await self._run_script(page, self.template.render(password))

    def release(self) -> None:
        page, self._page = self._page, None
        if page is not None:
            page.deleteLater()
            logger.info("Released web view page")
