"""
Headless Chromium session shared by capture and metadata extraction.

A BrowserSession owns one Playwright driver and one browser process. It is
started once per job and closed once, on every exit path. Browsing contexts
are handed out through ``context()`` and closed when the block exits.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional

from playwright.sync_api import Browser, BrowserContext, Playwright, sync_playwright

from .logging_utils import log


class BrowserNotStartedError(RuntimeError):
    """Raised when the browser is used before ``start()``."""

    def __init__(self, message: str = "Browser not initialized. Call start() first."):
        super().__init__(message)


class BrowserSession:
    """
    Explicit browser resource.

    Usage:
        with BrowserSession() as session:
            with session.context(viewport={"width": 430, "height": 932}) as ctx:
                page = ctx.new_page()
                ...
    """

    def __init__(self, headless: bool = True):
        self.headless = headless
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    @property
    def started(self) -> bool:
        return self._browser is not None

    @property
    def browser(self) -> Browser:
        if self._browser is None:
            raise BrowserNotStartedError()
        return self._browser

    def start(self) -> "BrowserSession":
        """Launch Chromium. Idempotent."""
        if self._browser is not None:
            return self
        self._playwright = sync_playwright().start()
        try:
            self._browser = self._playwright.chromium.launch(headless=self.headless)
        except Exception:
            self._playwright.stop()
            self._playwright = None
            raise
        log("Browser started")
        return self

    def close(self) -> None:
        """Close the browser and stop the driver. Safe to call repeatedly."""
        browser, self._browser = self._browser, None
        driver, self._playwright = self._playwright, None
        try:
            if browser is not None:
                browser.close()
                log("Browser closed")
        finally:
            if driver is not None:
                driver.stop()

    @contextmanager
    def context(self, **options: Any) -> Iterator[BrowserContext]:
        """Open an isolated browsing context; always closed on exit."""
        ctx = self.browser.new_context(**options)
        try:
            yield ctx
        finally:
            ctx.close()

    def __enter__(self) -> "BrowserSession":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
