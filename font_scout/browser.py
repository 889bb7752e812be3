# File: font_scout/browser.py
"""
Browser engine: owns the Playwright driver for one batch and hands out
one Chromium instance per URL.

Usage::

    async with BrowserEngine(config) as engine:
        async with engine.launch() as browser:
            page = await browser.new_page()

The browser is closed on every exit from ``launch()``, including a task
cancelled by a deadline.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from playwright.async_api import Browser, Error as PlaywrightError, Playwright, async_playwright

from font_scout.config import ScannerConfig
from font_scout.errors import BrowserUnavailable, ScanFailed
from font_scout.logger import logger
from font_scout.models import FailureKind

__all__ = ["BrowserEngine"]


class BrowserEngine:
    """Batch-scoped Playwright driver with per-URL Chromium launches."""

    def __init__(self, config: ScannerConfig) -> None:
        self.config = config
        self._playwright: Optional[Playwright] = None

    async def __aenter__(self) -> BrowserEngine:
        try:
            self._playwright = await async_playwright().start()
        except Exception as exc:
            raise BrowserUnavailable(f"Cannot start the browser engine: {exc}") from exc
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

    def _launch_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {
            "headless": self.config.headless,
            "args": list(self.config.browser_args),
        }
        if self.config.executable_path:
            options["executable_path"] = self.config.executable_path
        return options

    @asynccontextmanager
    async def launch(self) -> AsyncIterator[Browser]:
        """Launch a fresh Chromium, yield it and always close it."""
        if self._playwright is None:
            raise RuntimeError("BrowserEngine is not started")
        try:
            browser = await self._playwright.chromium.launch(**self._launch_options())
        except PlaywrightError as exc:
            raise ScanFailed(FailureKind.LAUNCH_ERROR, str(exc)) from exc
        try:
            yield browser
        finally:
            try:
                await browser.close()
            except PlaywrightError as exc:
                logger.warning("Failed to close browser: %s", exc)
