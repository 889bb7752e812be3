"""In-memory stand-ins for the Playwright engine, browser and page."""
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from playwright.async_api import Error as PlaywrightError

from font_scout.errors import BrowserUnavailable, ScanFailed
from font_scout.extractor import DOM_FONTS_JS, STYLESHEET_COUNT_JS, STYLESHEET_FONTS_JS
from font_scout.models import FailureKind


def cross_origin_error() -> PlaywrightError:
    return PlaywrightError(
        "SecurityError: Failed to read the 'cssRules' property from 'CSSStyleSheet'"
    )


@dataclass
class FakeSite:
    """What a URL renders to once loaded."""

    dom_fonts: List[str] = field(default_factory=list)
    stylesheets: List[Union[List[str], Exception]] = field(default_factory=list)
    goto_error: Optional[Exception] = None
    goto_delay: float = 0.0
    dom_error: Optional[Exception] = None


class FakePage:
    def __init__(self, sites: Dict[str, FakeSite]) -> None:
        self._sites = sites
        self.site: Optional[FakeSite] = None
        self.goto_calls: List[dict] = []

    async def goto(self, url: str, **kwargs) -> None:
        self.goto_calls.append({"url": url, **kwargs})
        site = self._sites.get(url, FakeSite())
        if site.goto_delay:
            await asyncio.sleep(site.goto_delay)
        if site.goto_error is not None:
            raise site.goto_error
        self.site = site

    async def evaluate(self, script: str, arg=None):
        site = self.site
        assert site is not None, "evaluate() before goto()"
        if script == DOM_FONTS_JS:
            if site.dom_error is not None:
                raise site.dom_error
            return site.dom_fonts[:arg]
        if script == STYLESHEET_COUNT_JS:
            return len(site.stylesheets)
        if script == STYLESHEET_FONTS_JS:
            sheet = site.stylesheets[arg]
            if isinstance(sheet, Exception):
                raise sheet
            return list(sheet)
        raise AssertionError(f"unexpected script: {script!r}")


class FakeBrowser:
    def __init__(self, engine: FakeEngine) -> None:
        self._engine = engine
        self.closed = 0

    async def new_page(self) -> FakePage:
        page = FakePage(self._engine.sites)
        self._engine.pages.append(page)
        return page

    async def close(self) -> None:
        self.closed += 1
        self._engine.closes += 1


class FakeEngine:
    """Counts launches and closes; the first ``launch_failures`` launches fail."""

    def __init__(
        self,
        sites: Optional[Dict[str, FakeSite]] = None,
        *,
        launch_failures: int = 0,
        start_error: Optional[str] = None,
    ) -> None:
        self.sites = sites or {}
        self.launch_failures = launch_failures
        self.start_error = start_error
        self.launches = 0
        self.closes = 0
        self.browsers: List[FakeBrowser] = []
        self.pages: List[FakePage] = []
        self.entered = 0
        self.exited = 0
        self.in_flight = 0
        self.max_in_flight = 0

    def __call__(self, config) -> FakeEngine:
        return self

    async def __aenter__(self) -> FakeEngine:
        if self.start_error is not None:
            raise BrowserUnavailable(self.start_error)
        self.entered += 1
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.exited += 1

    @asynccontextmanager
    async def launch(self):
        self.launches += 1
        if self.launches <= self.launch_failures:
            raise ScanFailed(FailureKind.LAUNCH_ERROR, "Executable doesn't exist")
        browser = FakeBrowser(self)
        self.browsers.append(browser)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            yield browser
        finally:
            self.in_flight -= 1
            await browser.close()
