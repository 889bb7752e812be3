# === FILE: font_scout/scanner.py ===
"""
URL scanner: one browser lifecycle per URL.

States: Idle → Launching → NavigatingPage → ExtractingFonts → Matching →
Completed, or Failed from any of them. The whole scan races against
``config.scan_timeout``; an expired deadline is reported as
NavigationTimeout after the browser has been released.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from font_scout.catalog import Catalog
from font_scout.config import ScannerConfig
from font_scout.deadline import TimedOut, run_with_deadline
from font_scout.errors import ScanFailed
from font_scout.extractor import extract_fonts
from font_scout.logger import logger
from font_scout.matcher import match_catalog
from font_scout.models import FailureKind, ScanResult, ScanState

__all__ = ["ScanAttempt", "URLScanner"]

# failure kind for an unexpected error raised while in a given state
_FAILURE_BY_STATE: Dict[ScanState, FailureKind] = {
    ScanState.IDLE: FailureKind.LAUNCH_ERROR,
    ScanState.LAUNCHING: FailureKind.LAUNCH_ERROR,
    ScanState.NAVIGATING: FailureKind.NAVIGATION_ERROR,
    ScanState.EXTRACTING: FailureKind.EVALUATION_ERROR,
    ScanState.MATCHING: FailureKind.EVALUATION_ERROR,
}


@dataclass
class ScanAttempt:
    """Tracks the state of one URL scan."""

    url: str
    state: ScanState = ScanState.IDLE
    failure: Optional[FailureKind] = None
    history: List[ScanState] = field(default_factory=lambda: [ScanState.IDLE])

    def advance(self, state: ScanState) -> None:
        if self.state.terminal:
            raise RuntimeError(f"Scan of {self.url} already finished in state {self.state.value}")
        logger.debug("%s: %s -> %s", self.url, self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def fail(self, kind: FailureKind) -> None:
        self.failure = kind
        self.advance(ScanState.FAILED)


class URLScanner:
    """Scans single URLs with a browser taken from *engine*."""

    def __init__(
        self,
        engine: Any,
        catalog: Catalog,
        config: ScannerConfig,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.engine = engine
        self.catalog = catalog
        self.config = config
        self._clock = clock or datetime.now

    async def scan(self, url: str) -> ScanResult:
        """Scan *url*. Never raises for URL-level failures; returns an error record instead."""
        result, _ = await self.scan_attempt(url)
        return result

    async def scan_attempt(self, url: str) -> Tuple[ScanResult, ScanAttempt]:
        """Like :meth:`scan`, also returning the state trace of this URL alone."""
        attempt = ScanAttempt(url)
        logger.info("Scanning %s", url)
        try:
            outcome = await run_with_deadline(self._run(attempt), self.config.scan_timeout)
        except ScanFailed as exc:
            return self._failed(attempt, exc.kind, exc.message), attempt

        if isinstance(outcome, TimedOut):
            message = f"deadline of {outcome.timeout:g}s elapsed in state {attempt.state.value}"
            return self._failed(attempt, FailureKind.NAVIGATION_TIMEOUT, message), attempt

        attempt.advance(ScanState.COMPLETED)
        result = outcome.value
        logger.info(
            "Finished %s: %d fonts, catalog: %s",
            url,
            len(result.detected_fonts),
            result.matched_catalog,
        )
        return result, attempt

    async def _run(self, attempt: ScanAttempt) -> ScanResult:
        url = attempt.url
        try:
            attempt.advance(ScanState.LAUNCHING)
            async with self.engine.launch() as browser:
                attempt.advance(ScanState.NAVIGATING)
                page = await browser.new_page()
                await page.goto(
                    url,
                    wait_until=self.config.wait_until,
                    timeout=self.config.navigation_timeout * 1000,
                )
                attempt.advance(ScanState.EXTRACTING)
                detected = await extract_fonts(page, self.config.max_elements)
            attempt.advance(ScanState.MATCHING)
            matched = match_catalog(
                detected, self.catalog, whole_words=self.config.match_whole_words
            )
        except ScanFailed:
            raise
        except PlaywrightTimeoutError as exc:
            kind = (
                FailureKind.NAVIGATION_TIMEOUT
                if attempt.state is ScanState.NAVIGATING
                else _FAILURE_BY_STATE[attempt.state]
            )
            raise ScanFailed(kind, str(exc)) from exc
        except Exception as exc:
            raise ScanFailed(_FAILURE_BY_STATE[attempt.state], str(exc) or type(exc).__name__) from exc

        return ScanResult.success(
            url, detected, matched, now=self._clock(), none_label=self.config.no_match_label
        )

    def _failed(self, attempt: ScanAttempt, kind: FailureKind, message: str) -> ScanResult:
        attempt.fail(kind)
        logger.error("Error scanning %s (%s): %s", attempt.url, kind.value, message)
        return ScanResult.failure(attempt.url, kind, message, now=self._clock())
