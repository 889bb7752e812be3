# File: tests/test_scanner.py
import asyncio

import pytest
from helpers import FakeEngine, FakeSite, cross_origin_error
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from font_scout.config import ScannerConfig
from font_scout.models import ERROR_LABEL, FailureKind, ScanState
from font_scout.scanner import URLScanner

GOOD_URL = "https://good.example/"


def make_scanner(engine, catalog, config, clock):
    return URLScanner(engine, catalog, config, clock=clock)


@pytest.mark.asyncio()
async def test_successful_scan_walks_every_state(basic_config, catalog, fixed_clock):
    engine = FakeEngine(
        {GOOD_URL: FakeSite(dom_fonts=['"Recoleta Bold", serif'], stylesheets=[cross_origin_error()])}
    )
    scanner = make_scanner(engine, catalog, basic_config, fixed_clock)

    result, attempt = await scanner.scan_attempt(GOOD_URL)

    assert result.ok
    assert result.detected_fonts == ("Recoleta Bold, serif",)
    assert result.matched_catalog == "Recoleta"
    assert result.date == "2024-05-17"
    assert attempt.history == [
        ScanState.IDLE,
        ScanState.LAUNCHING,
        ScanState.NAVIGATING,
        ScanState.EXTRACTING,
        ScanState.MATCHING,
        ScanState.COMPLETED,
    ]
    assert engine.launches == 1
    assert engine.closes == 1


@pytest.mark.asyncio()
async def test_navigation_uses_configured_wait_and_timeout(catalog, fixed_clock):
    config = ScannerConfig(navigation_timeout=12.5, wait_until="networkidle")
    engine = FakeEngine({GOOD_URL: FakeSite(dom_fonts=["Texta"])})
    await make_scanner(engine, catalog, config, fixed_clock).scan(GOOD_URL)

    call = engine.pages[0].goto_calls[0]
    assert call == {"url": GOOD_URL, "wait_until": "networkidle", "timeout": 12500.0}


@pytest.mark.asyncio()
async def test_no_match_uses_configured_label(catalog, fixed_clock):
    config = ScannerConfig(no_match_label="None")
    engine = FakeEngine({GOOD_URL: FakeSite(dom_fonts=["Helvetica, sans-serif"])})
    result = await make_scanner(engine, catalog, config, fixed_clock).scan(GOOD_URL)
    assert result.ok
    assert result.matched_catalog == "None"


@pytest.mark.asyncio()
async def test_deadline_timeout_releases_browser_once(basic_config, catalog, fixed_clock):
    engine = FakeEngine({GOOD_URL: FakeSite(goto_delay=5.0)})
    scanner = make_scanner(engine, catalog, basic_config, fixed_clock)

    result, attempt = await scanner.scan_attempt(GOOD_URL)

    assert not result.ok
    assert result.matched_catalog == ERROR_LABEL
    assert result.detected_fonts == ()
    assert result.error.startswith("NavigationTimeout")
    assert attempt.failure is FailureKind.NAVIGATION_TIMEOUT
    assert attempt.state is ScanState.FAILED
    assert engine.launches == 1
    assert engine.closes == 1
    assert engine.in_flight == 0


@pytest.mark.asyncio()
async def test_playwright_navigation_timeout(basic_config, catalog, fixed_clock):
    engine = FakeEngine(
        {GOOD_URL: FakeSite(goto_error=PlaywrightTimeoutError("Timeout 1000ms exceeded."))}
    )
    scanner = make_scanner(engine, catalog, basic_config, fixed_clock)
    result, attempt = await scanner.scan_attempt(GOOD_URL)
    assert attempt.failure is FailureKind.NAVIGATION_TIMEOUT
    assert result.error == "NavigationTimeout: Timeout 1000ms exceeded."
    assert engine.closes == 1


@pytest.mark.asyncio()
async def test_navigation_error(basic_config, catalog, fixed_clock):
    engine = FakeEngine(
        {GOOD_URL: FakeSite(goto_error=PlaywrightError("net::ERR_NAME_NOT_RESOLVED"))}
    )
    scanner = make_scanner(engine, catalog, basic_config, fixed_clock)
    result, attempt = await scanner.scan_attempt(GOOD_URL)
    assert attempt.failure is FailureKind.NAVIGATION_ERROR
    assert "ERR_NAME_NOT_RESOLVED" in result.error
    assert engine.closes == 1


@pytest.mark.asyncio()
async def test_evaluation_error(basic_config, catalog, fixed_clock):
    engine = FakeEngine({GOOD_URL: FakeSite(dom_error=PlaywrightError("Target closed"))})
    scanner = make_scanner(engine, catalog, basic_config, fixed_clock)
    result, attempt = await scanner.scan_attempt(GOOD_URL)
    assert attempt.failure is FailureKind.EVALUATION_ERROR
    assert result.matched_catalog == ERROR_LABEL
    assert engine.closes == 1


@pytest.mark.asyncio()
async def test_launch_error_has_nothing_to_release(basic_config, catalog, fixed_clock):
    engine = FakeEngine({GOOD_URL: FakeSite(dom_fonts=["Texta"])}, launch_failures=1)
    scanner = make_scanner(engine, catalog, basic_config, fixed_clock)
    result, attempt = await scanner.scan_attempt(GOOD_URL)
    assert attempt.failure is FailureKind.LAUNCH_ERROR
    assert result.error.startswith("LaunchError")
    assert engine.closes == 0
    assert attempt.history[-2:] == [ScanState.LAUNCHING, ScanState.FAILED]


@pytest.mark.asyncio()
async def test_concurrent_scans_keep_separate_attempts(basic_config, catalog, fixed_clock):
    slow_url = "https://slow.example/"
    engine = FakeEngine(
        {
            GOOD_URL: FakeSite(dom_fonts=["Forma"]),
            slow_url: FakeSite(goto_error=PlaywrightError("net::ERR_CONNECTION_RESET"), goto_delay=0.05),
        }
    )
    scanner = make_scanner(engine, catalog, basic_config, fixed_clock)

    (slow_result, slow_attempt), (good_result, good_attempt) = await asyncio.gather(
        scanner.scan_attempt(slow_url), scanner.scan_attempt(GOOD_URL)
    )

    assert slow_attempt.url == slow_url
    assert slow_attempt.failure is FailureKind.NAVIGATION_ERROR
    assert not slow_result.ok
    assert good_attempt.url == GOOD_URL
    assert good_attempt.state is ScanState.COMPLETED
    assert good_attempt.failure is None
    assert good_result.matched == ("Forma",)
    assert engine.launches == engine.closes == 2
