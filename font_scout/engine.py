# File: font_scout/engine.py
"""font_scout.engine: Batch orchestration of URL scans with positional results."""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any, Callable, List, Optional

from pydantic import ValidationError

from font_scout.browser import BrowserEngine
from font_scout.catalog import Catalog
from font_scout.config import ScannerConfig
from font_scout.errors import InvalidInput
from font_scout.logger import logger
from font_scout.models import ScanRequest, ScanResult
from font_scout.scanner import URLScanner
from font_scout.webhook import WebhookNotifier

__all__ = ["INVALID_INPUT_MESSAGE", "BatchScanner", "validate_urls"]

INVALID_INPUT_MESSAGE = "Se requiere un array de URLs"


def validate_urls(urls: Any) -> List[str]:
    """Проверяет, что вход — список строк; иначе бросает InvalidInput."""
    if not isinstance(urls, (list, tuple)):
        raise InvalidInput(INVALID_INPUT_MESSAGE)
    try:
        return list(ScanRequest(urls=list(urls)).urls)
    except ValidationError as exc:
        raise InvalidInput(INVALID_INPUT_MESSAGE) from exc


class BatchScanner:
    """Фасад для сервера, CLI и тестов: сканирует пакет URL в исходном порядке."""

    def __init__(
        self,
        config: ScannerConfig,
        catalog: Catalog,
        *,
        engine_factory: Callable[[ScannerConfig], Any] = BrowserEngine,
        notifier: Optional[WebhookNotifier] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.config = config
        self.catalog = catalog
        self._engine_factory = engine_factory
        self._notifier = notifier
        self._clock = clock

    async def scan(self, urls: Any) -> List[ScanResult]:
        """Scan every URL and return results by input position.

        At most ``config.concurrency`` browsers run at once (one by default).
        Raises InvalidInput before any scan, and BrowserUnavailable when the
        engine cannot start.
        """
        urls = validate_urls(urls)
        if not urls:
            return []

        logger.info("Starting batch of %d URLs", len(urls))
        slots: List[Optional[ScanResult]] = [None] * len(urls)
        semaphore = asyncio.Semaphore(self.config.concurrency)

        async with self._engine_factory(self.config) as engine:
            scanner = URLScanner(engine, self.catalog, self.config, clock=self._clock)

            async def _fill(index: int, url: str) -> None:
                async with semaphore:
                    result = await scanner.scan(url)
                slots[index] = result
                if result.ok and self._notifier is not None:
                    self._notifier.submit(result)

            if self.config.concurrency == 1:
                for index, url in enumerate(urls):
                    await _fill(index, url)
            else:
                await asyncio.gather(*(_fill(index, url) for index, url in enumerate(urls)))

        results = [result for result in slots if result is not None]
        failed = sum(1 for result in results if not result.ok)
        logger.info("Batch finished: %d scanned, %d failed", len(results), failed)
        return results
