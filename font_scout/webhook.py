# File: font_scout/webhook.py
"""
Webhook notifier: forwards successful scan results as JSON.

Delivery is fire-and-forget. :meth:`WebhookNotifier.submit` schedules a
POST and returns at once; failures are logged and never retried.
"""
from __future__ import annotations

import asyncio
from typing import Optional, Set

from aiohttp import ClientError, ClientSession, ClientTimeout

from font_scout.logger import logger
from font_scout.models import ScanResult

__all__ = ["WebhookNotifier"]


class WebhookNotifier:
    """Posts result payloads to a fixed URL in background tasks."""

    def __init__(self, url: str, timeout: float = 10.0) -> None:
        self.url = url
        self.timeout = timeout
        self._session: Optional[ClientSession] = None
        self._pending: Set[asyncio.Task[bool]] = set()

    def submit(self, result: ScanResult) -> asyncio.Task[bool]:
        """Schedule delivery of *result*; must be called from a running loop."""
        task = asyncio.get_running_loop().create_task(self.deliver(result))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def deliver(self, result: ScanResult) -> bool:
        """POST *result*; returns False (and logs) on any delivery failure."""
        if self._session is None or self._session.closed:
            self._session = ClientSession(timeout=ClientTimeout(total=self.timeout))
        try:
            async with self._session.post(self.url, json=result.to_payload()) as resp:
                if resp.status >= 400:
                    logger.warning("Webhook rejected %s: HTTP %s", result.url, resp.status)
                    return False
        except (ClientError, asyncio.TimeoutError) as exc:
            logger.warning("Webhook delivery failed for %s: %s", result.url, exc)
            return False
        logger.debug("Webhook delivered %s", result.url)
        return True

    async def aclose(self) -> None:
        """Wait for pending deliveries and close the HTTP session."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
