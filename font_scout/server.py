# File: font_scout/server.py
"""font_scout.server: HTTP API (``GET /health``, ``POST /scan``) on aiohttp.web."""

from __future__ import annotations

import json
from typing import Optional

from aiohttp import web

from font_scout.catalog import Catalog
from font_scout.config import ScannerConfig
from font_scout.engine import INVALID_INPUT_MESSAGE, BatchScanner
from font_scout.errors import BrowserUnavailable, InvalidInput
from font_scout.logger import logger
from font_scout.webhook import WebhookNotifier

__all__ = ["BATCH_SCANNER", "create_app", "run_server"]

BATCH_SCANNER: web.AppKey[BatchScanner] = web.AppKey("batch_scanner", BatchScanner)
NOTIFIER: web.AppKey[Optional[WebhookNotifier]] = web.AppKey("notifier")

routes = web.RouteTableDef()


@routes.get("/health")
async def health(request: web.Request) -> web.Response:
    return web.json_response({"status": "ok"})


@routes.post("/scan")
async def scan(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except ValueError:
        return web.json_response({"error": INVALID_INPUT_MESSAGE}, status=400)
    urls = body.get("urls") if isinstance(body, dict) else None

    try:
        results = await request.app[BATCH_SCANNER].scan(urls)
    except InvalidInput as exc:
        return web.json_response({"error": str(exc)}, status=400)
    except BrowserUnavailable as exc:
        logger.error("Batch aborted: %s", exc)
        return web.json_response({"error": str(exc)}, status=500)

    return web.json_response(
        {"results": [result.to_payload() for result in results]},
        dumps=lambda obj: json.dumps(obj, ensure_ascii=False),
    )


async def _close_notifier(app: web.Application) -> None:
    notifier = app[NOTIFIER]
    if notifier is not None:
        await notifier.aclose()


def create_app(
    config: ScannerConfig,
    catalog: Catalog,
    *,
    batch_scanner: Optional[BatchScanner] = None,
) -> web.Application:
    """Build the application; *batch_scanner* replaces the default one (tests)."""
    notifier = None
    if config.webhook_url is not None:
        notifier = WebhookNotifier(str(config.webhook_url), timeout=config.webhook_timeout)

    app = web.Application()
    app[NOTIFIER] = notifier
    app[BATCH_SCANNER] = batch_scanner or BatchScanner(config, catalog, notifier=notifier)
    app.add_routes(routes)
    app.on_cleanup.append(_close_notifier)
    return app


def run_server(config: ScannerConfig, catalog: Catalog, host: str, port: int) -> None:
    """Блокирующий запуск HTTP-сервера."""
    logger.info("Backend listening on %s:%d", host, port)
    web.run_app(create_app(config, catalog), host=host, port=port, print=None)
