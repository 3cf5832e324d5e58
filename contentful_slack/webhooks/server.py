"""Webhook HTTP server using aiohttp."""

from __future__ import annotations

import json
from typing import Any
from uuid import uuid4

from aiohttp import web

from contentful_slack.config import Settings
from contentful_slack.errors import MalformedPayloadError
from contentful_slack.pipeline import NotificationPipeline
from contentful_slack.utils.logging import get_logger, request_log_context
from contentful_slack.webhooks.handlers import is_json_content_type, parse_metadata
from contentful_slack.webhooks.models import ChangeNotification, WebhookMetadata

log = get_logger(__name__)


class WebhookServer:
    """Receives Contentful webhooks on ``/`` and runs them through the pipeline."""

    def __init__(self, settings: Settings, pipeline: NotificationPipeline) -> None:
        self._settings = settings
        self._pipeline = pipeline
        self._runner: web.AppRunner | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        app = self._build_app()
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self._settings.bind, self._settings.port)
        await site.start()
        log.info(
            "webhook_server_started",
            bind=self._settings.bind,
            port=self._settings.port,
        )

    async def stop(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
        log.info("webhook_server_stopped")

    # ------------------------------------------------------------------
    # App construction
    # ------------------------------------------------------------------

    def _build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_route("*", "/", self._handle_webhook)
        return app

    # ------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------

    async def _handle_webhook(self, request: web.Request) -> web.Response:
        # Every failure, malformed input included, is answered the same way.
        with request_log_context(request_id=uuid4().hex[:12], method=request.method):
            try:
                notification, metadata = await self._parse(request)
            except Exception as e:
                return self._failure(e)

            with request_log_context(
                webhook=metadata.name,
                topic=metadata.topic,
                entity_type=notification.entity_type,
                entity_id=notification.entity_id,
                space_id=notification.space_id,
            ):
                log.info("webhook_received")
                try:
                    result = await self._pipeline.handle(notification, metadata)
                except Exception as e:
                    return self._failure(e)

        return web.Response(status=200, text=result.message)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _failure(self, error: Exception) -> web.Response:
        log.exception("notification_failed", error=str(error))
        return web.Response(status=500, text=str(error))

    async def _parse(
        self, request: web.Request
    ) -> tuple[ChangeNotification, WebhookMetadata]:
        if not is_json_content_type(request.content_type):
            raise MalformedPayloadError(
                f"Unsupported content type {request.content_type!r}"
            )

        try:
            payload: Any = await request.json()
        except json.JSONDecodeError as e:
            raise MalformedPayloadError(f"Invalid JSON body: {e}") from e

        return ChangeNotification.from_payload(payload), parse_metadata(request.headers)
