"""contentful-slack entry point: wires the pipeline to the webhook server."""

from __future__ import annotations

import asyncio
import signal
import sys

import click
import httpx

from contentful_slack import __version__
from contentful_slack.config import Settings, load_settings
from contentful_slack.contentful.client import ContentfulClient
from contentful_slack.pipeline import NotificationPipeline
from contentful_slack.slack.client import SlackClient
from contentful_slack.utils.logging import get_logger, setup_logging
from contentful_slack.webhooks.server import WebhookServer

log = get_logger(__name__)


class Notifier:
    """Main application: owns the shared HTTP client and the server."""

    def __init__(self, settings: Settings, dry_run: bool = False) -> None:
        self.settings = settings

        # One pooled client for both upstreams; never holds request data.
        self.http = httpx.AsyncClient(timeout=settings.http_timeout)
        self.contentful = ContentfulClient(
            settings.cma_token, self.http, base_url=settings.cma_base_url
        )
        self.slack = SlackClient(settings.slack_url, self.http)
        self.pipeline = NotificationPipeline(
            settings, self.contentful, self.slack, dry_run=dry_run
        )
        self.server = WebhookServer(settings, self.pipeline)

    async def start(self) -> None:
        log.info("contentful_slack_starting", version=__version__)

        if not self.settings.slack_url:
            log.warning(
                "slack_url_missing",
                msg="No Slack webhook URL configured (slackURL); deliveries will fail.",
            )
        if not self.settings.cma_token:
            log.warning(
                "cma_token_missing",
                msg="No CMA token configured (cmaToken); user lookups will fail.",
            )

        await self.server.start()
        log.info("contentful_slack_ready")

    async def stop(self) -> None:
        log.info("contentful_slack_stopping")
        await self.server.stop()
        await self.http.aclose()
        log.info("contentful_slack_stopped")


async def run(settings: Settings, dry_run: bool = False) -> None:
    app = Notifier(settings, dry_run=dry_run)

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    def _signal_handler() -> None:
        log.info("shutdown_signal")
        stop_event.set()

    if sys.platform != "win32":
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, _signal_handler)

    await app.start()

    try:
        if sys.platform == "win32":
            while not stop_event.is_set():
                await asyncio.sleep(1)
        else:
            await stop_event.wait()
    except KeyboardInterrupt:
        pass
    finally:
        await app.stop()


@click.command()
@click.option("--config", "config_path", default=None, help="Path to config YAML file")
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--port", type=int, default=None, help="Listen port (overrides PORT)")
@click.option("--dry-run", is_flag=True, help="Log composed messages instead of posting to Slack")
def cli(
    config_path: str | None, log_level: str | None, port: int | None, dry_run: bool
) -> None:
    """Forward Contentful entry changes to a Slack channel."""
    settings = load_settings(config_path)
    if log_level:
        settings.log_level = log_level
    if port is not None:
        settings.port = port
    setup_logging(level=settings.log_level, json_output=settings.log_json)
    asyncio.run(run(settings, dry_run=dry_run))


if __name__ == "__main__":
    cli()
