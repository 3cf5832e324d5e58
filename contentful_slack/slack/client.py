"""Delivery of composed messages to a Slack incoming webhook."""

from __future__ import annotations

import httpx

from contentful_slack.errors import DeliveryError
from contentful_slack.slack.models import OutboundMessage
from contentful_slack.utils.logging import get_logger

log = get_logger(__name__)


class SlackClient:
    """Posts messages to a single incoming-webhook URL.

    The URL carries its own credential, so no auth headers are sent.
    """

    def __init__(self, webhook_url: str, http_client: httpx.AsyncClient) -> None:
        self._webhook_url = webhook_url
        self._http = http_client

    async def post_message(self, message: OutboundMessage) -> None:
        if not self._webhook_url:
            raise DeliveryError("Slack webhook URL is not configured")

        try:
            resp = await self._http.post(self._webhook_url, json=message.to_payload())
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DeliveryError(
                f"Slack webhook returned {e.response.status_code}: {e.response.text[:200]}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise DeliveryError(f"Slack webhook request failed: {e!r}") from e

        log.info("slack_post_sent", status=resp.status_code)
