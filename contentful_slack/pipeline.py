"""The notification pipeline: filter, attribute, compose, deliver."""

from __future__ import annotations

from dataclasses import dataclass

from contentful_slack.config import Settings
from contentful_slack.contentful.client import ContentfulClient
from contentful_slack.slack.client import SlackClient
from contentful_slack.slack.models import OutboundMessage
from contentful_slack.utils.logging import get_logger
from contentful_slack.webhooks.handlers import compose_message, deeplink_url
from contentful_slack.webhooks.models import ChangeNotification, WebhookMetadata

log = get_logger(__name__)

SKIPPED_MESSAGE = "I am only posting entries to slack!"
SUCCESS_MESSAGE = "Slack post successful!"


@dataclass(frozen=True)
class RequestContext:
    """Everything derived from one inbound request."""

    notification: ChangeNotification
    metadata: WebhookMetadata
    deeplink: str


@dataclass(frozen=True)
class PipelineResult:
    skipped: bool
    message: str


class NotificationPipeline:
    """Turns one change notification into one Slack post.

    Holds only collaborators and settings; all request data travels in a
    RequestContext so concurrent requests never share state.
    """

    def __init__(
        self,
        settings: Settings,
        contentful: ContentfulClient,
        slack: SlackClient,
        dry_run: bool = False,
    ) -> None:
        self._settings = settings
        self._contentful = contentful
        self._slack = slack
        self._dry_run = dry_run

    async def handle(
        self, notification: ChangeNotification, metadata: WebhookMetadata
    ) -> PipelineResult:
        if not notification.is_entry:
            log.info(
                "notification_skipped",
                entity_type=notification.entity_type,
                entity_id=notification.entity_id,
            )
            return PipelineResult(skipped=True, message=SKIPPED_MESSAGE)

        ctx = RequestContext(
            notification=notification,
            metadata=metadata,
            deeplink=deeplink_url(notification, self._settings.app_base_url),
        )

        user_id = await self._contentful.resolve_user_id(ctx.notification)
        user = await self._contentful.resolve_user(ctx.notification.space_id, user_id)
        message = self.compose(ctx, user.display_name)
        await self._deliver(ctx, message)

        return PipelineResult(skipped=False, message=SUCCESS_MESSAGE)

    def compose(self, ctx: RequestContext, display_name: str) -> OutboundMessage:
        return compose_message(
            ctx.notification,
            ctx.metadata,
            display_name,
            ctx.deeplink,
            locale=self._settings.locale,
            icon_emoji=self._settings.icon_emoji,
            color=self._settings.color,
        )

    async def _deliver(self, ctx: RequestContext, message: OutboundMessage) -> None:
        if self._dry_run:
            log.info(
                "slack_post_dry_run",
                entity_id=ctx.notification.entity_id,
                payload=message.to_payload(),
            )
            return
        await self._slack.post_message(message)
