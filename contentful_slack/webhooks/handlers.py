"""Webhook request parsing and Slack message composition."""

from __future__ import annotations

import json
import re
from typing import Any, Mapping

from contentful_slack.slack.models import Attachment, AttachmentField, OutboundMessage
from contentful_slack.utils.logging import get_logger
from contentful_slack.webhooks.models import ChangeNotification, WebhookMetadata

log = get_logger(__name__)

WEBHOOK_NAME_HEADER = "X-Contentful-Webhook-Name"
WEBHOOK_TOPIC_HEADER = "X-Contentful-Topic"

# Contentful sends application/vnd.contentful.management.v1+json
_JSON_CONTENT_TYPE = re.compile(r"^application/(json|[\w.\-]+\+json)$", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Request parsing
# ---------------------------------------------------------------------------

def is_json_content_type(content_type: str) -> bool:
    return bool(_JSON_CONTENT_TYPE.match(content_type.strip()))


def parse_metadata(headers: Mapping[str, str]) -> WebhookMetadata:
    """Read webhook name and topic headers; missing headers become ''."""
    return WebhookMetadata(
        name=headers.get(WEBHOOK_NAME_HEADER, ""),
        topic=headers.get(WEBHOOK_TOPIC_HEADER, ""),
    )


# ---------------------------------------------------------------------------
# Message composition
# ---------------------------------------------------------------------------

def deeplink_url(notification: ChangeNotification, app_base_url: str) -> str:
    base = app_base_url.rstrip("/")
    return f"{base}/spaces/{notification.space_id}/entries/{notification.entity_id}"


def summary_text(display_name: str, deeplink: str) -> str:
    return (
        f"An Entry has just been changed by {display_name}. "
        "The full Entry is below in the fields. "
        f"Here is the link to the entry: <{deeplink}|Link to Entry>"
    )


def localized_value(key: str, value: Any, locale: str) -> str:
    """Pick one locale out of a field's locale map as Slack field text.

    A field with no value, or a null, for ``locale`` yields an empty string.
    Non-string values (numbers, links, rich text) are rendered as compact JSON.
    """
    if not isinstance(value, dict) or value.get(locale) is None:
        log.debug("field_locale_missing", field=key, locale=locale)
        return ""

    localized = value[locale]
    if isinstance(localized, str):
        return localized
    return json.dumps(localized, separators=(",", ":"), ensure_ascii=False)


def compose_message(
    notification: ChangeNotification,
    metadata: WebhookMetadata,
    display_name: str,
    deeplink: str,
    *,
    locale: str = "en-US",
    icon_emoji: str = ":contentful:",
    color: str = "#000000",
) -> OutboundMessage:
    text = summary_text(display_name, deeplink)

    fields = [AttachmentField(title="Action applied to Entry", value=metadata.topic)]
    for key, value in notification.fields.items():
        fields.append(
            AttachmentField(title=f"field.{key}", value=localized_value(key, value, locale))
        )

    return OutboundMessage(
        username=f"Webhook: {metadata.name}",
        icon_emoji=icon_emoji,
        attachments=[
            Attachment(fallback=text, pretext=text, color=color, fields=fields),
        ],
    )
