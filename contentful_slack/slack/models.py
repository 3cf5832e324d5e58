"""Slack incoming-webhook message models.

Follows the legacy attachment layout: https://api.slack.com/docs/formatting
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class AttachmentField:
    title: str
    value: str
    short: bool = False

    def to_payload(self) -> dict[str, Any]:
        return {"title": self.title, "value": self.value, "short": self.short}


@dataclass
class Attachment:
    fallback: str = ""
    pretext: str = ""
    color: str = "#000000"
    fields: list[AttachmentField] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {
            "fallback": self.fallback,
            "pretext": self.pretext,
            "color": self.color,
            "fields": [f.to_payload() for f in self.fields],
        }


@dataclass
class OutboundMessage:
    username: str
    icon_emoji: str
    attachments: list[Attachment] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {
            "username": self.username,
            "icon_emoji": self.icon_emoji,
            "attachments": [a.to_payload() for a in self.attachments],
        }
