"""Inbound webhook models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from contentful_slack.contentful.models import EntityType, Link
from contentful_slack.errors import MalformedPayloadError


class _NotificationSys(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: str
    space: Link
    updated_by: Link | None = Field(default=None, alias="updatedBy")


class _NotificationBody(BaseModel):
    sys: _NotificationSys
    fields: dict[str, Any] | None = Field(default_factory=dict)


@dataclass(frozen=True)
class ChangeNotification:
    entity_id: str
    space_id: str
    entity_type: str
    updated_by_user_id: str | None = None
    fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> ChangeNotification:
        """Decode a webhook body, raising MalformedPayloadError on bad shape."""
        if not isinstance(payload, dict):
            raise MalformedPayloadError("Webhook body must be a JSON object")
        try:
            body = _NotificationBody.model_validate(payload)
        except ValidationError as exc:
            missing = ", ".join(
                ".".join(str(part) for part in err["loc"]) for err in exc.errors()
            )
            raise MalformedPayloadError(f"Malformed webhook body: {missing}") from exc

        updated_by = body.sys.updated_by
        return cls(
            entity_id=body.sys.id,
            space_id=body.sys.space.sys.id,
            entity_type=body.sys.type,
            updated_by_user_id=updated_by.sys.id if updated_by else None,
            fields=body.fields or {},
        )

    @property
    def is_entry(self) -> bool:
        return self.entity_type == EntityType.ENTRY.value


@dataclass(frozen=True)
class WebhookMetadata:
    name: str = ""
    topic: str = ""


@dataclass(frozen=True)
class ResolvedUser:
    user_id: str
    first_name: str
    last_name: str

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
