"""Contentful Management API lookups used to attribute a change to a user."""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from contentful_slack.contentful.models import (
    EntityResponse,
    EntityType,
    UserCollection,
    fragment_for,
)
from contentful_slack.errors import UpstreamAPIError, UserNotFoundError
from contentful_slack.utils.logging import get_logger
from contentful_slack.webhooks.models import ChangeNotification, ResolvedUser

log = get_logger(__name__)


class ContentfulClient:
    """Authenticated read access to the space-scoped CMA endpoints."""

    def __init__(
        self,
        token: str,
        http_client: httpx.AsyncClient,
        base_url: str = "https://api.contentful.com",
    ) -> None:
        self._token = token
        self._http = http_client
        self._base_url = base_url.rstrip("/")

    def space_url(self, space_id: str) -> str:
        return f"{self._base_url}/spaces/{space_id}/"

    def entity_url(self, notification: ChangeNotification) -> str:
        try:
            entity_type = EntityType(notification.entity_type)
        except ValueError as e:
            raise UpstreamAPIError(
                f"No CMA endpoint for entity type {notification.entity_type!r}"
            ) from e
        return (
            self.space_url(notification.space_id)
            + f"{fragment_for(entity_type)}/{notification.entity_id}"
        )

    async def resolve_user_id(self, notification: ChangeNotification) -> str:
        """Return the id of the user who last updated the entity.

        Actions made through the management interface already carry
        ``sys.updatedBy``; delivery-side actions (e.g. publish) do not, and
        the entity is fetched to find out.
        """
        if notification.updated_by_user_id is not None:
            return notification.updated_by_user_id

        entity = await self._get(self.entity_url(notification), EntityResponse)
        user_id = entity.sys.updated_by.sys.id
        log.info("user_id_resolved", entity_id=notification.entity_id, user_id=user_id)
        return user_id

    async def resolve_user(self, space_id: str, user_id: str) -> ResolvedUser:
        """Find a user in the space's users collection by id."""
        users = await self._get(self.space_url(space_id) + "users/", UserCollection)
        matches = [u for u in users.items if u.sys.id == user_id]
        if not matches:
            raise UserNotFoundError(user_id, space_id)

        user = matches[0]
        log.info("user_resolved", user_id=user_id)
        return ResolvedUser(
            user_id=user.sys.id,
            first_name=user.first_name,
            last_name=user.last_name,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get(self, url: str, shape: type[BaseModel]) -> Any:
        try:
            resp = await self._http.get(
                url, headers={"Authorization": f"Bearer {self._token}"}
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamAPIError(
                f"Contentful API GET {url} returned {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamAPIError(f"Contentful API GET {url} failed: {e!r}") from e

        try:
            return shape.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise UpstreamAPIError(
                f"Unexpected response from Contentful API GET {url}: {e}"
            ) from e
