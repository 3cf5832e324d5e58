"""Typed shapes of the Contentful Management API responses we read."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EntityType(str, Enum):
    ENTRY = "Entry"
    ASSET = "Asset"
    CONTENT_TYPE = "ContentType"


_FRAGMENTS: dict[EntityType, str] = {
    EntityType.ENTRY: "entries",
    EntityType.ASSET: "assets",
    EntityType.CONTENT_TYPE: "content_types",
}


def fragment_for(entity_type: EntityType) -> str:
    """URL path segment the CMA uses for an entity type."""
    return _FRAGMENTS[entity_type]


class LinkSys(BaseModel):
    id: str


class Link(BaseModel):
    """A ``{"sys": {"id": ...}}`` reference as used throughout the CMA."""

    sys: LinkSys


class EntitySys(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    updated_by: Link = Field(alias="updatedBy")


class EntityResponse(BaseModel):
    sys: EntitySys


class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sys: LinkSys
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")


class UserCollection(BaseModel):
    items: list[User]
