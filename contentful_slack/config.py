"""Configuration management with Pydantic Settings + optional YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CONTENTFUL_SLACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    # The bare names are the ones the Contentful webhook templates document.
    slack_url: str = Field(
        default="",
        validation_alias=AliasChoices("slackURL", "CONTENTFUL_SLACK_SLACK_URL", "slack_url"),
    )
    cma_token: str = Field(
        default="",
        validation_alias=AliasChoices("cmaToken", "CONTENTFUL_SLACK_CMA_TOKEN", "cma_token"),
    )
    port: int = Field(
        default=5000,
        validation_alias=AliasChoices("PORT", "CONTENTFUL_SLACK_PORT", "port"),
    )
    bind: str = "0.0.0.0"

    cma_base_url: str = "https://api.contentful.com"
    app_base_url: str = "https://app.contentful.com"
    locale: str = "en-US"
    icon_emoji: str = ":contentful:"
    color: str = "#000000"
    http_timeout: float = 10.0

    log_level: str = "INFO"
    log_json: bool = False


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from env vars, optionally overlaying a YAML config."""
    yaml_data: dict[str, Any] = {}

    if config_path is None:
        config_path = os.environ.get("CONTENTFUL_SLACK_CONFIG")

    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                yaml_data = yaml.safe_load(f) or {}

    # Init kwargs outrank env vars in pydantic-settings, so only pass the
    # YAML keys the environment does not already provide.
    env_settings = Settings()
    overrides = {
        key: value
        for key, value in yaml_data.items()
        if key in Settings.model_fields and key not in env_settings.model_fields_set
    }
    return Settings(**overrides)
