"""Shared fixtures: settings and canned Contentful / Slack upstreams."""

from __future__ import annotations

import json

import httpx
import pytest

from contentful_slack.config import Settings
from contentful_slack.contentful.client import ContentfulClient
from contentful_slack.pipeline import NotificationPipeline
from contentful_slack.slack.client import SlackClient

SLACK_URL = "https://hooks.slack.com/services/T000/B000/XXXXXXXX"
CMA_TOKEN = "cma-test-token"


def entry_payload(**sys_overrides):
    sys = {
        "id": "entry1",
        "type": "Entry",
        "space": {"sys": {"id": "space1"}},
    }
    sys.update(sys_overrides)
    return {
        "sys": sys,
        "fields": {
            "title": {"en-US": "Hello"},
            "body": {"en-US": "World"},
        },
    }


class FakeUpstreams:
    """httpx.MockTransport handler standing in for the CMA and Slack."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.entity = {"sys": {"id": "entry1", "updatedBy": {"sys": {"id": "U1"}}}}
        self.users = {
            "items": [
                {"sys": {"id": "U0"}, "firstName": "Grace", "lastName": "Hopper"},
                {"sys": {"id": "U1"}, "firstName": "Ada", "lastName": "Lovelace"},
            ]
        }
        self.cma_status = 200
        self.slack_status = 200
        self.slack_error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "hooks.slack.com":
            if self.slack_error is not None:
                raise self.slack_error
            return httpx.Response(self.slack_status, text="ok")
        if request.url.path.endswith("/users/"):
            return httpx.Response(self.cma_status, json=self.users)
        return httpx.Response(self.cma_status, json=self.entity)

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def slack_posts(self) -> list[dict]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.url.host == "hooks.slack.com"
        ]


@pytest.fixture
def settings():
    return Settings(slack_url=SLACK_URL, cma_token=CMA_TOKEN, port=0)


@pytest.fixture
def upstreams():
    return FakeUpstreams()


@pytest.fixture
async def http(upstreams):
    client = httpx.AsyncClient(transport=httpx.MockTransport(upstreams))
    yield client
    await client.aclose()


@pytest.fixture
def contentful(settings, http):
    return ContentfulClient(settings.cma_token, http, base_url=settings.cma_base_url)


@pytest.fixture
def slack(settings, http):
    return SlackClient(settings.slack_url, http)


@pytest.fixture
def pipeline(settings, contentful, slack):
    return NotificationPipeline(settings, contentful, slack)
