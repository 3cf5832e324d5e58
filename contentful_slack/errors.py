"""Error taxonomy for the notification pipeline.

Every failure raised while handling a webhook derives from NotifierError and
is turned into a 500 response by the webhook server.
"""

from __future__ import annotations


class NotifierError(Exception):
    """Base class for notification pipeline failures."""


class MalformedPayloadError(NotifierError):
    """The inbound webhook body is missing required fields or is not JSON."""


class UpstreamAPIError(NotifierError):
    """The Contentful Management API failed or returned an unexpected shape."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UserNotFoundError(NotifierError):
    """No user in the space's users collection matches the resolved id."""

    def __init__(self, user_id: str, space_id: str) -> None:
        super().__init__(f"User {user_id} not found in space {space_id}")
        self.user_id = user_id
        self.space_id = space_id


class DeliveryError(NotifierError):
    """Posting the composed message to the Slack webhook failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
