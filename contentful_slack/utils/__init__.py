"""Utility modules for contentful-slack."""

from contentful_slack.utils.logging import get_logger, request_log_context, setup_logging

__all__ = [
    "get_logger",
    "request_log_context",
    "setup_logging",
]
