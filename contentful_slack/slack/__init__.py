"""Slack incoming-webhook delivery."""
