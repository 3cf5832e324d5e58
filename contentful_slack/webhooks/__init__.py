"""Inbound Contentful webhooks."""
