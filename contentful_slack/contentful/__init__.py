"""Contentful Management API access."""
