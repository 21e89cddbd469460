"""Listing source connectors."""
