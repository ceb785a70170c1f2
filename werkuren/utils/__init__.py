"""Shared utilities: structured logging helpers and number formatting."""
