"""Shared utilities: exception hierarchy and response envelope helpers."""
