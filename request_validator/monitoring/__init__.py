"""Structured logging and Prometheus metrics for the request validation service."""
