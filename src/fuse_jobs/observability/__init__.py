"""Observability – structured logging for the scheduler and engines."""
