"""Testing support – in-memory fakes for every collaborator port.

Usage::

    from fuse_jobs.testing.fakes import FakeClock, InMemoryCheckoutSessionStore
"""

from fuse_jobs.testing.fakes import (
    FakeClock,
    InMemoryAuditLog,
    InMemoryCheckoutSessionStore,
    InMemorySupportTicketStore,
    RecordingRecoveryMessenger,
)

__all__ = [
    "FakeClock",
    "InMemoryAuditLog",
    "InMemoryCheckoutSessionStore",
    "InMemorySupportTicketStore",
    "RecordingRecoveryMessenger",
]
