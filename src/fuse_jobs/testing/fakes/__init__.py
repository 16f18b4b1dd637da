"""Testing fakes – in-memory doubles for the application ports."""
from fuse_jobs.kernel.time import FrozenClock
from fuse_jobs.testing.fakes.checkout import InMemoryCheckoutSessionStore, RecordingRecoveryMessenger
from fuse_jobs.testing.fakes.clock import FakeClock
from fuse_jobs.testing.fakes.tickets import InMemoryAuditLog, InMemorySupportTicketStore

__all__ = [
    "FakeClock",
    "FrozenClock",
    "InMemoryAuditLog",
    "InMemoryCheckoutSessionStore",
    "InMemorySupportTicketStore",
    "RecordingRecoveryMessenger",
]
