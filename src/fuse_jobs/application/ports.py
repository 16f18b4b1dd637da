"""Application ports – collaborators the engines read from and write to.

The relational store, the messaging pipeline and the audit log live outside
this package.  Adapters implement these ports; unit tests use the in-memory
fakes in :mod:`fuse_jobs.testing.fakes`.
"""
from __future__ import annotations

import abc
from datetime import datetime

from fuse_jobs.application.engines.models import (
    AuditEntry,
    CheckoutSession,
    RecoveryTrigger,
    SupportTicket,
    TicketStatus,
)

__all__ = ["AuditLog", "CheckoutSessionStore", "RecoveryMessenger", "SupportTicketStore"]


class CheckoutSessionStore(abc.ABC):
    """Port – checkout sessions and their recovery-trigger records."""

    @abc.abstractmethod
    async def find_checkout_sessions(self, *, since: datetime) -> list[CheckoutSession]:
        """Sessions whose checkout started at or after *since*."""

    @abc.abstractmethod
    async def has_recovery_trigger(self, session_id: str) -> bool: ...

    @abc.abstractmethod
    async def save_recovery_trigger(self, trigger: RecoveryTrigger) -> None:
        """Durably store *trigger*.  Must be visible to the next ``has_recovery_trigger``."""


class RecoveryMessenger(abc.ABC):
    """Port – start the recovery message sequence for a session."""

    @abc.abstractmethod
    async def dispatch_recovery(self, session: CheckoutSession) -> None:
        """Return once dispatch is acknowledged; raise on failure."""


class SupportTicketStore(abc.ABC):
    """Port – support tickets."""

    @abc.abstractmethod
    async def find_tickets_by_status(self, status: TicketStatus) -> list[SupportTicket]: ...

    @abc.abstractmethod
    async def close_ticket(self, ticket_id: str, *, closed_at: datetime) -> SupportTicket: ...


class AuditLog(abc.ABC):
    """Port – append-only audit trail."""

    @abc.abstractmethod
    async def append(self, entry: AuditEntry) -> None: ...
