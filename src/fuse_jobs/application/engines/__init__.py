"""Engines – rule engines run by the scheduled jobs."""
from fuse_jobs.application.engines.abandoned_checkout import AbandonedCheckoutService
from fuse_jobs.application.engines.models import (
    AbandonedCheckoutSummary,
    AuditEntry,
    CheckoutSession,
    ContactInfo,
    RecoveryTrigger,
    SupportTicket,
    TicketAutoCloseSummary,
    TicketStatus,
)
from fuse_jobs.application.engines.ticket_auto_close import TicketAutoCloseService

__all__ = [
    "AbandonedCheckoutService",
    "AbandonedCheckoutSummary",
    "AuditEntry",
    "CheckoutSession",
    "ContactInfo",
    "RecoveryTrigger",
    "SupportTicket",
    "TicketAutoCloseService",
    "TicketAutoCloseSummary",
    "TicketStatus",
]
