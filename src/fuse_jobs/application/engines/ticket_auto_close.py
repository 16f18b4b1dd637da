"""Engines – support ticket auto-close."""
from __future__ import annotations

from datetime import datetime, timedelta

from fuse_jobs.application.engines.models import (
    AuditEntry,
    SupportTicket,
    TicketAutoCloseSummary,
    TicketStatus,
)
from fuse_jobs.application.ports import AuditLog, SupportTicketStore
from fuse_jobs.kernel.errors import PerEntityProcessingError
from fuse_jobs.kernel.time import Clock, SystemClock
from fuse_jobs.observability.logging import get_logger

__all__ = ["TicketAutoCloseService", "skip_reason"]

logger = get_logger(__name__)

DEFAULT_INACTIVITY = timedelta(days=3)


def skip_reason(ticket: SupportTicket, cutoff: datetime) -> str | None:
    """Why *ticket* stays open at *cutoff*, or ``None`` when it should close."""
    if ticket.status is not TicketStatus.RESOLVED:
        return "not_resolved"
    last_activity = ticket.last_activity_at
    if last_activity is None:
        return "missing_resolved_at"
    if last_activity >= cutoff:
        return "recent_activity"
    return None


class TicketAutoCloseService:
    """Closes resolved tickets the patient has not answered for the inactivity period.

    A ticket closes only when its last activity (resolution or the patient's
    later reply) is strictly older than ``now - inactivity``.
    """

    def __init__(
        self,
        store: SupportTicketStore,
        audit: AuditLog,
        *,
        clock: Clock | None = None,
        inactivity: timedelta = DEFAULT_INACTIVITY,
    ) -> None:
        if inactivity <= timedelta(0):
            raise ValueError("inactivity must be positive")
        self._store = store
        self._audit = audit
        self._clock = clock or SystemClock()
        self._inactivity = inactivity

    async def check_and_close_resolved_tickets(self) -> TicketAutoCloseSummary:
        now = self._clock.now()
        cutoff = now - self._inactivity
        tickets = await self._store.find_tickets_by_status(TicketStatus.RESOLVED)
        summary = TicketAutoCloseSummary(checked=len(tickets))
        logger.info("ticket_auto_close.check_started", candidates=len(tickets), cutoff=cutoff.isoformat())

        for ticket in tickets:
            try:
                reason = skip_reason(ticket, cutoff)
                if reason is not None:
                    summary.skipped += 1
                    log = logger.debug if reason == "recent_activity" else logger.warning
                    log("ticket_auto_close.ticket_skipped", ticket_id=ticket.ticket_id, reason=reason)
                    continue
                await self._close(ticket, now)
                summary.closed += 1
            except Exception as exc:  # noqa: BLE001
                summary.failed += 1
                error = PerEntityProcessingError("support_ticket", ticket.ticket_id, cause=exc)
                logger.error("ticket_auto_close.ticket_failed", error=error.to_dict())

        logger.info("ticket_auto_close.check_completed", **summary.to_dict())
        return summary

    async def trigger_manual_check(self) -> TicketAutoCloseSummary:
        logger.info("ticket_auto_close.manual_check")
        return await self.check_and_close_resolved_tickets()

    async def _close(self, ticket: SupportTicket, now: datetime) -> None:
        closed = await self._store.close_ticket(ticket.ticket_id, closed_at=now)
        await self._audit.append(
            AuditEntry(
                action="ticket.auto_closed",
                resource_type="SupportTicket",
                resource_id=ticket.ticket_id,
                occurred_at=now,
                metadata={
                    "previous_status": ticket.status.value,
                    "status": closed.status.value,
                    "last_activity_at": ticket.last_activity_at.isoformat() if ticket.last_activity_at else None,
                    "inactivity_days": self._inactivity / timedelta(days=1),
                },
            )
        )
        logger.info("ticket_auto_close.ticket_closed", ticket_id=ticket.ticket_id, title=ticket.title)
