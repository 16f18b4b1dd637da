"""Engines – entities read and written by the trigger engines."""
from __future__ import annotations

import dataclasses
from datetime import UTC, datetime
from enum import Enum
from typing import Any

__all__ = [
    "AbandonedCheckoutSummary",
    "AuditEntry",
    "CheckoutSession",
    "ContactInfo",
    "RecoveryTrigger",
    "SupportTicket",
    "TicketAutoCloseSummary",
    "TicketStatus",
]


@dataclasses.dataclass(frozen=True)
class ContactInfo:
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None

    @property
    def is_complete(self) -> bool:
        """Recovery messages need an address and a name to greet."""
        return bool(self.email and self.first_name and self.last_name)

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)


@dataclasses.dataclass(frozen=True)
class CheckoutSession:
    """A checkout flow started by a visitor.  Owned by the data-access layer."""

    session_id: str
    started_at: datetime
    last_activity_at: datetime
    contact: ContactInfo = dataclasses.field(default_factory=ContactInfo)
    completed_at: datetime | None = None
    clinic_id: str | None = None
    product_id: str | None = None
    form_id: str | None = None
    drop_off_stage: str | None = None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None


@dataclasses.dataclass(frozen=True)
class RecoveryTrigger:
    """Dedup record: once stored, the session is never triggered again."""

    session_id: str
    triggered_at: datetime
    clinic_id: str | None = None
    contact_email: str | None = None


class TicketStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


@dataclasses.dataclass(frozen=True)
class SupportTicket:
    ticket_id: str
    status: TicketStatus
    title: str = ""
    resolved_at: datetime | None = None
    last_patient_response_at: datetime | None = None
    closed_at: datetime | None = None

    @property
    def last_activity_at(self) -> datetime | None:
        """Later of resolution and the patient's last reply; ``None`` if never resolved."""
        if self.resolved_at is None:
            return None
        if self.last_patient_response_at and self.last_patient_response_at > self.resolved_at:
            return self.last_patient_response_at
        return self.resolved_at


@dataclasses.dataclass(frozen=True)
class AuditEntry:
    action: str
    resource_type: str
    resource_id: str
    actor: str = "system"
    occurred_at: datetime = dataclasses.field(default_factory=lambda: datetime.now(UTC))
    metadata: dict[str, Any] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass
class AbandonedCheckoutSummary:
    scanned: int = 0
    triggered: int = 0
    skipped: int = 0
    failed: int = 0

    def to_dict(self) -> dict[str, int]:
        return dataclasses.asdict(self)


@dataclasses.dataclass
class TicketAutoCloseSummary:
    checked: int = 0
    closed: int = 0
    skipped: int = 0
    failed: int = 0

    def to_dict(self) -> dict[str, int]:
        return dataclasses.asdict(self)
