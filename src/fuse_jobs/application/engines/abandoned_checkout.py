"""Engines – abandoned-checkout recovery detection.

A session is *abandoned* when checkout started inside the lookback window,
the visitor left complete contact details, no purchase completed, the last
activity is strictly older than the grace threshold and the session is tied
to a clinic.  Each abandoned
session gets one recovery dispatch, ever: the stored
:class:`RecoveryTrigger` is the only thing that suppresses a repeat.
"""
from __future__ import annotations

from datetime import datetime, timedelta

from fuse_jobs.application.engines.models import (
    AbandonedCheckoutSummary,
    CheckoutSession,
    RecoveryTrigger,
)
from fuse_jobs.application.ports import CheckoutSessionStore, RecoveryMessenger
from fuse_jobs.config.scheduler import DeliveryGuarantee
from fuse_jobs.kernel.errors import PerEntityProcessingError
from fuse_jobs.kernel.time import Clock, SystemClock
from fuse_jobs.observability.logging import get_logger

__all__ = ["AbandonedCheckoutService"]

logger = get_logger(__name__)

DEFAULT_LOOKBACK_HOURS = 24
DEFAULT_ABANDONMENT_THRESHOLD_HOURS = 1


class AbandonedCheckoutService:
    """Finds abandoned checkout sessions and triggers recovery once per session.

    Parameters
    ----------
    store:
        Checkout sessions and recovery-trigger records.
    messenger:
        Starts the recovery message sequence.
    clock:
        Time source; defaults to :class:`SystemClock`.
    delivery:
        ``AT_LEAST_ONCE`` dispatches first and records on acknowledgment, so
        a failed dispatch is retried on the next run.  ``AT_MOST_ONCE``
        records first, so a failed dispatch is never retried.
    """

    def __init__(
        self,
        store: CheckoutSessionStore,
        messenger: RecoveryMessenger,
        *,
        clock: Clock | None = None,
        delivery: DeliveryGuarantee = DeliveryGuarantee.AT_LEAST_ONCE,
    ) -> None:
        self._store = store
        self._messenger = messenger
        self._clock = clock or SystemClock()
        self._delivery = delivery

    async def process_abandoned_sessions(
        self,
        lookback_hours: float = DEFAULT_LOOKBACK_HOURS,
        abandonment_threshold_hours: float = DEFAULT_ABANDONMENT_THRESHOLD_HOURS,
    ) -> AbandonedCheckoutSummary:
        """Scan, filter and trigger.  Per-session failures are counted, not raised."""
        if lookback_hours <= 0:
            raise ValueError("lookback_hours must be positive")
        if abandonment_threshold_hours < 0:
            raise ValueError("abandonment_threshold_hours must be >= 0")

        now = self._clock.now()
        since = now - timedelta(hours=lookback_hours)
        cutoff = now - timedelta(hours=abandonment_threshold_hours)
        log = logger.bind(lookback_hours=lookback_hours, threshold_hours=abandonment_threshold_hours)
        log.info("abandoned_checkout.scan_started", since=since.isoformat(), cutoff=cutoff.isoformat())

        sessions = _distinct(await self._store.find_checkout_sessions(since=since))
        summary = AbandonedCheckoutSummary(scanned=len(sessions))

        for session in sessions:
            try:
                reason = await self._exclusion_reason(session, since, cutoff)
                if reason is not None:
                    summary.skipped += 1
                    log.debug("abandoned_checkout.session_skipped", session_id=session.session_id, reason=reason)
                    continue
                await self._trigger(session, now)
                summary.triggered += 1
                log.info(
                    "abandoned_checkout.session_triggered",
                    session_id=session.session_id,
                    clinic_id=session.clinic_id,
                    drop_off_stage=session.drop_off_stage,
                )
            except Exception as exc:  # noqa: BLE001
                summary.failed += 1
                error = PerEntityProcessingError("checkout_session", session.session_id, cause=exc)
                log.error("abandoned_checkout.session_failed", error=error.to_dict())

        log.info("abandoned_checkout.scan_completed", **summary.to_dict())
        return summary

    async def _exclusion_reason(
        self, session: CheckoutSession, since: datetime, cutoff: datetime
    ) -> str | None:
        if session.started_at < since:
            return "outside_lookback"
        if not session.contact.is_complete:
            return "missing_contact_info"
        if session.is_completed:
            return "completed"
        # grace window: only strictly older than the cutoff counts as abandoned
        if session.last_activity_at >= cutoff:
            return "too_recent"
        # recovery sequences belong to a clinic; retry once the clinic resolves
        if not session.clinic_id:
            return "missing_clinic"
        if await self._store.has_recovery_trigger(session.session_id):
            return "already_triggered"
        return None

    async def _trigger(self, session: CheckoutSession, now: datetime) -> None:
        trigger = RecoveryTrigger(
            session_id=session.session_id,
            triggered_at=now,
            clinic_id=session.clinic_id,
            contact_email=session.contact.email,
        )
        if self._delivery is DeliveryGuarantee.AT_MOST_ONCE:
            await self._store.save_recovery_trigger(trigger)
            await self._messenger.dispatch_recovery(session)
        else:
            await self._messenger.dispatch_recovery(session)
            await self._store.save_recovery_trigger(trigger)


def _distinct(sessions: list[CheckoutSession]) -> list[CheckoutSession]:
    seen: dict[str, CheckoutSession] = {}
    for session in sessions:
        seen.setdefault(session.session_id, session)
    return list(seen.values())
