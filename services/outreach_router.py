"""
Outreach router.

Routes a guarded candidate by tier:

- Hot: claim the lead (advance next_action_date by the Hot threshold), then
  append a Draft record with requires_approval=True. Nothing is dispatched; a
  human approves the draft elsewhere.
- Warm / Nurture: compose, claim the lead (last_contact_date = now,
  next_action_date = now + tier threshold), dispatch, then append a Sent or
  Failed record. Failures do not shorten the cadence.

The claim is a conditional update on the lead version read at selection time.
Losing it means another run already handled the lead; the candidate is skipped
without writing anything. Claiming before dispatch guarantees a lead is never
messaged twice by overlapping runs.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from domain.cadence import next_action_date, requires_approval
from domain.lead import Lead, LeadClassification
from domain.outreach import OutreachDirection, OutreachRecord, OutreachStatus
from repositories.document_store import DocumentStore, UpdateOutcome
from repositories.outreach_repository import new_record_id
from services.dispatch import ComposedMessage, MessageDispatcher
from services.message_composer import ContentProvider, compose

logger = logging.getLogger(__name__)


class RouteOutcome(str, Enum):
    DRAFTED = "drafted"
    SENT = "sent"
    FAILED = "failed"
    CLAIM_LOST = "claim_lost"


class OutreachRouter:
    def __init__(
        self,
        store: DocumentStore,
        dispatcher: MessageDispatcher,
        content_provider: ContentProvider,
        signature: str,
        dispatch_timeout_seconds: Optional[float] = None,
        dispatch_workers: int = 4,
    ) -> None:
        self._store = store
        self._dispatcher = dispatcher
        self._content_provider = content_provider
        self._signature = signature
        self._dispatch_timeout = dispatch_timeout_seconds
        self._dispatch_pool: Optional[ThreadPoolExecutor] = None
        if dispatch_timeout_seconds is not None:
            self._dispatch_pool = ThreadPoolExecutor(
                max_workers=dispatch_workers,
                thread_name_prefix="dispatch",
            )

    def route(self, lead: Lead, tier: LeadClassification, as_of: datetime) -> RouteOutcome:
        message = compose(lead, tier, self._content_provider, self._signature)

        if requires_approval(tier):
            return self._draft(lead, tier, message, as_of)
        return self._dispatch_and_record(lead, tier, message, as_of)

    def _claim(self, lead: Lead, fields: dict) -> bool:
        outcome = self._store.update_lead(lead.lead_id, fields, expected_version=lead.version)
        if outcome == UpdateOutcome.CONFLICT:
            logger.info(
                f"Lead {lead.lead_id} was claimed by another run, skipping",
                extra={"lead_id": lead.lead_id, "expected_version": lead.version},
            )
            return False
        return True

    def _draft(
        self,
        lead: Lead,
        tier: LeadClassification,
        message: ComposedMessage,
        as_of: datetime,
    ) -> RouteOutcome:
        if not self._claim(lead, {"next_action_date": next_action_date(tier, as_of)}):
            return RouteOutcome.CLAIM_LOST

        self._store.append_outreach_record(
            self._record(lead, tier, message, OutreachStatus.DRAFT, as_of)
        )
        logger.info(
            f"Created draft for {tier.value} lead {lead.lead_id}",
            extra={"lead_id": lead.lead_id, "tier": tier.value},
        )
        return RouteOutcome.DRAFTED

    def _dispatch_and_record(
        self,
        lead: Lead,
        tier: LeadClassification,
        message: ComposedMessage,
        as_of: datetime,
    ) -> RouteOutcome:
        claimed = self._claim(
            lead,
            {"last_contact_date": as_of, "next_action_date": next_action_date(tier, as_of)},
        )
        if not claimed:
            return RouteOutcome.CLAIM_LOST

        status, error = self._send(lead, message)
        self._store.append_outreach_record(
            self._record(lead, tier, message, status, as_of, error=error)
        )

        if status == OutreachStatus.SENT:
            logger.info(
                f"Sent {tier.value} follow-up to lead {lead.lead_id} via {lead.outreach_channel.value}",
                extra={"lead_id": lead.lead_id, "tier": tier.value},
            )
            return RouteOutcome.SENT

        logger.warning(
            f"Failed to send {tier.value} follow-up to lead {lead.lead_id}: {error}",
            extra={"lead_id": lead.lead_id, "tier": tier.value, "error": error},
        )
        return RouteOutcome.FAILED

    def _send(self, lead: Lead, message: ComposedMessage) -> Tuple[OutreachStatus, Optional[str]]:
        """Invoke the dispatcher; exceptions and timeouts become FAILED."""

        channel = lead.outreach_channel
        destination = lead.destination_for(channel)

        try:
            if self._dispatch_pool is None:
                status = self._dispatcher.send(channel, destination, message)
            else:
                future = self._dispatch_pool.submit(self._dispatcher.send, channel, destination, message)
                try:
                    status = future.result(timeout=self._dispatch_timeout)
                except FutureTimeoutError:
                    future.cancel()
                    return OutreachStatus.FAILED, f"dispatch timed out after {self._dispatch_timeout}s"
        except Exception as exc:
            return OutreachStatus.FAILED, f"{type(exc).__name__}: {exc}"

        if status == OutreachStatus.SENT:
            return OutreachStatus.SENT, None
        return OutreachStatus.FAILED, "dispatcher reported failure"

    def _record(
        self,
        lead: Lead,
        tier: LeadClassification,
        message: ComposedMessage,
        status: OutreachStatus,
        as_of: datetime,
        error: Optional[str] = None,
    ) -> OutreachRecord:
        return OutreachRecord(
            record_id=new_record_id(),
            lead_id=lead.lead_id,
            owner_id=lead.owner_id,
            channel=lead.outreach_channel,
            subject=message.subject,
            content=message.content,
            direction=OutreachDirection.OUTBOUND,
            status=status,
            tier=tier,
            requires_approval=requires_approval(tier),
            created_at=as_of,
            error=error,
        )

    def close(self) -> None:
        if self._dispatch_pool is not None:
            self._dispatch_pool.shutdown(wait=False, cancel_futures=True)


__all__ = ["OutreachRouter", "RouteOutcome"]
