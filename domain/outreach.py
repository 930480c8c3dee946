"""
Domain: Outreach records.

One OutreachRecord is appended per contact attempt, whether it was drafted
for human approval or dispatched automatically. Records are immutable and
never updated; together they form the outreach audit trail.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .lead import Channel, LeadClassification
from .time import require_utc_timestamp


class OutreachStatus(str, Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    FAILED = "Failed"


class OutreachDirection(str, Enum):
    OUTBOUND = "Outbound"
    INBOUND = "Inbound"


@dataclass(frozen=True, slots=True)
class OutreachRecord:
    """
    Immutable record of one contact attempt.

    - Drafts (Hot tier) carry requires_approval=True and are never dispatched
      by this system.
    - Sent/Failed records carry the dispatcher outcome; `error` holds the
      failure detail for operators.
    """

    record_id: str
    lead_id: str
    owner_id: str
    channel: Channel
    subject: str
    content: str
    direction: OutreachDirection
    status: OutreachStatus
    tier: LeadClassification
    requires_approval: bool
    created_at: datetime
    error: Optional[str] = None

    def __post_init__(self) -> None:
        require_utc_timestamp("created_at", self.created_at)
        if self.status == OutreachStatus.DRAFT and not self.requires_approval:
            raise ValueError("Draft outreach records must require approval")

    @property
    def is_outbound(self) -> bool:
        return self.direction == OutreachDirection.OUTBOUND
