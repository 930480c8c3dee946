"""
Domain: Lead entity.

A Lead is a single prospective buyer owned by exactly one realtor (owner_id).

Field ownership:
- Raw attributes (budget, timeline, motivation, lender_status, last contact
  history, contact details) belong to the owner and intake collaborators.
- Derived attributes (score, classification, explainability_card,
  last_scored_at) are written only by the scoring engine.
- Cadence attributes (last_contact_date, next_action_date) are written only by
  the cadence scheduler.
- status is read-only input for this core.

Every conditional update bumps `version`, which is the claim token used by the
cadence scheduler.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from .time import require_optional_utc_timestamp


class LeadClassification(str, Enum):
    HOT = "Hot"
    WARM = "Warm"
    NURTURE = "Nurture"


class LeadStatus(str, Enum):
    ACTIVE = "Active"
    OPTED_OUT = "OptedOut"
    CLOSED = "Closed"


class Channel(str, Enum):
    WHATSAPP = "WhatsApp"
    EMAIL = "Email"


class LenderStatus(str, Enum):
    PRE_APPROVED = "PreApproved"
    PRE_QUALIFIED = "PreQualified"
    APPLICATION_SUBMITTED = "ApplicationSubmitted"
    NOT_APPLIED = "NotApplied"
    UNKNOWN = "Unknown"

    @staticmethod
    def parse(value: Any) -> Optional["LenderStatus"]:
        """
        Resolve a LenderStatus from loosely formatted input.

        Accepts enum members and spellings such as "Pre-Approved",
        "pre approved" or "PreApproved". Returns None for absent or
        unrecognised values; callers treat that as "not provided".
        """

        if isinstance(value, LenderStatus):
            return value
        if not isinstance(value, str):
            return None

        key = re.sub(r"[^a-z]", "", value.lower())
        if not key:
            return None
        for status in LenderStatus:
            if status.value.lower() == key:
                return status
        return None


# Fields the scoring engine owns.
DERIVED_FIELDS = frozenset({"score", "classification", "explainability_card", "last_scored_at"})

# Fields the cadence scheduler owns.
CADENCE_FIELDS = frozenset({"last_contact_date", "next_action_date"})

# Raw attributes whose change triggers a rescore.
WATCHED_FIELDS = ("budget", "timeline", "motivation", "lender_status", "last_contact_date")


@dataclass(frozen=True, slots=True)
class Lead:
    """
    Snapshot of a lead as read from the document store.

    Raw attributes are stored as provided; the factor scorers are responsible
    for degrading missing or malformed values to documented defaults.
    """

    lead_id: str
    owner_id: str

    # Raw attributes
    budget: Any = None
    timeline: Optional[str] = None
    motivation: Optional[str] = None
    lender_status: Optional[LenderStatus] = None
    last_contact_date: Optional[datetime] = None
    response_rate: Optional[float] = None

    # Contact details
    first_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    preferred_channel: Optional[Channel] = None

    status: LeadStatus = LeadStatus.ACTIVE

    # Derived
    score: Optional[int] = None
    classification: Optional[LeadClassification] = None
    explainability_card: Optional[str] = None
    last_scored_at: Optional[datetime] = None

    # Cadence
    next_action_date: Optional[datetime] = None
    version: int = 0

    def __post_init__(self) -> None:
        require_optional_utc_timestamp("last_contact_date", self.last_contact_date)
        require_optional_utc_timestamp("last_scored_at", self.last_scored_at)
        require_optional_utc_timestamp("next_action_date", self.next_action_date)

    def is_active(self) -> bool:
        return self.status == LeadStatus.ACTIVE

    @property
    def outreach_channel(self) -> Channel:
        """Channel used for automated outreach (WhatsApp unless the lead prefers email)."""

        return self.preferred_channel or Channel.WHATSAPP

    def destination_for(self, channel: Channel) -> Optional[str]:
        if channel == Channel.EMAIL:
            return self.email
        return self.phone

    @property
    def display_name(self) -> str:
        return (self.first_name or "").strip() or "there"
