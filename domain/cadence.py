"""
Domain: Cadence rules.

Contract implemented here:
- Recency thresholds per tier: Hot = 2 days, Warm = 7 days, Nurture = 30 days
  since last_contact_date. A lead never contacted is infinitely stale.
- A lead is due for its tier iff it is Active, its persisted classification is
  that tier, the elapsed time since last contact is >= the threshold
  (boundary inclusive), and its next_action_date is absent or not in the future.
- Anti-spam window: any outbound outreach within the last 24 hours vetoes
  contact regardless of tier.
- Hot leads go to a human-approval draft; Warm and Nurture are dispatched
  automatically.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Mapping

from .lead import Lead, LeadClassification
from .time import elapsed_since, require_utc_timestamp

CADENCE_THRESHOLDS: Mapping[LeadClassification, timedelta] = {
    LeadClassification.HOT: timedelta(days=2),
    LeadClassification.WARM: timedelta(days=7),
    LeadClassification.NURTURE: timedelta(days=30),
}

ANTI_SPAM_WINDOW = timedelta(hours=24)

# Tiers processed by the scheduler, in processing order.
CADENCE_TIERS = (LeadClassification.HOT, LeadClassification.WARM, LeadClassification.NURTURE)


def threshold_for(tier: LeadClassification) -> timedelta:
    return CADENCE_THRESHOLDS[tier]


def requires_approval(tier: LeadClassification) -> bool:
    return tier == LeadClassification.HOT


def is_stale_for(lead: Lead, tier: LeadClassification, as_of: datetime) -> bool:
    elapsed = elapsed_since(lead.last_contact_date, as_of)
    if elapsed is None:
        return True
    return elapsed >= threshold_for(tier)


def is_due(lead: Lead, tier: LeadClassification, as_of: datetime) -> bool:
    """Whether `lead` is a cadence candidate for `tier` at `as_of`."""

    require_utc_timestamp("as_of", as_of)

    if not lead.is_active():
        return False
    if lead.classification != tier:
        return False
    if lead.next_action_date is not None and lead.next_action_date > as_of:
        return False
    return is_stale_for(lead, tier, as_of)


def next_action_date(tier: LeadClassification, as_of: datetime) -> datetime:
    return as_of + threshold_for(tier)


def anti_spam_cutoff(as_of: datetime) -> datetime:
    return as_of - ANTI_SPAM_WINDOW
