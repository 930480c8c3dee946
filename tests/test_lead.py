"""
Tests for `domain/lead.py`.

Covers contract rules:
- Leads are immutable snapshots.
- Timestamps (last_contact_date, last_scored_at, next_action_date) must be UTC.
- Raw attributes are preserved as provided, malformed or not.
- Lender status parsing accepts loose spellings and rejects unknown values.
- Outreach channel defaults to WhatsApp and picks the matching destination.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone

import pytest

from domain.lead import Channel, Lead, LeadClassification, LeadStatus, LenderStatus


def test_lead_is_immutable() -> None:
    """Verify fields cannot be reassigned after creation."""

    lead = Lead(lead_id="lead-1", owner_id="realtor-1", classification=LeadClassification.WARM)

    with pytest.raises(FrozenInstanceError):
        lead.classification = LeadClassification.HOT  # type: ignore[misc]


@pytest.mark.parametrize("field_name", ["last_contact_date", "last_scored_at", "next_action_date"])
def test_lead_timestamps_must_be_utc(field_name: str) -> None:
    """Verify naive and non-UTC timestamps are rejected."""

    with pytest.raises(ValueError):
        Lead(lead_id="lead-1", owner_id="realtor-1", **{field_name: datetime(2025, 1, 1, 0, 0, 0)})

    with pytest.raises(ValueError):
        Lead(
            lead_id="lead-1",
            owner_id="realtor-1",
            **{field_name: datetime(2025, 1, 1, 0, 0, 0, tzinfo=timezone(timedelta(hours=-5)))},
        )


def test_lead_defaults() -> None:
    """Verify a minimal lead is Active, unscored and at version 0."""

    lead = Lead(lead_id="lead-1", owner_id="realtor-1")

    assert lead.status == LeadStatus.ACTIVE
    assert lead.is_active()
    assert lead.score is None
    assert lead.classification is None
    assert lead.version == 0


def test_lead_preserves_raw_attributes() -> None:
    """Verify malformed raw values are stored untouched for the scorers to degrade."""

    lead = Lead(lead_id="lead-1", owner_id="realtor-1", budget="about 400k", timeline="  soon-ish ")

    assert lead.budget == "about 400k"
    assert lead.timeline == "  soon-ish "


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("PreApproved", LenderStatus.PRE_APPROVED),
        ("pre-approved", LenderStatus.PRE_APPROVED),
        ("Pre Qualified", LenderStatus.PRE_QUALIFIED),
        ("application_submitted", LenderStatus.APPLICATION_SUBMITTED),
        (LenderStatus.NOT_APPLIED, LenderStatus.NOT_APPLIED),
        ("unknown", LenderStatus.UNKNOWN),
        ("approved-ish", None),
        ("", None),
        (None, None),
        (42, None),
    ],
)
def test_lender_status_parse(raw: object, expected: LenderStatus | None) -> None:
    """Verify loose spellings resolve and unknown values return None."""

    assert LenderStatus.parse(raw) == expected


def test_outreach_channel_defaults_to_whatsapp() -> None:
    """Verify WhatsApp is the default channel and uses the phone number."""

    lead = Lead(lead_id="lead-1", owner_id="realtor-1", phone="+15555550100", email="a@example.com")

    assert lead.outreach_channel == Channel.WHATSAPP
    assert lead.destination_for(lead.outreach_channel) == "+15555550100"


def test_preferred_email_channel_uses_email() -> None:
    """Verify an email preference routes to the email address."""

    lead = Lead(
        lead_id="lead-1",
        owner_id="realtor-1",
        phone="+15555550100",
        email="a@example.com",
        preferred_channel=Channel.EMAIL,
    )

    assert lead.outreach_channel == Channel.EMAIL
    assert lead.destination_for(lead.outreach_channel) == "a@example.com"


@pytest.mark.parametrize("first_name, expected", [("Jordan", "Jordan"), ("  ", "there"), (None, "there")])
def test_display_name(first_name: str | None, expected: str) -> None:
    """Verify greetings fall back to a neutral name."""

    assert Lead(lead_id="lead-1", owner_id="realtor-1", first_name=first_name).display_name == expected
