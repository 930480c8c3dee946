"""
Tests for `services/guards.py`.

Covers rules:
- Any OptOut compliance event vetoes contact.
- Any outbound outreach strictly within the last 24 hours vetoes contact.
- Inbound records and records older than the window do not veto.
- The opt-out guard is evaluated before the anti-spam guard.
"""

from datetime import timedelta

from domain.compliance import ComplianceEvent, ComplianceEventType
from domain.lead import Channel, LeadClassification
from domain.outreach import OutreachDirection, OutreachRecord, OutreachStatus
from services.guards import GuardChain, GuardVerdict


def _record(lead_id, created_at, direction=OutreachDirection.OUTBOUND) -> OutreachRecord:
    return OutreachRecord(
        record_id=f"rec-{lead_id}-{created_at.isoformat()}",
        lead_id=lead_id,
        owner_id="realtor-1",
        channel=Channel.WHATSAPP,
        subject="Hello",
        content="Hi there",
        direction=direction,
        status=OutreachStatus.SENT,
        tier=LeadClassification.WARM,
        requires_approval=False,
        created_at=created_at,
    )


def test_clean_lead_passes(store, make_lead, now) -> None:
    """Verify a lead with no events or recent outreach passes."""

    lead = make_lead()

    result = GuardChain(store).evaluate(lead, now)

    assert result.passed
    assert result.verdict == GuardVerdict.PASSED


def test_opt_out_event_vetoes_contact(store, make_lead, now) -> None:
    """Verify an OptOut compliance event vetoes even an Active lead."""

    lead = make_lead()
    store.append_compliance_event(
        ComplianceEvent(lead_id=lead.lead_id, event_type=ComplianceEventType.OPT_OUT, occurred_at=now - timedelta(days=90))
    )

    result = GuardChain(store).evaluate(lead, now)

    assert result.verdict == GuardVerdict.OPTED_OUT


def test_other_compliance_events_do_not_veto(store, make_lead, now) -> None:
    """Verify intake and consent events are not opt-outs."""

    lead = make_lead()
    store.append_compliance_event(
        ComplianceEvent(lead_id=lead.lead_id, event_type=ComplianceEventType.LEAD_INTAKE, occurred_at=now)
    )

    assert GuardChain(store).evaluate(lead, now).passed


def test_outbound_within_24_hours_vetoes_contact(store, make_lead, now) -> None:
    """Verify an outbound record 23 hours old vetoes contact."""

    lead = make_lead()
    store.append_outreach_record(_record(lead.lead_id, now - timedelta(hours=23)))

    result = GuardChain(store).evaluate(lead, now)

    assert result.verdict == GuardVerdict.RECENT_OUTREACH


def test_outreach_at_window_edge_does_not_veto(store, make_lead, now) -> None:
    """Verify a record exactly 24 hours old is outside the window."""

    lead = make_lead()
    store.append_outreach_record(_record(lead.lead_id, now - timedelta(hours=24)))

    assert GuardChain(store).evaluate(lead, now).passed


def test_inbound_records_do_not_veto(store, make_lead, now) -> None:
    """Verify replies from the lead do not count as outreach."""

    lead = make_lead()
    store.append_outreach_record(_record(lead.lead_id, now - timedelta(hours=1), OutreachDirection.INBOUND))

    assert GuardChain(store).evaluate(lead, now).passed


def test_other_leads_outreach_does_not_veto(store, make_lead, now) -> None:
    """Verify the anti-spam window is per lead."""

    lead = make_lead()
    store.append_outreach_record(_record("someone-else", now - timedelta(hours=1)))

    assert GuardChain(store).evaluate(lead, now).passed


def test_opt_out_is_reported_before_recent_outreach(store, make_lead, now) -> None:
    """Verify the first veto in chain order wins."""

    lead = make_lead()
    store.append_outreach_record(_record(lead.lead_id, now - timedelta(hours=1)))
    store.append_compliance_event(
        ComplianceEvent(lead_id=lead.lead_id, event_type=ComplianceEventType.OPT_OUT, occurred_at=now)
    )

    assert GuardChain(store).evaluate(lead, now).verdict == GuardVerdict.OPTED_OUT
