"""
Tests for `scripts/rescore_leads.py`.

Covers rules:
- Matching leads are rescored and persisted with a history entry each.
- A dry run computes tiers without writing.
- Non-matching leads are left untouched.
"""

from datetime import timedelta

from domain.lead import LeadClassification, LeadStatus
from repositories.document_store import LeadFilter
from scripts.rescore_leads import rescore_leads


def test_rescore_persists_matching_leads(store, make_lead, now) -> None:
    """Verify a lead whose engagement has decayed moves tier and is persisted."""

    lead = make_lead(classification=LeadClassification.WARM, budget=50_000, last_contact_date=now - timedelta(days=60))
    other = make_lead(owner_id="realtor-2")
    store.put_lead(lead)
    store.put_lead(other)

    changes = rescore_leads(store, LeadFilter(status=LeadStatus.ACTIVE, owner_id="realtor-1"))

    assert [(changed.lead_id, before, after) for changed, before, after in changes] == [
        (lead.lead_id, LeadClassification.WARM, LeadClassification.NURTURE)
    ]
    assert store.get_lead(lead.lead_id).classification == LeadClassification.NURTURE
    assert store.get_lead(other.lead_id) == other
    assert len(store.score_history) == 1


def test_dry_run_writes_nothing(store, make_lead) -> None:
    """Verify a dry run leaves the store unchanged."""

    lead = make_lead(budget=600_000)
    store.put_lead(lead)

    changes = rescore_leads(store, LeadFilter(), dry_run=True)

    assert len(changes) == 1
    assert store.get_lead(lead.lead_id) == lead
    assert store.score_history == []
