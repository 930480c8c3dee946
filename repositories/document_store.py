"""
Document store contract.

The scoring engine and the cadence scheduler never reach for an ambient
database handle; they receive a DocumentStore. Two backends implement it:

- repositories.supabase_store.SupabaseDocumentStore (production)
- repositories.memory_store.InMemoryDocumentStore (tests and local runs)

Write rules enforced by every backend:
- update_lead may only write derived fields (scoring) and cadence fields
  (scheduler). Raw attributes, owner and status are read-only here.
- update_lead with an expected_version is a conditional update: it applies
  only if the stored version still equals expected_version, and bumps the
  version by one. This is the scheduler's claim.
- Outreach records, compliance events and score history are append-only.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, List, Mapping, Optional, Protocol

from domain.compliance import ComplianceEvent
from domain.lead import CADENCE_FIELDS, DERIVED_FIELDS, Lead, LeadClassification, LeadStatus
from domain.outreach import OutreachRecord
from domain.scoring import ScoreHistoryEntry

WRITABLE_LEAD_FIELDS = DERIVED_FIELDS | CADENCE_FIELDS


class UpdateOutcome(str, Enum):
    APPLIED = "applied"
    CONFLICT = "conflict"


@dataclass(frozen=True, slots=True)
class LeadFilter:
    classification: Optional[LeadClassification] = None
    status: Optional[LeadStatus] = None
    owner_id: Optional[str] = None

    def matches(self, lead: Lead) -> bool:
        if self.classification is not None and lead.classification != self.classification:
            return False
        if self.status is not None and lead.status != self.status:
            return False
        if self.owner_id is not None and lead.owner_id != self.owner_id:
            return False
        return True


def require_writable_fields(fields: Mapping[str, Any]) -> None:
    """Reject writes outside the derived/cadence field set."""

    if not fields:
        raise ValueError("update_lead requires at least one field")
    forbidden = sorted(set(fields) - WRITABLE_LEAD_FIELDS)
    if forbidden:
        raise ValueError(f"Fields are not writable by this service: {', '.join(forbidden)}")


class DocumentStore(Protocol):
    def query_leads(self, lead_filter: LeadFilter) -> List[Lead]:
        ...

    def get_lead(self, lead_id: str) -> Optional[Lead]:
        ...

    def get_compliance_events(self, lead_id: str) -> List[ComplianceEvent]:
        ...

    def append_compliance_event(self, event: ComplianceEvent) -> None:
        ...

    def get_recent_outreach(self, lead_id: str, since: datetime) -> List[OutreachRecord]:
        """Outreach records for the lead created strictly after `since`."""
        ...

    def update_lead(
        self,
        lead_id: str,
        fields: Mapping[str, Any],
        expected_version: Optional[int] = None,
    ) -> UpdateOutcome:
        ...

    def append_outreach_record(self, record: OutreachRecord) -> None:
        ...

    def append_score_history(self, entry: ScoreHistoryEntry) -> None:
        ...


__all__ = [
    "DocumentStore",
    "LeadFilter",
    "UpdateOutcome",
    "WRITABLE_LEAD_FIELDS",
    "require_writable_fields",
]
