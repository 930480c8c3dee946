"""
Supabase-backed DocumentStore.

Thin adapter binding the repository functions to one Supabase client. The
claim (conditional update) is a single `UPDATE ... WHERE lead_id = ? AND
version = ?`, which PostgreSQL executes atomically per row.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Mapping, Optional

from domain.compliance import ComplianceEvent
from domain.lead import Lead
from domain.outreach import OutreachRecord
from domain.scoring import ScoreHistoryEntry
from repositories import audit_repository, lead_repository, outreach_repository
from repositories.document_store import LeadFilter, UpdateOutcome


class SupabaseDocumentStore:
    def __init__(self, client: Any) -> None:
        self._client = client

    def query_leads(self, lead_filter: LeadFilter) -> List[Lead]:
        return lead_repository.list_leads_by_filter(self._client, lead_filter)

    def get_lead(self, lead_id: str) -> Optional[Lead]:
        return lead_repository.get_lead_by_id(self._client, lead_id)

    def get_compliance_events(self, lead_id: str) -> List[ComplianceEvent]:
        return audit_repository.list_compliance_events(self._client, lead_id)

    def append_compliance_event(self, event: ComplianceEvent) -> None:
        audit_repository.insert_compliance_event(self._client, event)

    def get_recent_outreach(self, lead_id: str, since: datetime) -> List[OutreachRecord]:
        return outreach_repository.list_outreach_since(self._client, lead_id, since)

    def update_lead(
        self,
        lead_id: str,
        fields: Mapping[str, Any],
        expected_version: Optional[int] = None,
    ) -> UpdateOutcome:
        return lead_repository.update_lead_fields(self._client, lead_id, fields, expected_version)

    def append_outreach_record(self, record: OutreachRecord) -> None:
        outreach_repository.insert_outreach_record(self._client, record)

    def append_score_history(self, entry: ScoreHistoryEntry) -> None:
        audit_repository.insert_score_history(self._client, entry)


__all__ = ["SupabaseDocumentStore"]
