"""
In-memory DocumentStore.

Thread-safe backend used by tests and local dry runs. A single lock guards all
collections, so a conditional update is atomic with respect to every other
writer, matching the claim semantics of the Supabase backend.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional
from uuid import uuid4

from domain.compliance import ComplianceEvent
from domain.lead import Lead
from domain.outreach import OutreachRecord
from domain.scoring import ScoreHistoryEntry
from repositories.document_store import LeadFilter, UpdateOutcome, require_writable_fields


class InMemoryDocumentStore:
    def __init__(
        self,
        leads: Iterable[Lead] = (),
        compliance_events: Iterable[ComplianceEvent] = (),
        outreach_records: Iterable[OutreachRecord] = (),
    ) -> None:
        self._lock = threading.Lock()
        self._leads: Dict[str, Lead] = {lead.lead_id: lead for lead in leads}
        self._compliance_events: List[ComplianceEvent] = list(compliance_events)
        self._outreach_records: List[OutreachRecord] = list(outreach_records)
        self._score_history: List[ScoreHistoryEntry] = []

    # Seeding and inspection helpers (not part of the DocumentStore contract).

    def put_lead(self, lead: Lead) -> None:
        with self._lock:
            self._leads[lead.lead_id] = lead

    @property
    def outreach_records(self) -> List[OutreachRecord]:
        with self._lock:
            return list(self._outreach_records)

    @property
    def score_history(self) -> List[ScoreHistoryEntry]:
        with self._lock:
            return list(self._score_history)

    @property
    def compliance_events(self) -> List[ComplianceEvent]:
        with self._lock:
            return list(self._compliance_events)

    # DocumentStore contract.

    def query_leads(self, lead_filter: LeadFilter) -> List[Lead]:
        with self._lock:
            return [lead for lead in self._leads.values() if lead_filter.matches(lead)]

    def get_lead(self, lead_id: str) -> Optional[Lead]:
        with self._lock:
            return self._leads.get(lead_id)

    def get_compliance_events(self, lead_id: str) -> List[ComplianceEvent]:
        with self._lock:
            return [event for event in self._compliance_events if event.lead_id == lead_id]

    def append_compliance_event(self, event: ComplianceEvent) -> None:
        if event.event_id is None:
            event = replace(event, event_id=str(uuid4()))
        with self._lock:
            self._compliance_events.append(event)

    def get_recent_outreach(self, lead_id: str, since: datetime) -> List[OutreachRecord]:
        with self._lock:
            return [
                record
                for record in self._outreach_records
                if record.lead_id == lead_id and record.created_at > since
            ]

    def update_lead(
        self,
        lead_id: str,
        fields: Mapping[str, Any],
        expected_version: Optional[int] = None,
    ) -> UpdateOutcome:
        require_writable_fields(fields)

        with self._lock:
            current = self._leads.get(lead_id)
            if current is None:
                return UpdateOutcome.CONFLICT

            if expected_version is None:
                self._leads[lead_id] = replace(current, **dict(fields))
                return UpdateOutcome.APPLIED

            if current.version != expected_version:
                return UpdateOutcome.CONFLICT

            self._leads[lead_id] = replace(current, **dict(fields), version=current.version + 1)
            return UpdateOutcome.APPLIED

    def append_outreach_record(self, record: OutreachRecord) -> None:
        with self._lock:
            self._outreach_records.append(record)

    def append_score_history(self, entry: ScoreHistoryEntry) -> None:
        if entry.entry_id is None:
            entry = replace(entry, entry_id=str(uuid4()))
        with self._lock:
            self._score_history.append(entry)


__all__ = ["InMemoryDocumentStore"]
