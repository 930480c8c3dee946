"""
Audit log repositories: compliance events and score history (persistence).

Both tables are append-only audit logs.
"""

from __future__ import annotations

from typing import Any, List, Mapping
from uuid import uuid4

from domain.compliance import ComplianceEvent, ComplianceEventType
from domain.scoring import ScoreHistoryEntry
from repositories.serialization import (
    parse_utc_datetime,
    raise_on_error,
    response_rows,
    to_iso_utc,
)

COMPLIANCE_TABLE: str = "compliance_events"
SCORE_HISTORY_TABLE: str = "score_history"


def compliance_event_to_row(event: ComplianceEvent) -> dict[str, Any]:
    return {
        "event_id": event.event_id or str(uuid4()),
        "lead_id": event.lead_id,
        "owner_id": event.owner_id,
        "event_type": event.event_type.value,
        "details": dict(event.details),
        "occurred_at": to_iso_utc(event.occurred_at),
    }


def row_to_compliance_event(row: Mapping[str, Any]) -> ComplianceEvent:
    return ComplianceEvent(
        event_id=str(row["event_id"]) if row.get("event_id") else None,
        lead_id=str(row["lead_id"]),
        owner_id=row.get("owner_id"),
        event_type=ComplianceEventType(row["event_type"]),
        details=row.get("details") or {},
        occurred_at=parse_utc_datetime(row["occurred_at"]),
    )


def list_compliance_events(client: Any, lead_id: str) -> List[ComplianceEvent]:
    response = (
        client.table(COMPLIANCE_TABLE)
        .select("*")
        .eq("lead_id", lead_id)
        .execute()
    )
    raise_on_error(response, "list compliance events")
    return [row_to_compliance_event(row) for row in response_rows(response)]


def insert_compliance_event(client: Any, event: ComplianceEvent) -> None:
    response = client.table(COMPLIANCE_TABLE).insert(compliance_event_to_row(event)).execute()
    raise_on_error(response, "insert compliance event")


def score_history_to_row(entry: ScoreHistoryEntry) -> dict[str, Any]:
    return {
        "entry_id": entry.entry_id or str(uuid4()),
        "lead_id": entry.lead_id,
        "owner_id": entry.owner_id,
        "score": entry.score,
        "classification": entry.classification.value,
        "sub_scores": dict(entry.sub_scores),
        "explainability_card": entry.explainability_card,
        "recorded_at": to_iso_utc(entry.recorded_at),
        "metadata": dict(entry.metadata),
    }


def insert_score_history(client: Any, entry: ScoreHistoryEntry) -> None:
    response = client.table(SCORE_HISTORY_TABLE).insert(score_history_to_row(entry)).execute()
    raise_on_error(response, "insert score history")


__all__ = [
    "COMPLIANCE_TABLE",
    "SCORE_HISTORY_TABLE",
    "compliance_event_to_row",
    "row_to_compliance_event",
    "list_compliance_events",
    "insert_compliance_event",
    "score_history_to_row",
    "insert_score_history",
]
