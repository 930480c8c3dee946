"""
Outreach record repository (persistence).

Outreach records are append-only: this module only inserts and reads them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Mapping
from uuid import uuid4

from domain.lead import Channel, LeadClassification
from domain.outreach import OutreachDirection, OutreachRecord, OutreachStatus
from repositories.serialization import (
    parse_utc_datetime,
    raise_on_error,
    response_rows,
    to_iso_utc,
)

OUTREACH_TABLE: str = "outreach_records"


def new_record_id() -> str:
    return str(uuid4())


def outreach_to_row(record: OutreachRecord) -> dict[str, Any]:
    return {
        "record_id": record.record_id,
        "lead_id": record.lead_id,
        "owner_id": record.owner_id,
        "channel": record.channel.value,
        "subject": record.subject,
        "content": record.content,
        "direction": record.direction.value,
        "status": record.status.value,
        "tier": record.tier.value,
        "requires_approval": record.requires_approval,
        "created_at": to_iso_utc(record.created_at),
        "error": record.error,
    }


def row_to_outreach(row: Mapping[str, Any]) -> OutreachRecord:
    return OutreachRecord(
        record_id=str(row["record_id"]),
        lead_id=str(row["lead_id"]),
        owner_id=str(row.get("owner_id") or ""),
        channel=Channel(row["channel"]),
        subject=str(row.get("subject") or ""),
        content=str(row.get("content") or ""),
        direction=OutreachDirection(row["direction"]),
        status=OutreachStatus(row["status"]),
        tier=LeadClassification(row["tier"]),
        requires_approval=bool(row.get("requires_approval")),
        created_at=parse_utc_datetime(row["created_at"]),
        error=row.get("error") or None,
    )


def insert_outreach_record(client: Any, record: OutreachRecord) -> None:
    response = client.table(OUTREACH_TABLE).insert(outreach_to_row(record)).execute()
    raise_on_error(response, "insert outreach record")


def list_outreach_since(client: Any, lead_id: str, since: datetime) -> List[OutreachRecord]:
    """Outreach records for a lead created strictly after `since`."""

    response = (
        client.table(OUTREACH_TABLE)
        .select("*")
        .eq("lead_id", lead_id)
        .gt("created_at", to_iso_utc(since))
        .execute()
    )
    raise_on_error(response, "list outreach records")
    return [row_to_outreach(row) for row in response_rows(response)]


__all__ = [
    "OUTREACH_TABLE",
    "new_record_id",
    "outreach_to_row",
    "row_to_outreach",
    "insert_outreach_record",
    "list_outreach_since",
]
