"""
Lead repository (persistence).

This module provides *only* persistence operations for the Lead domain entity.
No business rules (scoring, classification, cadence) belong here.

Every function takes the Supabase client explicitly.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from domain.lead import Channel, Lead, LeadClassification, LeadStatus, LenderStatus
from repositories.document_store import LeadFilter, UpdateOutcome, require_writable_fields
from repositories.serialization import (
    parse_optional_utc_datetime,
    raise_on_error,
    response_rows,
    to_db_value,
    to_optional_iso_utc,
)

# Supabase table name for Lead records.
# Keep this aligned with your database schema.
LEADS_TABLE: str = "leads"


def _optional_enum(enum_type: Any, value: Any) -> Any:
    if value is None or value == "":
        return None
    try:
        return enum_type(value)
    except ValueError:
        return None


def _optional_str(value: Any) -> Optional[str]:
    return str(value) if value not in (None, "") else None


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def lead_to_row(lead: Lead) -> dict[str, Any]:
    """Convert a domain Lead to a Supabase row payload."""

    return {
        "lead_id": lead.lead_id,
        "owner_id": lead.owner_id,

        # Raw attributes
        "budget": lead.budget,
        "timeline": lead.timeline,
        "motivation": lead.motivation,
        "lender_status": lead.lender_status.value if lead.lender_status else None,
        "last_contact_date": to_optional_iso_utc(lead.last_contact_date),
        "response_rate": lead.response_rate,

        # Contact details
        "first_name": lead.first_name,
        "email": lead.email,
        "phone": lead.phone,
        "preferred_channel": lead.preferred_channel.value if lead.preferred_channel else None,

        "status": lead.status.value,

        # Derived
        "score": lead.score,
        "classification": lead.classification.value if lead.classification else None,
        "explainability_card": lead.explainability_card,
        "last_scored_at": to_optional_iso_utc(lead.last_scored_at),

        # Cadence
        "next_action_date": to_optional_iso_utc(lead.next_action_date),
        "version": lead.version,
    }


def row_to_lead(row: Mapping[str, Any]) -> Lead:
    """
    Convert a Supabase row into a domain Lead.

    Raw attributes are passed through leniently: an unrecognised lender status
    or channel becomes None rather than failing the whole row.
    """

    score = row.get("score")

    return Lead(
        lead_id=str(row["lead_id"]),
        owner_id=str(row.get("owner_id") or ""),

        budget=row.get("budget"),
        timeline=_optional_str(row.get("timeline")),
        motivation=_optional_str(row.get("motivation")),
        lender_status=LenderStatus.parse(row.get("lender_status")),
        last_contact_date=parse_optional_utc_datetime(row.get("last_contact_date")),
        response_rate=_optional_float(row.get("response_rate")),

        first_name=_optional_str(row.get("first_name")),
        email=_optional_str(row.get("email")),
        phone=_optional_str(row.get("phone")),
        preferred_channel=_optional_enum(Channel, row.get("preferred_channel")),

        status=_optional_enum(LeadStatus, row.get("status")) or LeadStatus.ACTIVE,

        score=int(score) if score is not None else None,
        classification=_optional_enum(LeadClassification, row.get("classification")),
        explainability_card=_optional_str(row.get("explainability_card")),
        last_scored_at=parse_optional_utc_datetime(row.get("last_scored_at")),

        next_action_date=parse_optional_utc_datetime(row.get("next_action_date")),
        version=int(row.get("version") or 0),
    )


def fields_to_row(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Convert a partial update of domain fields into column values."""

    return {name: to_db_value(value) for name, value in fields.items()}


def list_leads_by_filter(client: Any, lead_filter: LeadFilter) -> List[Lead]:
    query = client.table(LEADS_TABLE).select("*")
    if lead_filter.classification is not None:
        query = query.eq("classification", lead_filter.classification.value)
    if lead_filter.status is not None:
        query = query.eq("status", lead_filter.status.value)
    if lead_filter.owner_id is not None:
        query = query.eq("owner_id", lead_filter.owner_id)

    response = query.execute()
    raise_on_error(response, "list leads")
    return [row_to_lead(row) for row in response_rows(response)]


def get_lead_by_id(client: Any, lead_id: str) -> Lead | None:
    """
    Fetch a Lead by ID.

    Returns:
    - Lead if found
    - None if no record exists for the given ID
    """

    response = (
        client.table(LEADS_TABLE)
        .select("*")
        .eq("lead_id", lead_id)
        .limit(1)
        .execute()
    )
    raise_on_error(response, "fetch lead")

    rows = response_rows(response)
    if not rows:
        return None
    return row_to_lead(rows[0])


def update_lead_fields(
    client: Any,
    lead_id: str,
    fields: Mapping[str, Any],
    expected_version: Optional[int] = None,
) -> UpdateOutcome:
    """
    Update derived/cadence fields of a lead.

    With expected_version, the update is conditional on the stored version
    (a compare-and-set executed as a single UPDATE ... WHERE statement) and
    bumps the version. Zero affected rows means another writer won the race.
    """

    require_writable_fields(fields)
    payload = fields_to_row(fields)

    query = client.table(LEADS_TABLE)
    if expected_version is None:
        statement = query.update(payload).eq("lead_id", lead_id)
    else:
        payload["version"] = expected_version + 1
        statement = query.update(payload).eq("lead_id", lead_id).eq("version", expected_version)

    response = statement.execute()
    raise_on_error(response, "update lead")

    if not response_rows(response):
        return UpdateOutcome.CONFLICT
    return UpdateOutcome.APPLIED


__all__ = [
    "LEADS_TABLE",
    "lead_to_row",
    "row_to_lead",
    "list_leads_by_filter",
    "get_lead_by_id",
    "update_lead_fields",
]
