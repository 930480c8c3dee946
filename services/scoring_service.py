"""
Scoring trigger.

Invoked whenever a lead document changes. If none of the watched raw
attributes (budget, timeline, motivation, lender_status, last_contact_date)
changed, it is a no-op. Otherwise the lead is scored as of `as_of`, the derived
fields are written back, and a score history entry is appended for audit.

Derived-field writes are unconditional: they never touch cadence fields or the
claim version, so a rescore cannot steal or block a scheduler claim.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from domain.lead import WATCHED_FIELDS, Lead
from domain.scoring import ScoringResult, history_entry_for, score_lead
from domain.time import require_utc_timestamp
from repositories.document_store import DocumentStore, UpdateOutcome

logger = logging.getLogger(__name__)


def changed_watched_fields(before: Optional[Lead], after: Lead) -> list[str]:
    """Names of watched attributes that differ; all of them when there is no prior snapshot."""

    if before is None:
        return list(WATCHED_FIELDS)
    return [name for name in WATCHED_FIELDS if getattr(before, name) != getattr(after, name)]


def score_and_persist(store: DocumentStore, lead: Lead, as_of: datetime) -> ScoringResult:
    """
    Score a lead and persist score, classification, explainability card and
    last_scored_at, then append a score history entry.

    Raises:
    - RuntimeError from the store if persistence fails.
    - LookupError if the lead no longer exists.
    """

    require_utc_timestamp("as_of", as_of)

    result = score_lead(lead, as_of)
    outcome = store.update_lead(lead.lead_id, result.lead_fields(as_of))
    if outcome != UpdateOutcome.APPLIED:
        raise LookupError(f"Lead {lead.lead_id} not found while persisting score")

    store.append_score_history(history_entry_for(lead, result, as_of))

    logger.info(
        f"Lead {lead.lead_id} scored: {result.score} ({result.classification.value})",
        extra={
            "lead_id": lead.lead_id,
            "score": result.score,
            "classification": result.classification.value,
            "sub_scores": result.sub_scores.as_dict(),
        },
    )
    return result


def handle_lead_change(
    store: DocumentStore,
    before: Optional[Lead],
    after: Lead,
    as_of: datetime,
) -> Optional[ScoringResult]:
    """Rescore `after` if a watched attribute changed; return None when nothing was done."""

    changed = changed_watched_fields(before, after)
    if not changed:
        logger.debug(f"No scoring-relevant changes for lead {after.lead_id}")
        return None

    logger.info(
        f"Scoring lead: {after.lead_id}",
        extra={"lead_id": after.lead_id, "changed_fields": changed},
    )
    return score_and_persist(store, after, as_of)


def rescore_lead(store: DocumentStore, lead_id: str, as_of: datetime) -> Optional[ScoringResult]:
    """On-demand rescore of a stored lead; None if the lead does not exist."""

    lead = store.get_lead(lead_id)
    if lead is None:
        return None
    return score_and_persist(store, lead, as_of)


__all__ = [
    "changed_watched_fields",
    "score_and_persist",
    "handle_lead_change",
    "rescore_lead",
]
