"""
Scoring API Endpoints.

Endpoints that trigger the scoring engine: the database webhook fired on every
lead update, and an on-demand rescore.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_store
from api.models import LeadChangeWebhook, ScoreResponse, SubScoresResponse
from domain.scoring import ScoringResult
from domain.time import utc_now
from repositories.document_store import DocumentStore
from repositories.lead_repository import row_to_lead
from services.scoring_service import handle_lead_change, rescore_lead

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(lead_id: str, result: Optional[ScoringResult]) -> ScoreResponse:
    if result is None:
        return ScoreResponse(lead_id=lead_id, scored=False)
    return ScoreResponse(
        lead_id=lead_id,
        scored=True,
        score=result.score,
        classification=result.classification.value,
        explainability_card=result.explanation,
        sub_scores=SubScoresResponse(**result.sub_scores.as_dict()),
    )


@router.post(
    "/webhooks/lead-updated",
    response_model=ScoreResponse,
    summary="Lead Change Webhook",
    description="Rescore a lead when one of its scoring attributes changes."
)
def lead_updated(payload: LeadChangeWebhook, store: DocumentStore = Depends(get_store)):
    """
    Receive a database webhook for the leads table.

    **Behavior:**
    - DELETE events and payloads without a record are ignored.
    - If none of budget, timeline, motivation, lender_status or
      last_contact_date changed, nothing is written (`scored: false`).
    - Otherwise the lead is scored and score, classification,
      explainability_card and last_scored_at are persisted.
    """
    if payload.type.upper() == "DELETE" or not payload.record:
        lead_id = str((payload.record or payload.old_record or {}).get("lead_id", ""))
        return ScoreResponse(lead_id=lead_id, scored=False)

    try:
        after = row_to_lead(payload.record)
        before = row_to_lead(payload.old_record) if payload.old_record else None
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail=f"Invalid lead record: {e}")

    try:
        result = handle_lead_change(store, before, after, utc_now())
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RuntimeError as e:
        logger.exception(f"Error scoring lead {after.lead_id}")
        raise HTTPException(status_code=500, detail=str(e))

    return _to_response(after.lead_id, result)


@router.post(
    "/leads/{lead_id}/score",
    response_model=ScoreResponse,
    summary="Rescore Lead",
    description="Recompute and persist the score of a stored lead."
)
def score_lead_now(lead_id: str, store: DocumentStore = Depends(get_store)):
    try:
        result = rescore_lead(store, lead_id, utc_now())
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RuntimeError as e:
        logger.exception(f"Error scoring lead {lead_id}")
        raise HTTPException(status_code=500, detail=str(e))

    if result is None:
        raise HTTPException(status_code=404, detail=f"Lead {lead_id} not found")
    return _to_response(lead_id, result)
