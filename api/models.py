"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


# ============================================================================
# Scoring Models
# ============================================================================

class LeadChangeWebhook(BaseModel):
    """Supabase database webhook payload for the leads table."""
    type: str = Field(..., description="INSERT, UPDATE or DELETE")
    table: str = "leads"
    record: Optional[Dict[str, Any]] = None
    old_record: Optional[Dict[str, Any]] = None

    class Config:
        json_schema_extra = {
            "example": {
                "type": "UPDATE",
                "table": "leads",
                "record": {
                    "lead_id": "lead-123",
                    "owner_id": "realtor-9",
                    "budget": 600000,
                    "timeline": "ASAP",
                    "lender_status": "PreApproved",
                    "status": "Active",
                    "version": 3
                },
                "old_record": {
                    "lead_id": "lead-123",
                    "owner_id": "realtor-9",
                    "budget": 350000,
                    "timeline": "ASAP",
                    "lender_status": "PreApproved",
                    "status": "Active",
                    "version": 3
                }
            }
        }


class SubScoresResponse(BaseModel):
    budget: int
    timeline: int
    lender_status: int
    engagement: int
    motivation: int


class ScoreResponse(BaseModel):
    """Result of scoring a lead."""
    lead_id: str
    scored: bool
    score: Optional[int] = None
    classification: Optional[str] = None
    explainability_card: Optional[str] = None
    sub_scores: Optional[SubScoresResponse] = None

    class Config:
        json_schema_extra = {
            "example": {
                "lead_id": "lead-123",
                "scored": True,
                "score": 90,
                "classification": "Hot",
                "explainability_card": "Hot because: High budget ($600,000), Short timeline (immediate), "
                                       "Pre-approved lender status. Score: 90/100",
                "sub_scores": {
                    "budget": 100,
                    "timeline": 100,
                    "lender_status": 100,
                    "engagement": 50,
                    "motivation": 30
                }
            }
        }


# ============================================================================
# Cadence Models
# ============================================================================

class CadenceRunResponse(BaseModel):
    """Summary of one cadence run."""
    started_at: datetime
    candidates: int
    drafted: int
    sent: int
    failed: int
    skipped_opt_out: int
    skipped_recent_outreach: int
    claim_conflicts: int
    errors: int
    timed_out: int
