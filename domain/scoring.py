"""
Domain: Scoring engine.

Combines the five factor sub-scores with fixed weights into a total score,
then delegates to the classification policy and the explainability generator.

    total = round_half_up( sum(weight_i * sub_score_i) / 100 )

Weights sum to 100 and every sub-score is in [0, 100], so total is in
[0, 100] by construction. The engine is pure and total: evaluation instants
are passed explicitly and attribute defects never raise.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from .classification import classify
from .explainability import generate_explainability_card
from .factors import (
    budget_score,
    engagement_score,
    lender_status_score,
    motivation_score,
    timeline_score,
)
from .lead import Lead, LeadClassification
from .time import require_utc_timestamp

FACTOR_WEIGHTS: Mapping[str, int] = {
    "budget": 30,
    "timeline": 25,
    "lender_status": 20,
    "engagement": 15,
    "motivation": 10,
}


@dataclass(frozen=True, slots=True)
class SubScores:
    budget: int
    timeline: int
    lender_status: int
    engagement: int
    motivation: int

    def weighted_total(self) -> int:
        weighted = sum(weight * getattr(self, name) for name, weight in FACTOR_WEIGHTS.items())
        # Integer round-half-up of weighted / 100.
        return (weighted + 50) // 100

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ScoringResult:
    score: int
    classification: LeadClassification
    explanation: str
    sub_scores: SubScores

    def lead_fields(self, scored_at: datetime) -> Dict[str, Any]:
        """Derived Lead fields to persist for this result."""

        return {
            "score": self.score,
            "classification": self.classification,
            "explainability_card": self.explanation,
            "last_scored_at": scored_at,
        }


@dataclass(frozen=True, slots=True)
class ScoreHistoryEntry:
    """Append-only audit record of one scoring of a lead."""

    lead_id: str
    owner_id: str
    score: int
    classification: LeadClassification
    sub_scores: Mapping[str, int]
    explainability_card: str
    recorded_at: datetime
    entry_id: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        require_utc_timestamp("recorded_at", self.recorded_at)


def compute_sub_scores(lead: Lead, as_of: datetime) -> SubScores:
    return SubScores(
        budget=budget_score(lead.budget),
        timeline=timeline_score(lead.timeline),
        lender_status=lender_status_score(lead.lender_status),
        engagement=engagement_score(lead.last_contact_date, lead.response_rate, as_of),
        motivation=motivation_score(lead.motivation),
    )


def score_lead(lead: Lead, as_of: datetime) -> ScoringResult:
    """
    Score a lead snapshot as of an explicit UTC instant.

    Identical attributes and instant always produce an identical result.
    """

    require_utc_timestamp("as_of", as_of)

    sub_scores = compute_sub_scores(lead, as_of)
    total = sub_scores.weighted_total()
    classification = classify(total, sub_scores)
    explanation = generate_explainability_card(total, sub_scores, classification, lead, as_of)

    return ScoringResult(
        score=total,
        classification=classification,
        explanation=explanation,
        sub_scores=sub_scores,
    )


def history_entry_for(lead: Lead, result: ScoringResult, recorded_at: datetime) -> ScoreHistoryEntry:
    return ScoreHistoryEntry(
        lead_id=lead.lead_id,
        owner_id=lead.owner_id,
        score=result.score,
        classification=result.classification,
        sub_scores=result.sub_scores.as_dict(),
        explainability_card=result.explanation,
        recorded_at=recorded_at,
    )


__all__ = [
    "FACTOR_WEIGHTS",
    "SubScores",
    "ScoringResult",
    "ScoreHistoryEntry",
    "compute_sub_scores",
    "score_lead",
    "history_entry_for",
]
