"""
Domain: Explainability cards.

Builds a short, human-readable justification for a score from the same
sub-scores the classification policy sees. Reasons are emitted for extreme
factors only (>= 80 or <= 40), in the fixed order budget, timeline,
lender status, recency.

Card format:
    "<Tier> because: <reason>, <reason>. Score: <total>/100"

Free-text attributes (timeline, motivation) are never echoed into the card;
timeline reasons use the label of the matched urgency rule instead. The only
tier name in a card is therefore the one passed in.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from .factors import match_timeline, parse_budget
from .lead import Lead, LeadClassification, LenderStatus
from .time import days_between

if TYPE_CHECKING:
    from .scoring import SubScores

STRONG_FACTOR = 80
WEAK_FACTOR = 40
RECENT_CONTACT_DAYS = 1
FALLBACK_REASON = "Standard scoring criteria"


def _format_budget(budget: object) -> str:
    amount = parse_budget(budget)
    if amount is None:
        return "not provided"
    return f"${amount:,.0f}"


def _timeline_label(timeline: Optional[str]) -> str:
    matched = match_timeline(timeline)
    if matched is not None:
        return matched[1]
    if isinstance(timeline, str) and timeline.strip():
        return "unclear"
    return "not provided"


def build_reasons(sub_scores: "SubScores", lead: Lead, as_of: datetime) -> List[str]:
    reasons: List[str] = []

    if sub_scores.budget >= STRONG_FACTOR:
        reasons.append(f"High budget ({_format_budget(lead.budget)})")
    elif sub_scores.budget <= WEAK_FACTOR:
        reasons.append(f"Lower budget ({_format_budget(lead.budget)})")

    if sub_scores.timeline >= STRONG_FACTOR:
        reasons.append(f"Short timeline ({_timeline_label(lead.timeline)})")
    elif sub_scores.timeline <= WEAK_FACTOR:
        label = _timeline_label(lead.timeline)
        if label == "not provided":
            reasons.append("Unknown timeline")
        else:
            reasons.append(f"Long timeline ({label})")

    if sub_scores.lender_status >= STRONG_FACTOR:
        if LenderStatus.parse(lead.lender_status) == LenderStatus.PRE_QUALIFIED:
            reasons.append("Pre-qualified lender status")
        else:
            reasons.append("Pre-approved lender status")
    elif sub_scores.lender_status <= WEAK_FACTOR:
        reasons.append("Unclear lender status")

    if lead.last_contact_date is not None:
        days_since = days_between(lead.last_contact_date, as_of)
        if days_since <= RECENT_CONTACT_DAYS:
            reasons.append(f"Recent contact ({max(0, round(days_since))} days ago)")

    return reasons


def generate_explainability_card(
    total: int,
    sub_scores: "SubScores",
    classification: LeadClassification,
    lead: Lead,
    as_of: datetime,
) -> str:
    reasons = build_reasons(sub_scores, lead, as_of)
    reason_text = ", ".join(reasons) if reasons else FALLBACK_REASON
    return f"{classification.value} because: {reason_text}. Score: {total}/100"


__all__ = ["generate_explainability_card", "build_reasons"]
