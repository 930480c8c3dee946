"""
Domain: Classification policy.

Deterministic decision table mapping a total score and its sub-score pattern to
a priority tier. Rules are evaluated in order and the first match wins:

1. Hot:     total >= 80 AND timeline >= 80 AND lender_status >= 80
2. Warm:    total >= 60 OR budget >= 80 OR timeline >= 70
3. Nurture: fallback

Hot is a conjunction and Warm a disjunction, so every Hot lead would also
satisfy Warm; the tiers are strictly nested.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .lead import LeadClassification

if TYPE_CHECKING:
    from .scoring import SubScores

HOT_MIN_TOTAL = 80
HOT_MIN_TIMELINE = 80
HOT_MIN_LENDER_STATUS = 80

WARM_MIN_TOTAL = 60
WARM_MIN_BUDGET = 80
WARM_MIN_TIMELINE = 70


def classify(total: int, sub_scores: "SubScores") -> LeadClassification:
    if (
        total >= HOT_MIN_TOTAL
        and sub_scores.timeline >= HOT_MIN_TIMELINE
        and sub_scores.lender_status >= HOT_MIN_LENDER_STATUS
    ):
        return LeadClassification.HOT

    if (
        total >= WARM_MIN_TOTAL
        or sub_scores.budget >= WARM_MIN_BUDGET
        or sub_scores.timeline >= WARM_MIN_TIMELINE
    ):
        return LeadClassification.WARM

    return LeadClassification.NURTURE


__all__ = ["classify"]
