"""
Domain: Factor scorers.

Five independent pure functions, one per lead attribute dimension. Each maps
raw (possibly missing or malformed) input to an integer sub-score in [0, 100].
None of them raise on bad input; defects degrade to the documented defaults:

| Factor        | Default when absent |
|---------------|---------------------|
| budget        | 0                   |
| timeline      | 30                  |
| lender_status | 40                  |
| engagement    | 50                  |
| motivation    | 30                  |
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any, Optional, Sequence, Tuple

from .lead import LenderStatus
from .time import days_between

BUDGET_TIERS: Sequence[Tuple[int, int]] = (
    (500_000, 100),
    (300_000, 80),
    (200_000, 60),
    (100_000, 40),
)
BUDGET_FLOOR_SCORE = 20
BUDGET_DEFAULT_SCORE = 0

# (patterns, score, label); evaluated in order, first match wins.
TIMELINE_RULES: Sequence[Tuple[Sequence[str], int, str]] = (
    ((r"immediate(ly)?", r"asap"), 100, "immediate"),
    ((r"30 days?", r"1 months?", r"one month"), 90, "within 30 days"),
    ((r"60 days?", r"2 months?", r"two months"), 80, "within 60 days"),
    ((r"90 days?", r"3 months?", r"three months"), 70, "within 90 days"),
    ((r"6 months?", r"six months"), 50, "within 6 months"),
    ((r"years?", r"12 months?"), 30, "a year or more"),
)
TIMELINE_UNMATCHED_SCORE = 40
TIMELINE_DEFAULT_SCORE = 30

LENDER_STATUS_SCORES = {
    LenderStatus.PRE_APPROVED: 100,
    LenderStatus.PRE_QUALIFIED: 80,
    LenderStatus.APPLICATION_SUBMITTED: 60,
    LenderStatus.NOT_APPLIED: 30,
    LenderStatus.UNKNOWN: 40,
}
LENDER_STATUS_DEFAULT_SCORE = 40

ENGAGEMENT_BASE_SCORE = 50
# (max days since last contact, bonus)
RECENCY_BONUSES: Sequence[Tuple[float, int]] = (
    (1, 30),
    (7, 20),
    (30, 10),
)
RESPONSE_RATE_THRESHOLD = 0.5
RESPONSE_RATE_BONUS = 20

MOTIVATION_BASE_SCORE = 50
MOTIVATION_DEFAULT_SCORE = 30
HIGH_MOTIVATION_KEYWORDS = ("relocating", "job transfer", "family", "urgent", "quick")
LOW_MOTIVATION_KEYWORDS = ("just looking", "browsing", "not sure", "maybe")
HIGH_MOTIVATION_STEP = 10
LOW_MOTIVATION_STEP = 15


def _clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))


def _contains_phrase(text: str, pattern: str) -> bool:
    return re.search(rf"\b{pattern}\b", text) is not None


def parse_budget(budget: Any) -> Optional[float]:
    """
    Coerce a raw budget into a positive amount.

    Accepts numbers and strings such as "$450,000". Returns None for absent,
    zero, negative, non-finite or unparseable values.
    """

    if budget is None or isinstance(budget, bool):
        return None
    if isinstance(budget, (int, float)):
        amount = float(budget)
    elif isinstance(budget, str):
        cleaned = budget.strip().replace(",", "").replace("$", "")
        if not cleaned:
            return None
        try:
            amount = float(cleaned)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(amount) or amount <= 0:
        return None
    return amount


def budget_score(budget: Any) -> int:
    """Five-tier step function of the budget amount; non-decreasing in budget."""

    amount = parse_budget(budget)
    if amount is None:
        return BUDGET_DEFAULT_SCORE

    for threshold, score in BUDGET_TIERS:
        if amount >= threshold:
            return score
    return BUDGET_FLOOR_SCORE


def _normalize_text(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return " ".join(value.lower().split())


def match_timeline(timeline: Any) -> Optional[Tuple[int, str]]:
    """Return (score, label) for the first urgency rule matching the phrase, if any."""

    text = _normalize_text(timeline)
    if not text:
        return None
    for patterns, score, label in TIMELINE_RULES:
        if any(_contains_phrase(text, pattern) for pattern in patterns):
            return score, label
    return None


def timeline_score(timeline: Any) -> int:
    if not _normalize_text(timeline):
        return TIMELINE_DEFAULT_SCORE

    matched = match_timeline(timeline)
    if matched is None:
        return TIMELINE_UNMATCHED_SCORE
    return matched[0]


def lender_status_score(lender_status: Any) -> int:
    status = LenderStatus.parse(lender_status)
    if status is None:
        return LENDER_STATUS_DEFAULT_SCORE
    return LENDER_STATUS_SCORES[status]


def _parse_response_rate(response_rate: Any) -> Optional[float]:
    if response_rate is None or isinstance(response_rate, bool):
        return None
    try:
        rate = float(response_rate)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(rate):
        return None
    return rate


def engagement_score(
    last_contact_date: Optional[datetime],
    response_rate: Any,
    as_of: datetime,
) -> int:
    """
    Base 50, plus a recency bonus from the last contact and a response-rate bonus.

    A last contact in the future counts as "within a day".
    """

    score = ENGAGEMENT_BASE_SCORE

    if isinstance(last_contact_date, datetime):
        days_since = days_between(last_contact_date, as_of)
        for max_days, bonus in RECENCY_BONUSES:
            if days_since <= max_days:
                score += bonus
                break

    rate = _parse_response_rate(response_rate)
    if rate is not None and rate > RESPONSE_RATE_THRESHOLD:
        score += RESPONSE_RATE_BONUS

    return min(100, score)


def motivation_score(motivation: Any) -> int:
    text = _normalize_text(motivation)
    if not text:
        return MOTIVATION_DEFAULT_SCORE

    high = sum(1 for keyword in HIGH_MOTIVATION_KEYWORDS if keyword in text)
    low = sum(1 for keyword in LOW_MOTIVATION_KEYWORDS if keyword in text)

    score = MOTIVATION_BASE_SCORE + high * HIGH_MOTIVATION_STEP - low * LOW_MOTIVATION_STEP
    return _clamp(score)


__all__ = [
    "budget_score",
    "timeline_score",
    "lender_status_score",
    "engagement_score",
    "motivation_score",
    "match_timeline",
    "parse_budget",
]
