"""
Tests for `domain/factors.py`.

Covers rules:
- Budget is a non-decreasing five-tier step function with exact boundaries.
- Missing or malformed attributes degrade to documented defaults, never raise.
- Timeline urgency phrases map to fixed scores; "12 months" is a year, not "2 months".
- Engagement adds recency and response-rate bonuses, capped at 100.
- Motivation keyword adjustments are clamped to [0, 100].
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from domain.factors import (
    budget_score,
    engagement_score,
    lender_status_score,
    motivation_score,
    timeline_score,
)
from domain.lead import LenderStatus

AS_OF = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "budget, expected",
    [
        (None, 0),
        (0, 0),
        (-5, 0),
        ("not a number", 0),
        (50_000, 20),
        (99_999, 20),
        (100_000, 40),
        (199_999, 40),
        (200_000, 60),
        (299_999, 60),
        (300_000, 80),
        (499_999, 80),
        (500_000, 100),
        (2_000_000, 100),
        ("$450,000", 80),
    ],
)
def test_budget_score_boundaries(budget: object, expected: int) -> None:
    """Verify budget tiers at exact boundaries and defaults for absent/malformed input."""

    assert budget_score(budget) == expected


def test_budget_score_is_non_decreasing() -> None:
    """Verify the step function never decreases as budget grows."""

    scores = [budget_score(amount) for amount in range(1, 1_000_001, 2_500)]
    assert scores == sorted(scores)


@pytest.mark.parametrize(
    "timeline, expected",
    [
        (None, 30),
        ("", 30),
        ("   ", 30),
        ("ASAP", 100),
        ("Immediately please", 100),
        ("within 30 days", 90),
        ("1 month", 90),
        ("60 days", 80),
        ("2 months", 80),
        ("about 90 days", 70),
        ("3 months", 70),
        ("6 months", 50),
        ("next year", 30),
        ("12 months", 30),
        ("whenever the right place shows up", 40),
    ],
)
def test_timeline_score(timeline: str | None, expected: int) -> None:
    """Verify urgency phrase mapping and defaults."""

    assert timeline_score(timeline) == expected


@pytest.mark.parametrize(
    "status, expected",
    [
        (LenderStatus.PRE_APPROVED, 100),
        ("Pre-Approved", 100),
        ("PreQualified", 80),
        ("Application Submitted", 60),
        (LenderStatus.NOT_APPLIED, 30),
        (LenderStatus.UNKNOWN, 40),
        (None, 40),
        ("banana", 40),
    ],
)
def test_lender_status_score(status: object, expected: int) -> None:
    """Verify the lender status lookup table and its default."""

    assert lender_status_score(status) == expected


@pytest.mark.parametrize(
    "days_ago, expected",
    [
        (None, 50),
        (0, 80),
        (1, 80),
        (3, 70),
        (7, 70),
        (20, 60),
        (30, 60),
        (45, 50),
    ],
)
def test_engagement_score_recency_bonus(days_ago: int | None, expected: int) -> None:
    """Verify recency bonus tiers from the last contact date."""

    last_contact = AS_OF - timedelta(days=days_ago) if days_ago is not None else None
    assert engagement_score(last_contact, None, AS_OF) == expected


def test_engagement_score_response_rate_bonus_and_cap() -> None:
    """Verify the response-rate bonus applies above 0.5 and the total caps at 100."""

    assert engagement_score(None, 0.5, AS_OF) == 50
    assert engagement_score(None, 0.8, AS_OF) == 70
    assert engagement_score(AS_OF, 0.9, AS_OF) == 100
    assert engagement_score(None, "garbage", AS_OF) == 50


@pytest.mark.parametrize(
    "motivation, expected",
    [
        (None, 30),
        ("", 30),
        ("Buying a home", 50),
        ("Relocating for a job transfer", 70),
        ("relocating, job transfer, family, urgent, quick move", 100),
        ("just looking", 35),
        ("just looking, browsing, not sure, maybe", 0),
    ],
)
def test_motivation_score(motivation: str | None, expected: int) -> None:
    """Verify keyword adjustments and clamping."""

    assert motivation_score(motivation) == expected
