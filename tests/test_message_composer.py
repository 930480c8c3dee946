"""
Tests for `services/message_composer.py`.

Covers rules:
- Hot messages mention name, timeline, budget and lender status.
- Warm messages are a personalised market update.
- Nurture filler comes from the injected content provider.
- Missing attributes render safe fallbacks.
"""

import random

from domain.lead import LeadClassification, LenderStatus
from services.message_composer import (
    FINANCING_TIPS,
    MARKET_TRENDS,
    NEW_LISTINGS_RANGE,
    RandomContentProvider,
    StaticContentProvider,
    compose,
)

SIGNATURE = "Sam Realtor"


def test_hot_message_mentions_lead_details(make_lead) -> None:
    """Verify the Hot template interpolates timeline, budget and lender status."""

    lead = make_lead(budget=600_000, timeline="ASAP", lender_status=LenderStatus.PRE_APPROVED)

    message = compose(lead, LeadClassification.HOT, StaticContentProvider(), SIGNATURE)

    assert message.subject == "Quick follow-up on your ASAP home search"
    assert "Hi Jordan" in message.content
    assert "$600,000" in message.content
    assert "pre-approved lender status" in message.content
    assert message.content.endswith(SIGNATURE)


def test_hot_message_fallbacks_for_missing_attributes(make_lead) -> None:
    """Verify absent name, timeline, budget and lender status never render as None."""

    lead = make_lead(first_name=None, budget=None, timeline=None, lender_status=None)

    message = compose(lead, LeadClassification.HOT, StaticContentProvider(), SIGNATURE)

    assert "None" not in message.content
    assert "Hi there" in message.content
    assert "your target budget" in message.content
    assert "flexible" in message.subject


def test_warm_message_is_personalised(make_lead) -> None:
    """Verify the Warm template subject carries the lead's name."""

    message = compose(make_lead(), LeadClassification.WARM, StaticContentProvider(), SIGNATURE)

    assert message.subject == "Market update for Jordan"
    assert "market update" in message.content


def test_nurture_message_uses_content_provider(make_lead) -> None:
    """Verify the Nurture filler is taken from the injected provider."""

    provider = StaticContentProvider(market_trend="up 2%", financing_tip=FINANCING_TIPS[1], new_listings_count=7)

    message = compose(make_lead(), LeadClassification.NURTURE, provider, SIGNATURE)

    assert message.subject == "Monthly market insights + financing tip"
    assert "are up 2% this month" in message.content
    assert FINANCING_TIPS[1] in message.content
    assert "New Listings: 7 homes" in message.content


def test_random_content_provider_draws_from_finite_sets() -> None:
    """Verify random filler stays within the documented sets and range."""

    provider = RandomContentProvider(random.Random(42))
    low, high = NEW_LISTINGS_RANGE

    for _ in range(50):
        assert provider.market_trend() in MARKET_TRENDS
        assert provider.financing_tip() in FINANCING_TIPS
        assert low <= provider.new_listings_count() <= high


def test_seeded_provider_is_reproducible(make_lead) -> None:
    """Verify the same seed yields the same Nurture message."""

    lead = make_lead()

    first = compose(lead, LeadClassification.NURTURE, RandomContentProvider(random.Random(7)), SIGNATURE)
    second = compose(lead, LeadClassification.NURTURE, RandomContentProvider(random.Random(7)), SIGNATURE)

    assert first == second
