"""
Message composer.

Pure template rendering keyed by tier:
- Hot: name, timeline, budget and lender status (goes to a draft for approval)
- Warm: name
- Nurture: name plus market trend, financing tip and new-listings count

The Nurture filler comes from an injected ContentProvider so message content
is deterministic under test. RandomContentProvider draws from the finite sets
below.
"""

from __future__ import annotations

import random
from typing import Optional, Protocol

from domain.factors import parse_budget
from domain.lead import Lead, LeadClassification, LenderStatus
from services.dispatch import ComposedMessage

MARKET_TRENDS = ("up 2%", "down 1%", "stable")

FINANCING_TIPS = (
    "Consider getting pre-approved before shopping to strengthen your offers",
    "First-time buyer programs can save you thousands in down payment assistance",
    "Interest rates are currently favorable - lock in your rate early",
)

NEW_LISTINGS_RANGE = (1, 10)

_LENDER_STATUS_PHRASES = {
    LenderStatus.PRE_APPROVED: "pre-approved",
    LenderStatus.PRE_QUALIFIED: "pre-qualified",
    LenderStatus.APPLICATION_SUBMITTED: "application submitted",
    LenderStatus.NOT_APPLIED: "not yet applied",
    LenderStatus.UNKNOWN: "unknown",
}


class ContentProvider(Protocol):
    def market_trend(self) -> str:
        ...

    def financing_tip(self) -> str:
        ...

    def new_listings_count(self) -> int:
        ...


class RandomContentProvider:
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def market_trend(self) -> str:
        return self._rng.choice(MARKET_TRENDS)

    def financing_tip(self) -> str:
        return self._rng.choice(FINANCING_TIPS)

    def new_listings_count(self) -> int:
        low, high = NEW_LISTINGS_RANGE
        return self._rng.randint(low, high)


class StaticContentProvider:
    def __init__(
        self,
        market_trend: str = MARKET_TRENDS[-1],
        financing_tip: str = FINANCING_TIPS[0],
        new_listings_count: int = NEW_LISTINGS_RANGE[0],
    ) -> None:
        self._market_trend = market_trend
        self._financing_tip = financing_tip
        self._new_listings_count = new_listings_count

    def market_trend(self) -> str:
        return self._market_trend

    def financing_tip(self) -> str:
        return self._financing_tip

    def new_listings_count(self) -> int:
        return self._new_listings_count


def _budget_phrase(lead: Lead) -> str:
    amount = parse_budget(lead.budget)
    return f"${amount:,.0f}" if amount is not None else "your target budget"


def _lender_phrase(lead: Lead) -> str:
    status = LenderStatus.parse(lead.lender_status)
    if status is None:
        return "unknown"
    return _LENDER_STATUS_PHRASES[status]


def _timeline_phrase(lead: Lead) -> str:
    if not isinstance(lead.timeline, str):
        return "flexible"
    return lead.timeline.strip() or "flexible"


def _hot_message(lead: Lead, signature: str) -> ComposedMessage:
    timeline = _timeline_phrase(lead)
    return ComposedMessage(
        subject=f"Quick follow-up on your {timeline} home search",
        content=(
            f"Hi {lead.display_name},\n\n"
            f"I wanted to follow up on your home search with a {timeline} timeline. "
            f"Given your budget of {_budget_phrase(lead)} and {_lender_phrase(lead)} lender status, "
            "I have some exciting opportunities that just came on the market.\n\n"
            "Would you be available for a quick 10-minute call this week to discuss your "
            "priorities and show you what's available?\n\n"
            f"Best regards,\n{signature}"
        ),
    )


def _warm_message(lead: Lead, signature: str) -> ComposedMessage:
    return ComposedMessage(
        subject=f"Market update for {lead.display_name}",
        content=(
            f"Hi {lead.display_name},\n\n"
            "I hope you're doing well! I wanted to share a quick market update and check in "
            "on your home search.\n\n"
            "The market has been quite active, and I'm seeing some great opportunities in your "
            "price range. When you're ready to move forward, I'm here to help make the process "
            "smooth and successful.\n\n"
            "Feel free to reach out if you have any questions or want to schedule a showing.\n\n"
            f"Best,\n{signature}"
        ),
    )


def _nurture_message(lead: Lead, signature: str, content_provider: ContentProvider) -> ComposedMessage:
    return ComposedMessage(
        subject="Monthly market insights + financing tip",
        content=(
            f"Hi {lead.display_name},\n\n"
            "Here's your monthly real estate update:\n\n"
            f"Market Stats: Home prices in your area are {content_provider.market_trend()} this month\n"
            f"Financing Tip: {content_provider.financing_tip()}\n"
            f"New Listings: {content_provider.new_listings_count()} homes in your budget range\n\n"
            "I'm here whenever you're ready to take the next step in your home search. "
            "No pressure, just keeping you informed!\n\n"
            f"Best regards,\n{signature}"
        ),
    )


def compose(
    lead: Lead,
    tier: LeadClassification,
    content_provider: ContentProvider,
    signature: str,
) -> ComposedMessage:
    if tier == LeadClassification.HOT:
        return _hot_message(lead, signature)
    if tier == LeadClassification.NURTURE:
        return _nurture_message(lead, signature, content_provider)
    return _warm_message(lead, signature)


__all__ = [
    "ContentProvider",
    "RandomContentProvider",
    "StaticContentProvider",
    "compose",
    "MARKET_TRENDS",
    "FINANCING_TIPS",
    "NEW_LISTINGS_RANGE",
]
