"""
Guard chain.

Per-candidate vetoes evaluated in order before any contact action:

1. Opt-out guard: any OptOut compliance event for the lead vetoes contact.
2. Anti-spam guard: any outbound outreach record within the last 24 hours
   vetoes contact, whatever the tier or cadence due date.

A veto is a normal skip, not an error: nothing is written for the lead.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from domain.cadence import anti_spam_cutoff
from domain.compliance import has_opted_out
from domain.lead import Lead
from repositories.document_store import DocumentStore


class GuardVerdict(str, Enum):
    PASSED = "passed"
    OPTED_OUT = "opted_out"
    RECENT_OUTREACH = "recent_outreach"


@dataclass(frozen=True, slots=True)
class GuardResult:
    verdict: GuardVerdict
    detail: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.verdict == GuardVerdict.PASSED


class OptOutGuard:
    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def check(self, lead: Lead, as_of: datetime) -> GuardResult:
        if has_opted_out(self._store.get_compliance_events(lead.lead_id)):
            return GuardResult(GuardVerdict.OPTED_OUT, "opt-out compliance event on file")
        return GuardResult(GuardVerdict.PASSED)


class AntiSpamGuard:
    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def check(self, lead: Lead, as_of: datetime) -> GuardResult:
        since = anti_spam_cutoff(as_of)
        recent = [
            record
            for record in self._store.get_recent_outreach(lead.lead_id, since)
            if record.is_outbound
        ]
        if recent:
            return GuardResult(
                GuardVerdict.RECENT_OUTREACH,
                f"{len(recent)} outbound record(s) since {since.isoformat()}",
            )
        return GuardResult(GuardVerdict.PASSED)


class GuardChain:
    def __init__(self, store: DocumentStore) -> None:
        self._guards = (OptOutGuard(store), AntiSpamGuard(store))

    def evaluate(self, lead: Lead, as_of: datetime) -> GuardResult:
        """Return the first veto, or PASSED if every guard passes."""

        for guard in self._guards:
            result = guard.check(lead, as_of)
            if not result.passed:
                return result
        return GuardResult(GuardVerdict.PASSED)


__all__ = ["GuardVerdict", "GuardResult", "OptOutGuard", "AntiSpamGuard", "GuardChain"]
