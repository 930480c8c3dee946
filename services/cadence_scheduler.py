"""
Cadence scheduler.

One run (one trigger) does the following:
1. Select candidates per tier from the *persisted* classification: Active
   leads of that tier whose last contact is at least the tier threshold ago
   (never contacted = always stale) and whose next_action_date is not in the
   future.
2. Process candidates concurrently on a worker pool. For each: guard chain
   (opt-out, then anti-spam), then the outreach router (draft for Hot,
   dispatch for Warm/Nurture).
3. Return a CadenceRunSummary. A run never raises: selection errors are logged
   and the tier is skipped, per-candidate errors are logged with the lead id
   and do not affect sibling candidates, and a candidate exceeding its time
   budget is counted as timed out.

Scoring is never recomputed here; scoring and cadence are decoupled triggers.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from domain.cadence import CADENCE_TIERS, is_due
from domain.lead import Lead, LeadClassification, LeadStatus
from domain.time import require_utc_timestamp, utc_now
from repositories.document_store import DocumentStore, LeadFilter
from services.guards import GuardChain, GuardVerdict
from services.outreach_router import OutreachRouter, RouteOutcome

logger = logging.getLogger(__name__)


class CandidateOutcome(str, Enum):
    DRAFTED = "drafted"
    SENT = "sent"
    FAILED = "failed"
    SKIPPED_OPT_OUT = "skipped_opt_out"
    SKIPPED_RECENT_OUTREACH = "skipped_recent_outreach"
    CLAIM_CONFLICT = "claim_conflict"
    ERROR = "error"
    TIMED_OUT = "timed_out"


_ROUTE_TO_CANDIDATE = {
    RouteOutcome.DRAFTED: CandidateOutcome.DRAFTED,
    RouteOutcome.SENT: CandidateOutcome.SENT,
    RouteOutcome.FAILED: CandidateOutcome.FAILED,
    RouteOutcome.CLAIM_LOST: CandidateOutcome.CLAIM_CONFLICT,
}

_VETO_TO_CANDIDATE = {
    GuardVerdict.OPTED_OUT: CandidateOutcome.SKIPPED_OPT_OUT,
    GuardVerdict.RECENT_OUTREACH: CandidateOutcome.SKIPPED_RECENT_OUTREACH,
}


@dataclass(frozen=True, slots=True)
class Candidate:
    lead: Lead
    tier: LeadClassification


@dataclass
class CadenceRunSummary:
    started_at: datetime
    candidates: int = 0
    outcomes: Dict[str, CandidateOutcome] = field(default_factory=dict)

    def count(self, outcome: CandidateOutcome) -> int:
        return sum(1 for value in self.outcomes.values() if value == outcome)

    @property
    def drafted(self) -> int:
        return self.count(CandidateOutcome.DRAFTED)

    @property
    def sent(self) -> int:
        return self.count(CandidateOutcome.SENT)

    @property
    def failed(self) -> int:
        return self.count(CandidateOutcome.FAILED)

    @property
    def skipped_opt_out(self) -> int:
        return self.count(CandidateOutcome.SKIPPED_OPT_OUT)

    @property
    def skipped_recent_outreach(self) -> int:
        return self.count(CandidateOutcome.SKIPPED_RECENT_OUTREACH)

    @property
    def claim_conflicts(self) -> int:
        return self.count(CandidateOutcome.CLAIM_CONFLICT)

    @property
    def errors(self) -> int:
        return self.count(CandidateOutcome.ERROR)

    @property
    def timed_out(self) -> int:
        return self.count(CandidateOutcome.TIMED_OUT)

    def as_dict(self) -> Dict[str, object]:
        return {
            "started_at": self.started_at.isoformat(),
            "candidates": self.candidates,
            "drafted": self.drafted,
            "sent": self.sent,
            "failed": self.failed,
            "skipped_opt_out": self.skipped_opt_out,
            "skipped_recent_outreach": self.skipped_recent_outreach,
            "claim_conflicts": self.claim_conflicts,
            "errors": self.errors,
            "timed_out": self.timed_out,
        }


class CadenceScheduler:
    def __init__(
        self,
        store: DocumentStore,
        router: OutreachRouter,
        max_workers: int = 8,
        candidate_timeout_seconds: Optional[float] = 60.0,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._router = router
        self._guards = GuardChain(store)
        self._max_workers = max_workers
        self._candidate_timeout = candidate_timeout_seconds
        self._clock = clock

    def select_candidates(self, as_of: datetime) -> List[Candidate]:
        candidates: List[Candidate] = []
        for tier in CADENCE_TIERS:
            try:
                leads = self._store.query_leads(LeadFilter(classification=tier, status=LeadStatus.ACTIVE))
            except Exception:
                logger.exception(f"Failed to query {tier.value} leads, skipping tier this run")
                continue
            candidates.extend(Candidate(lead, tier) for lead in leads if is_due(lead, tier, as_of))
        return candidates

    def process_candidate(self, candidate: Candidate, as_of: datetime) -> CandidateOutcome:
        lead, tier = candidate.lead, candidate.tier

        guard = self._guards.evaluate(lead, as_of)
        if not guard.passed:
            logger.info(
                f"Skipping lead {lead.lead_id}: {guard.verdict.value}",
                extra={"lead_id": lead.lead_id, "tier": tier.value, "detail": guard.detail},
            )
            return _VETO_TO_CANDIDATE[guard.verdict]

        return _ROUTE_TO_CANDIDATE[self._router.route(lead, tier, as_of)]

    def _process_isolated(self, candidate: Candidate, as_of: datetime) -> CandidateOutcome:
        try:
            return self.process_candidate(candidate, as_of)
        except Exception:
            logger.exception(
                f"Error processing follow-up for lead {candidate.lead.lead_id}",
                extra={"lead_id": candidate.lead.lead_id, "tier": candidate.tier.value},
            )
            return CandidateOutcome.ERROR

    def run(self, as_of: Optional[datetime] = None) -> CadenceRunSummary:
        as_of = as_of or self._clock()
        require_utc_timestamp("as_of", as_of)

        summary = CadenceRunSummary(started_at=as_of)
        logger.info("Starting cadence run", extra={"as_of": as_of.isoformat()})

        candidates = self.select_candidates(as_of)
        summary.candidates = len(candidates)
        logger.info(f"Found {len(candidates)} leads needing follow-up")

        if candidates:
            for lead_id, outcome in self._process_all(candidates, as_of):
                summary.outcomes[lead_id] = outcome

        logger.info("Cadence run completed", extra=summary.as_dict())
        return summary

    def _process_all(self, candidates: List[Candidate], as_of: datetime) -> List[Tuple[str, CandidateOutcome]]:
        executor = ThreadPoolExecutor(
            max_workers=max(1, min(self._max_workers, len(candidates))),
            thread_name_prefix="cadence",
        )
        results: List[Tuple[str, CandidateOutcome]] = []
        try:
            futures: List[Tuple[Candidate, Future]] = [
                (candidate, executor.submit(self._process_isolated, candidate, as_of))
                for candidate in candidates
            ]
            for candidate, future in futures:
                try:
                    outcome = future.result(timeout=self._candidate_timeout)
                except FutureTimeoutError:
                    logger.error(
                        f"Follow-up for lead {candidate.lead.lead_id} exceeded "
                        f"{self._candidate_timeout}s, abandoning",
                        extra={"lead_id": candidate.lead.lead_id},
                    )
                    outcome = CandidateOutcome.TIMED_OUT
                results.append((candidate.lead.lead_id, outcome))
        finally:
            # Hung workers are abandoned rather than joined.
            executor.shutdown(wait=False, cancel_futures=True)
        return results

    def close(self) -> None:
        self._router.close()


__all__ = ["CadenceScheduler", "CadenceRunSummary", "Candidate", "CandidateOutcome"]
