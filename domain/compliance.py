"""
Domain: Compliance events.

Append-only log of consent-relevant events (opt-outs, intake consent) keyed by
lead. The cadence scheduler reads these as guard input and never writes them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from .time import require_utc_timestamp


class ComplianceEventType(str, Enum):
    OPT_OUT = "OptOut"
    LEAD_INTAKE = "LeadIntake"
    CONSENT_GRANTED = "ConsentGranted"


@dataclass(frozen=True, slots=True)
class ComplianceEvent:
    lead_id: str
    event_type: ComplianceEventType
    occurred_at: datetime
    owner_id: Optional[str] = None
    event_id: Optional[str] = None
    details: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        require_utc_timestamp("occurred_at", self.occurred_at)

    @property
    def is_opt_out(self) -> bool:
        return self.event_type == ComplianceEventType.OPT_OUT


def has_opted_out(events: Iterable[ComplianceEvent]) -> bool:
    return any(event.is_opt_out for event in events)
