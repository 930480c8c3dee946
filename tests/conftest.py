"""
Pytest configuration.

Adds the project root to the Python path so tests can import domain,
repositories, services and api, and provides shared fixtures.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

import pytest

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from domain.lead import Lead, LeadClassification, LeadStatus  # noqa: E402
from repositories.memory_store import InMemoryDocumentStore  # noqa: E402

NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_lead() -> Callable[..., Lead]:
    counter = {"n": 0}

    def factory(**overrides: Any) -> Lead:
        counter["n"] += 1
        fields: dict[str, Any] = {
            "lead_id": f"lead-{counter['n']}",
            "owner_id": "realtor-1",
            "first_name": "Jordan",
            "phone": "+15555550100",
            "email": "jordan@example.com",
            "status": LeadStatus.ACTIVE,
            "classification": LeadClassification.WARM,
        }
        fields.update(overrides)
        return Lead(**fields)

    return factory


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()
