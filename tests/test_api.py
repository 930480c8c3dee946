"""
Tests for the FastAPI application (`api/`).

Covers rules:
- The lead-updated webhook rescores only on watched changes.
- DELETE events are ignored.
- Malformed records are rejected with 422.
- On-demand rescoring returns 404 for unknown leads.
- The cadence trigger returns the run summary.
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_scheduler, get_store
from api.main import app
from domain.lead import Lead, LeadClassification
from repositories.memory_store import InMemoryDocumentStore
from services.cadence_scheduler import CadenceScheduler
from services.dispatch import LoggingDispatcher
from services.message_composer import StaticContentProvider
from services.outreach_router import OutreachRouter

RECORD = {
    "lead_id": "lead-123",
    "owner_id": "realtor-9",
    "budget": 600000,
    "timeline": "ASAP",
    "lender_status": "PreApproved",
    "status": "Active",
    "version": 3,
}


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def client(memory_store):
    dispatcher = LoggingDispatcher()

    def scheduler_override():
        router = OutreachRouter(memory_store, dispatcher, StaticContentProvider(), "Sam Realtor")
        yield CadenceScheduler(memory_store, router)

    app.dependency_overrides[get_store] = lambda: memory_store
    app.dependency_overrides[get_scheduler] = scheduler_override
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root(client) -> None:
    """Verify the root endpoint describes the API."""

    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "Lead Cadence Platform API"


def test_webhook_scores_on_watched_change(client, memory_store) -> None:
    """Verify a budget change rescores and persists the lead."""

    memory_store.put_lead(Lead(lead_id="lead-123", owner_id="realtor-9", version=3))

    response = client.post(
        "/api/v1/webhooks/lead-updated",
        json={"type": "UPDATE", "record": RECORD, "old_record": {**RECORD, "budget": 350000}},
    )

    body = response.json()
    assert response.status_code == 200
    assert body["scored"] is True
    assert body["sub_scores"]["budget"] == 100
    assert memory_store.get_lead("lead-123").score == body["score"]
    assert len(memory_store.score_history) == 1


def test_webhook_ignores_unwatched_change(client, memory_store) -> None:
    """Verify a change to contact details does not rescore."""

    response = client.post(
        "/api/v1/webhooks/lead-updated",
        json={"type": "UPDATE", "record": {**RECORD, "phone": "+1555"}, "old_record": RECORD},
    )

    assert response.status_code == 200
    assert response.json()["scored"] is False
    assert memory_store.score_history == []


def test_webhook_ignores_delete(client) -> None:
    """Verify DELETE events are acknowledged without scoring."""

    response = client.post("/api/v1/webhooks/lead-updated", json={"type": "DELETE", "old_record": RECORD})

    assert response.status_code == 200
    assert response.json() == {
        "lead_id": "lead-123",
        "scored": False,
        "score": None,
        "classification": None,
        "explainability_card": None,
        "sub_scores": None,
    }


def test_webhook_rejects_malformed_record(client) -> None:
    """Verify a record without lead_id is a 422."""

    response = client.post("/api/v1/webhooks/lead-updated", json={"type": "INSERT", "record": {"budget": 1}})

    assert response.status_code == 422


def test_webhook_for_missing_lead_is_404(client) -> None:
    """Verify scoring a lead that is not stored reports 404."""

    response = client.post("/api/v1/webhooks/lead-updated", json={"type": "INSERT", "record": RECORD})

    assert response.status_code == 404


def test_rescore_endpoint(client, memory_store) -> None:
    """Verify on-demand rescoring for stored and unknown leads."""

    memory_store.put_lead(Lead(lead_id="lead-1", owner_id="realtor-1", budget=350_000))

    assert client.post("/api/v1/leads/unknown/score").status_code == 404

    response = client.post("/api/v1/leads/lead-1/score")

    assert response.status_code == 200
    assert response.json()["classification"] == "Warm"


def test_cadence_run_endpoint(client, memory_store) -> None:
    """Verify the trigger runs one batch and returns its counters."""

    memory_store.put_lead(
        Lead(
            lead_id="lead-1",
            owner_id="realtor-1",
            phone="+15555550100",
            classification=LeadClassification.WARM,
            last_contact_date=datetime(2020, 1, 1, tzinfo=timezone.utc),
        )
    )

    response = client.post("/api/v1/cadence/run")

    body = response.json()
    assert response.status_code == 200
    assert body["candidates"] == 1
    assert body["sent"] == 1
    assert len(memory_store.outreach_records) == 1
