"""
Production wiring for the cadence trigger and the API.

`run_cadence()` is the zero-argument entry point invoked by the scheduling
platform (cron, the looping runner in scripts/run_cadence.py, or the HTTP
trigger). It never raises: failures are logged and None is returned when wiring or
the run itself failed.
"""

from __future__ import annotations

import logging
from typing import Optional

from config.settings import Settings, load_settings
from repositories.client import get_supabase
from repositories.document_store import DocumentStore
from repositories.supabase_store import SupabaseDocumentStore
from services.cadence_scheduler import CadenceRunSummary, CadenceScheduler
from services.dispatch import MessageDispatcher, build_dispatcher
from services.message_composer import RandomContentProvider
from services.outreach_router import OutreachRouter

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> DocumentStore:
    return SupabaseDocumentStore(get_supabase(settings))


def build_scheduler(
    settings: Settings,
    store: DocumentStore,
    dispatcher: Optional[MessageDispatcher] = None,
) -> CadenceScheduler:
    router = OutreachRouter(
        store=store,
        dispatcher=dispatcher or build_dispatcher(settings),
        content_provider=RandomContentProvider(),
        signature=settings.agent_signature,
        dispatch_timeout_seconds=settings.dispatch_timeout_seconds,
    )
    return CadenceScheduler(
        store=store,
        router=router,
        max_workers=settings.cadence_max_workers,
        candidate_timeout_seconds=settings.candidate_timeout_seconds,
    )


def run_cadence() -> Optional[CadenceRunSummary]:
    try:
        settings = load_settings()
        scheduler = build_scheduler(settings, build_store(settings))
    except Exception:
        logger.exception("Failed to initialise cadence run")
        return None

    try:
        return scheduler.run()
    except Exception:
        logger.exception("Error in cadence run")
        return None
    finally:
        scheduler.close()


__all__ = ["build_store", "build_scheduler", "run_cadence"]
