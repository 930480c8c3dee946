"""
FastAPI dependencies.

Routers receive the document store and the cadence scheduler through these
providers; tests override them with `app.dependency_overrides`.
"""

from functools import lru_cache
from typing import Iterator

from config.settings import Settings, load_settings
from repositories.document_store import DocumentStore
from services.cadence_scheduler import CadenceScheduler
from services.entrypoints import build_scheduler, build_store


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def get_store() -> DocumentStore:
    return build_store(get_settings())


def get_scheduler() -> Iterator[CadenceScheduler]:
    scheduler = build_scheduler(get_settings(), get_store())
    try:
        yield scheduler
    finally:
        scheduler.close()
