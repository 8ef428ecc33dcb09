from __future__ import annotations

import logging
from functools import lru_cache

from slotwise.core.config import Settings, get_settings
from slotwise.core.exceptions import ConfigurationError
from slotwise.services.conflict_engine import ConflictEngine
from slotwise.stores.base import ConflictStore, TimetableStore
from slotwise.stores.memory import InMemoryConflictStore, InMemoryTimetableStore

logger = logging.getLogger(__name__)


def build_stores(settings: Settings) -> tuple[TimetableStore, ConflictStore]:
    if settings.storage_backend == "memory":
        return (
            InMemoryTimetableStore(seed_default_programs=settings.seed_default_programs),
            InMemoryConflictStore(),
        )
    if settings.storage_backend == "database":
        from slotwise.db.bootstrap import ensure_schema
        from slotwise.db.session import SessionLocal
        from slotwise.stores.database import SqlAlchemyConflictStore, SqlAlchemyTimetableStore

        ensure_schema(seed_default_programs=settings.seed_default_programs)
        return SqlAlchemyTimetableStore(SessionLocal), SqlAlchemyConflictStore(SessionLocal)
    raise ConfigurationError(f"Unknown storage backend: {settings.storage_backend}")


def build_engine(settings: Settings | None = None) -> ConflictEngine:
    settings = settings or get_settings()
    store, conflicts = build_stores(settings)
    logger.info("Conflict engine using %s storage", settings.storage_backend)
    return ConflictEngine(store, conflicts, move_search_days=settings.move_search_days)


@lru_cache
def get_engine() -> ConflictEngine:
    return build_engine(get_settings())
