from __future__ import annotations

import logging

from sqlalchemy import inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from slotwise.core.reference import DEFAULT_PROGRAMS
from slotwise.db.base import Base
from slotwise.db.session import engine as default_engine
import slotwise.models  # noqa: F401
from slotwise.models.program import Program

logger = logging.getLogger(__name__)

REQUIRED_TABLES: set[str] = {"programs", "courses", "teachers", "schedules", "conflicts"}


def _seed_default_programs(bind: Engine) -> None:
    with Session(bind) as db:
        existing = set(db.execute(select(Program.code)).scalars())
        missing = [item for item in DEFAULT_PROGRAMS if item["code"] not in existing]
        if not missing:
            return
        db.add_all(Program(**item) for item in missing)
        db.commit()
        logger.info("Seeded %d default program(s)", len(missing))


def ensure_schema(bind: Engine | None = None, *, seed_default_programs: bool = True) -> None:
    bind = bind or default_engine
    table_names = set(inspect(bind).get_table_names())
    missing_tables = REQUIRED_TABLES - table_names
    if missing_tables:
        logger.info("Creating missing table(s): %s", ", ".join(sorted(missing_tables)))
        Base.metadata.create_all(bind=bind)
    if seed_default_programs:
        _seed_default_programs(bind)
