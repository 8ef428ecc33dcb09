from itertools import count

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import slotwise.models  # noqa: F401
from slotwise.db.base import Base
from slotwise.schemas.course import CourseCreate
from slotwise.schemas.schedule import ScheduleCreate
from slotwise.schemas.teacher import TeacherCreate
from slotwise.services.conflict_engine import ConflictEngine
from slotwise.stores.database import SqlAlchemyConflictStore, SqlAlchemyTimetableStore
from slotwise.stores.memory import InMemoryConflictStore, InMemoryTimetableStore


class TimetableBuilder:
    """Writes fixtures straight into a store, bypassing conflict detection."""

    def __init__(self, store):
        self.store = store
        self._codes = count(1)

    def teacher(self, name="Teacher", **fields):
        return self.store.create_teacher(TeacherCreate(name=name, **fields))

    def course(self, name="Course", *, teacher_id=None, program_id=1, semester=1):
        return self.store.create_course(
            CourseCreate(
                name=name,
                code=f"C{next(self._codes):03d}",
                credits=3,
                color="#3b82f6",
                program_id=program_id,
                semester=semester,
                teacher_id=teacher_id,
            )
        )

    def entry(self, teacher, day, slot, *, course=None, program_id=1, semester=1, room=None):
        course = course or self.course(f"Course for {teacher.name}", teacher_id=teacher.id)
        return self.store.create_schedule(
            ScheduleCreate(
                program_id=program_id,
                semester=semester,
                day_of_week=day,
                time_slot=slot,
                course_id=course.id,
                teacher_id=teacher.id,
                room_number=room,
            )
        )


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(params=["memory", "database"])
def stores(request):
    if request.param == "memory":
        return InMemoryTimetableStore(seed_default_programs=False), InMemoryConflictStore()
    factory = request.getfixturevalue("session_factory")
    return SqlAlchemyTimetableStore(factory), SqlAlchemyConflictStore(factory)


@pytest.fixture()
def store(stores):
    return stores[0]


@pytest.fixture()
def conflict_store(stores):
    return stores[1]


@pytest.fixture()
def engine(stores):
    return ConflictEngine(*stores)


@pytest.fixture()
def memory_store():
    return InMemoryTimetableStore(seed_default_programs=False)


@pytest.fixture()
def builder(store):
    return TimetableBuilder(store)


@pytest.fixture()
def memory_builder(memory_store):
    return TimetableBuilder(memory_store)
