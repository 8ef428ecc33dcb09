from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, sessionmaker

from slotwise.models.conflict import Conflict
from slotwise.models.course import Course
from slotwise.models.program import Program
from slotwise.models.schedule import Schedule
from slotwise.models.teacher import Teacher
from slotwise.schemas.conflict import ConflictCreate, ConflictOut, Suggestion
from slotwise.schemas.course import CourseCreate, CourseOut, CourseUpdate
from slotwise.schemas.patch import apply_patch, patch_fields
from slotwise.schemas.program import ProgramCreate, ProgramOut
from slotwise.schemas.schedule import ScheduleCreate, ScheduleOut, ScheduleUpdate
from slotwise.schemas.teacher import TeacherCreate, TeacherOut, TeacherUpdate
from slotwise.stores.base import ConflictStore, TimetableStore

logger = logging.getLogger(__name__)


def _write_patch(row, current, patch) -> None:
    """Validate the merged record first, then copy only the patched columns onto the row."""
    merged = apply_patch(current, patch).model_dump(mode="json")
    for key in patch_fields(patch):
        setattr(row, key, merged[key])


class SqlAlchemyTimetableStore(TimetableStore):
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    # Programs

    def list_programs(self) -> list[ProgramOut]:
        with self._session_factory() as db:
            rows = db.execute(select(Program).order_by(Program.id)).scalars()
            return [ProgramOut.model_validate(row) for row in rows]

    def get_program_by_code(self, code: str) -> ProgramOut | None:
        with self._session_factory() as db:
            row = db.execute(select(Program).where(Program.code == code)).scalar_one_or_none()
            return ProgramOut.model_validate(row) if row is not None else None

    def create_program(self, payload: ProgramCreate) -> ProgramOut:
        with self._session_factory.begin() as db:
            row = Program(**payload.model_dump())
            db.add(row)
            db.flush()
            return ProgramOut.model_validate(row)

    # Courses

    def list_courses(self, *, program_id: int | None = None, semester: int | None = None) -> list[CourseOut]:
        query = select(Course).order_by(Course.id)
        if program_id is not None:
            query = query.where(Course.program_id == program_id)
            if semester is not None:
                query = query.where(Course.semester == semester)
        with self._session_factory() as db:
            return [CourseOut.model_validate(row) for row in db.execute(query).scalars()]

    def get_course(self, course_id: int) -> CourseOut | None:
        with self._session_factory() as db:
            row = db.get(Course, course_id)
            return CourseOut.model_validate(row) if row is not None else None

    def create_course(self, payload: CourseCreate) -> CourseOut:
        with self._session_factory.begin() as db:
            row = Course(**payload.model_dump())
            db.add(row)
            db.flush()
            return CourseOut.model_validate(row)

    def update_course(self, course_id: int, patch: CourseUpdate) -> CourseOut | None:
        with self._session_factory.begin() as db:
            row = db.get(Course, course_id)
            if row is None:
                return None
            _write_patch(row, CourseOut.model_validate(row), patch)
            db.flush()
            return CourseOut.model_validate(row)

    def delete_course(self, course_id: int) -> bool:
        with self._session_factory.begin() as db:
            row = db.get(Course, course_id)
            if row is None:
                return False
            db.delete(row)
            return True

    # Teachers

    def list_teachers(self) -> list[TeacherOut]:
        with self._session_factory() as db:
            rows = db.execute(select(Teacher).order_by(Teacher.id)).scalars()
            return [TeacherOut.model_validate(row) for row in rows]

    def get_teacher(self, teacher_id: int) -> TeacherOut | None:
        with self._session_factory() as db:
            row = db.get(Teacher, teacher_id)
            return TeacherOut.model_validate(row) if row is not None else None

    def create_teacher(self, payload: TeacherCreate) -> TeacherOut:
        with self._session_factory.begin() as db:
            row = Teacher(**payload.model_dump(mode="json"))
            db.add(row)
            db.flush()
            return TeacherOut.model_validate(row)

    def update_teacher(self, teacher_id: int, patch: TeacherUpdate) -> TeacherOut | None:
        with self._session_factory.begin() as db:
            row = db.get(Teacher, teacher_id)
            if row is None:
                return None
            _write_patch(row, TeacherOut.model_validate(row), patch)
            db.flush()
            return TeacherOut.model_validate(row)

    def delete_teacher(self, teacher_id: int) -> bool:
        with self._session_factory.begin() as db:
            row = db.get(Teacher, teacher_id)
            if row is None:
                return False
            db.delete(row)
            return True

    # Schedules

    def list_schedules(self, *, program_id: int | None = None, semester: int | None = None) -> list[ScheduleOut]:
        query = select(Schedule).order_by(Schedule.id)
        if program_id is not None:
            query = query.where(Schedule.program_id == program_id)
            if semester is not None:
                query = query.where(Schedule.semester == semester)
        with self._session_factory() as db:
            return [ScheduleOut.model_validate(row) for row in db.execute(query).scalars()]

    def get_schedule(self, schedule_id: int) -> ScheduleOut | None:
        with self._session_factory() as db:
            row = db.get(Schedule, schedule_id)
            return ScheduleOut.model_validate(row) if row is not None else None

    def create_schedule(self, payload: ScheduleCreate) -> ScheduleOut:
        with self._session_factory.begin() as db:
            row = Schedule(**payload.model_dump())
            db.add(row)
            db.flush()
            return ScheduleOut.model_validate(row)

    def update_schedule(self, schedule_id: int, patch: ScheduleUpdate) -> ScheduleOut | None:
        updated = self.update_schedules({schedule_id: patch})
        return updated[0] if updated else None

    def update_schedules(self, patches: Mapping[int, ScheduleUpdate]) -> list[ScheduleOut] | None:
        with self._session_factory.begin() as db:
            rows = {schedule_id: db.get(Schedule, schedule_id) for schedule_id in patches}
            missing = [schedule_id for schedule_id, row in rows.items() if row is None]
            if missing:
                logger.debug("Schedule batch update rejected, unknown ids %s", missing)
                return None
            for schedule_id, patch in patches.items():
                row = rows[schedule_id]
                _write_patch(row, ScheduleOut.model_validate(row), patch)
            db.flush()
            return [ScheduleOut.model_validate(row) for row in rows.values()]

    def delete_schedule(self, schedule_id: int) -> bool:
        with self._session_factory.begin() as db:
            row = db.get(Schedule, schedule_id)
            if row is None:
                return False
            db.delete(row)
            return True


class SqlAlchemyConflictStore(ConflictStore):
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def list_conflicts(self) -> list[ConflictOut]:
        with self._session_factory() as db:
            rows = db.execute(select(Conflict).order_by(Conflict.id)).scalars()
            return [ConflictOut.model_validate(row) for row in rows]

    def get_conflict(self, conflict_id: int) -> ConflictOut | None:
        with self._session_factory() as db:
            row = db.get(Conflict, conflict_id)
            return ConflictOut.model_validate(row) if row is not None else None

    def rebuild(self, conflicts: Sequence[ConflictCreate]) -> list[ConflictOut]:
        with self._session_factory.begin() as db:
            db.execute(delete(Conflict))
            rows = [Conflict(**conflict.model_dump(mode="json")) for conflict in conflicts]
            db.add_all(rows)
            db.flush()
            return [ConflictOut.model_validate(row) for row in rows]

    def replace_suggestions(self, conflict_id: int, suggestions: Sequence[Suggestion]) -> ConflictOut | None:
        with self._session_factory.begin() as db:
            row = db.get(Conflict, conflict_id)
            if row is None:
                return None
            row.suggestions = [item.model_dump(mode="json") for item in suggestions]
            db.flush()
            return ConflictOut.model_validate(row)

    def mark_resolved(self, conflict_id: int) -> ConflictOut | None:
        with self._session_factory.begin() as db:
            row = db.get(Conflict, conflict_id)
            if row is None:
                return None
            row.resolved = True
            db.flush()
            return ConflictOut.model_validate(row)
