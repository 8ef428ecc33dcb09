from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from itertools import count
from threading import Lock

from slotwise.core.reference import DEFAULT_PROGRAMS
from slotwise.schemas.conflict import ConflictCreate, ConflictOut, Suggestion
from slotwise.schemas.course import CourseCreate, CourseOut, CourseUpdate
from slotwise.schemas.patch import apply_patch
from slotwise.schemas.program import ProgramCreate, ProgramOut
from slotwise.schemas.schedule import ScheduleCreate, ScheduleOut, ScheduleUpdate
from slotwise.schemas.teacher import TeacherCreate, TeacherOut, TeacherUpdate
from slotwise.stores.base import ConflictStore, TimetableStore

logger = logging.getLogger(__name__)


class InMemoryTimetableStore(TimetableStore):
    def __init__(self, *, seed_default_programs: bool = True) -> None:
        self._programs: dict[int, ProgramOut] = {}
        self._courses: dict[int, CourseOut] = {}
        self._teachers: dict[int, TeacherOut] = {}
        self._schedules: dict[int, ScheduleOut] = {}
        self._program_ids = count(1)
        self._course_ids = count(1)
        self._teacher_ids = count(1)
        self._schedule_ids = count(1)
        self._lock = Lock()
        if seed_default_programs:
            for program in DEFAULT_PROGRAMS:
                self.create_program(ProgramCreate(**program))

    # Programs

    def list_programs(self) -> list[ProgramOut]:
        with self._lock:
            return list(self._programs.values())

    def get_program_by_code(self, code: str) -> ProgramOut | None:
        with self._lock:
            return next((item for item in self._programs.values() if item.code == code), None)

    def create_program(self, payload: ProgramCreate) -> ProgramOut:
        with self._lock:
            program = ProgramOut(id=next(self._program_ids), **payload.model_dump())
            self._programs[program.id] = program
            return program

    # Courses

    def list_courses(self, *, program_id: int | None = None, semester: int | None = None) -> list[CourseOut]:
        with self._lock:
            courses = list(self._courses.values())
        if program_id is not None:
            courses = [
                item
                for item in courses
                if item.program_id == program_id and (semester is None or item.semester == semester)
            ]
        return courses

    def get_course(self, course_id: int) -> CourseOut | None:
        with self._lock:
            return self._courses.get(course_id)

    def create_course(self, payload: CourseCreate) -> CourseOut:
        with self._lock:
            course = CourseOut(id=next(self._course_ids), **payload.model_dump())
            self._courses[course.id] = course
            return course

    def update_course(self, course_id: int, patch: CourseUpdate) -> CourseOut | None:
        with self._lock:
            existing = self._courses.get(course_id)
            if existing is None:
                return None
            course = apply_patch(existing, patch)
            self._courses[course_id] = course
            return course

    def delete_course(self, course_id: int) -> bool:
        with self._lock:
            return self._courses.pop(course_id, None) is not None

    # Teachers

    def list_teachers(self) -> list[TeacherOut]:
        with self._lock:
            return list(self._teachers.values())

    def get_teacher(self, teacher_id: int) -> TeacherOut | None:
        with self._lock:
            return self._teachers.get(teacher_id)

    def create_teacher(self, payload: TeacherCreate) -> TeacherOut:
        with self._lock:
            teacher = TeacherOut(id=next(self._teacher_ids), **payload.model_dump())
            self._teachers[teacher.id] = teacher
            return teacher

    def update_teacher(self, teacher_id: int, patch: TeacherUpdate) -> TeacherOut | None:
        with self._lock:
            existing = self._teachers.get(teacher_id)
            if existing is None:
                return None
            teacher = apply_patch(existing, patch)
            self._teachers[teacher_id] = teacher
            return teacher

    def delete_teacher(self, teacher_id: int) -> bool:
        with self._lock:
            return self._teachers.pop(teacher_id, None) is not None

    # Schedules

    def list_schedules(self, *, program_id: int | None = None, semester: int | None = None) -> list[ScheduleOut]:
        with self._lock:
            schedules = sorted(self._schedules.values(), key=lambda item: item.id)
        if program_id is not None:
            schedules = [
                item
                for item in schedules
                if item.program_id == program_id and (semester is None or item.semester == semester)
            ]
        return schedules

    def get_schedule(self, schedule_id: int) -> ScheduleOut | None:
        with self._lock:
            return self._schedules.get(schedule_id)

    def create_schedule(self, payload: ScheduleCreate) -> ScheduleOut:
        with self._lock:
            schedule = ScheduleOut(id=next(self._schedule_ids), **payload.model_dump())
            self._schedules[schedule.id] = schedule
            return schedule

    def update_schedule(self, schedule_id: int, patch: ScheduleUpdate) -> ScheduleOut | None:
        updated = self.update_schedules({schedule_id: patch})
        return updated[0] if updated else None

    def update_schedules(self, patches: Mapping[int, ScheduleUpdate]) -> list[ScheduleOut] | None:
        with self._lock:
            missing = [schedule_id for schedule_id in patches if schedule_id not in self._schedules]
            if missing:
                logger.debug("Schedule batch update rejected, unknown ids %s", missing)
                return None
            # Validate every merge before touching the store.
            staged = {
                schedule_id: apply_patch(self._schedules[schedule_id], patch)
                for schedule_id, patch in patches.items()
            }
            self._schedules.update(staged)
            return list(staged.values())

    def delete_schedule(self, schedule_id: int) -> bool:
        with self._lock:
            return self._schedules.pop(schedule_id, None) is not None


class InMemoryConflictStore(ConflictStore):
    def __init__(self) -> None:
        self._conflicts: dict[int, ConflictOut] = {}
        self._lock = Lock()

    def list_conflicts(self) -> list[ConflictOut]:
        with self._lock:
            return list(self._conflicts.values())

    def get_conflict(self, conflict_id: int) -> ConflictOut | None:
        with self._lock:
            return self._conflicts.get(conflict_id)

    def rebuild(self, conflicts: Sequence[ConflictCreate]) -> list[ConflictOut]:
        # Ids restart at 1 on every pass.
        rebuilt = {
            index: ConflictOut(id=index, **conflict.model_dump())
            for index, conflict in enumerate(conflicts, start=1)
        }
        with self._lock:
            self._conflicts = rebuilt
        return list(rebuilt.values())

    def replace_suggestions(self, conflict_id: int, suggestions: Sequence[Suggestion]) -> ConflictOut | None:
        with self._lock:
            existing = self._conflicts.get(conflict_id)
            if existing is None:
                return None
            conflict = existing.model_copy(update={"suggestions": list(suggestions)})
            self._conflicts[conflict_id] = conflict
            return conflict

    def mark_resolved(self, conflict_id: int) -> ConflictOut | None:
        with self._lock:
            existing = self._conflicts.get(conflict_id)
            if existing is None:
                return None
            conflict = existing.model_copy(update={"resolved": True})
            self._conflicts[conflict_id] = conflict
            return conflict
