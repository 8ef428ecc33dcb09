"""Storage contracts the conflict engine is written against.

Adapters return ``None`` (or ``False`` for deletes) when a record is absent and
leave it to the engine to decide whether absence is an error.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence

from slotwise.schemas.conflict import ConflictCreate, ConflictOut, Suggestion
from slotwise.schemas.course import CourseCreate, CourseOut, CourseUpdate
from slotwise.schemas.program import ProgramCreate, ProgramOut
from slotwise.schemas.schedule import ScheduleCreate, ScheduleOut, ScheduleUpdate
from slotwise.schemas.teacher import TeacherCreate, TeacherOut, TeacherUpdate


class TimetableStore(ABC):
    # Programs
    @abstractmethod
    def list_programs(self) -> list[ProgramOut]: ...

    @abstractmethod
    def get_program_by_code(self, code: str) -> ProgramOut | None: ...

    @abstractmethod
    def create_program(self, payload: ProgramCreate) -> ProgramOut: ...

    # Courses
    @abstractmethod
    def list_courses(self, *, program_id: int | None = None, semester: int | None = None) -> list[CourseOut]: ...

    @abstractmethod
    def get_course(self, course_id: int) -> CourseOut | None: ...

    @abstractmethod
    def create_course(self, payload: CourseCreate) -> CourseOut: ...

    @abstractmethod
    def update_course(self, course_id: int, patch: CourseUpdate) -> CourseOut | None: ...

    @abstractmethod
    def delete_course(self, course_id: int) -> bool: ...

    # Teachers
    @abstractmethod
    def list_teachers(self) -> list[TeacherOut]: ...

    @abstractmethod
    def get_teacher(self, teacher_id: int) -> TeacherOut | None: ...

    @abstractmethod
    def create_teacher(self, payload: TeacherCreate) -> TeacherOut: ...

    @abstractmethod
    def update_teacher(self, teacher_id: int, patch: TeacherUpdate) -> TeacherOut | None: ...

    @abstractmethod
    def delete_teacher(self, teacher_id: int) -> bool: ...

    # Schedules
    @abstractmethod
    def list_schedules(self, *, program_id: int | None = None, semester: int | None = None) -> list[ScheduleOut]:
        """All entries, or those of one program (and optionally one semester), ordered by id."""

    @abstractmethod
    def get_schedule(self, schedule_id: int) -> ScheduleOut | None: ...

    @abstractmethod
    def create_schedule(self, payload: ScheduleCreate) -> ScheduleOut: ...

    @abstractmethod
    def update_schedule(self, schedule_id: int, patch: ScheduleUpdate) -> ScheduleOut | None: ...

    @abstractmethod
    def update_schedules(self, patches: Mapping[int, ScheduleUpdate]) -> list[ScheduleOut] | None:
        """Apply several patches as one unit.

        Returns ``None`` without writing anything when any id is unknown.
        """

    @abstractmethod
    def delete_schedule(self, schedule_id: int) -> bool: ...


class ConflictStore(ABC):
    """Materialized conflict set, replaced wholesale by every detection pass."""

    @abstractmethod
    def list_conflicts(self) -> list[ConflictOut]: ...

    @abstractmethod
    def get_conflict(self, conflict_id: int) -> ConflictOut | None: ...

    @abstractmethod
    def rebuild(self, conflicts: Sequence[ConflictCreate]) -> list[ConflictOut]:
        """Atomically discard every stored conflict and store ``conflicts`` in order.

        Ids are not stable across rebuilds and may be reused (the in-memory
        store restarts at 1, SQLite reuses freed rowids). A suggestion id
        kept from an earlier pass can therefore land on a different conflict
        and be rejected as an unknown suggestion rather than a missing
        conflict.
        """

    @abstractmethod
    def replace_suggestions(self, conflict_id: int, suggestions: Sequence[Suggestion]) -> ConflictOut | None: ...

    @abstractmethod
    def mark_resolved(self, conflict_id: int) -> ConflictOut | None: ...
