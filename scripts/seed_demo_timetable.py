"""Seed a small demo timetable with a teacher double-booking and report the conflicts.

Run:
  PYTHONPATH=backend python scripts/seed_demo_timetable.py

Set SLOTWISE_STORAGE_BACKEND=database to write into SLOTWISE_DATABASE_URL.
"""

from __future__ import annotations

import logging
import os

from slotwise.core.config import get_settings
from slotwise.core.reference import day_name, time_slot_label
from slotwise.schemas.course import CourseCreate
from slotwise.schemas.schedule import ScheduleCreate
from slotwise.schemas.teacher import TeacherCreate, TimePreference
from slotwise.services.factory import build_engine

PROGRAM_CODE = os.getenv("SEED_PROGRAM_CODE", "BCA").strip() or "BCA"
SEMESTER = int(os.getenv("SEED_SEMESTER", "1"))
SHOW_SUGGESTIONS = int(os.getenv("SEED_SHOW_SUGGESTIONS", "5"))

TEACHERS = [
    {
        "name": "Dr. Asha Rao",
        "specialization": "Programming",
        "skills": ["C", "Python"],
        "time_preferences": [TimePreference(day_of_week=1, start_time_slot=0, end_time_slot=2)],
    },
    {"name": "Prof. Vikram Shah", "specialization": "Mathematics", "skills": ["Discrete Math"]},
    {"name": "Ms. Leela Menon", "specialization": "Systems", "skills": ["Operating Systems", "Networks"]},
]

COURSES = [
    {"name": "Programming in C", "code": "BCA101", "credits": 4, "color": "#2563eb", "teacher": 0},
    {"name": "Python Lab", "code": "BCA102", "credits": 2, "color": "#16a34a", "teacher": 0},
    {"name": "Discrete Mathematics", "code": "BCA103", "credits": 4, "color": "#f59e0b", "teacher": 1},
    {"name": "Computer Fundamentals", "code": "BCA104", "credits": 3, "color": "#db2777", "teacher": 2},
]

# (course index, day_of_week, time_slot, room)
SCHEDULE = [
    (0, 1, 2, "101"),
    (1, 1, 2, "Lab-2"),  # same teacher, same slot as the entry above
    (2, 1, 0, "102"),
    (3, 2, 1, "103"),
]


def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s [%(name)s] %(message)s")

    engine = build_engine(settings)
    store = engine.store

    program = store.get_program_by_code(PROGRAM_CODE)
    if program is None:
        raise SystemExit(f"Program {PROGRAM_CODE} not found; seed default programs first")

    teachers = [store.create_teacher(TeacherCreate(**item)) for item in TEACHERS]
    courses = [
        store.create_course(
            CourseCreate(
                name=item["name"],
                code=item["code"],
                credits=item["credits"],
                color=item["color"],
                program_id=program.id,
                semester=SEMESTER,
                teacher_id=teachers[item["teacher"]].id,
            )
        )
        for item in COURSES
    ]
    for course_index, day, slot, room in SCHEDULE:
        course = courses[course_index]
        engine.create_schedule(
            ScheduleCreate(
                program_id=program.id,
                semester=SEMESTER,
                day_of_week=day,
                time_slot=slot,
                course_id=course.id,
                teacher_id=course.teacher_id,
                room_number=room,
            )
        )

    conflicts = engine.detect_conflicts()
    print(f"Detected conflicts: {len(conflicts)}")
    for conflict in conflicts:
        teacher = store.get_teacher(conflict.teacher_id)
        print(
            f"  - #{conflict.id} {teacher.name if teacher else conflict.teacher_id} double-booked on "
            f"{day_name(conflict.day_of_week)} at {time_slot_label(conflict.time_slot)} "
            f"(entries {conflict.conflicting_schedule_ids}, {len(conflict.suggestions)} suggestions)"
        )
        for suggestion in conflict.suggestions[:SHOW_SUGGESTIONS]:
            print(f"      [{suggestion.action.value}] {suggestion.description}")


if __name__ == "__main__":
    main()
