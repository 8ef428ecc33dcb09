from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable

from slotwise.schemas.conflict import ConflictCreate
from slotwise.schemas.schedule import ScheduleOut
from slotwise.schemas.slot import TeacherSlotKey

logger = logging.getLogger(__name__)


def group_by_teacher_slot(schedules: Iterable[ScheduleOut]) -> dict[TeacherSlotKey, list[int]]:
    groups: dict[TeacherSlotKey, list[int]] = defaultdict(list)
    for schedule in schedules:
        groups[schedule.teacher_slot].append(schedule.id)
    return groups


def find_double_bookings(schedules: Iterable[ScheduleOut]) -> list[ConflictCreate]:
    """One unresolved conflict per (teacher, day, slot) holding more than one entry.

    Conflicts come out in first-seen order of their groups; ids inside a
    conflict keep the order of ``schedules``.
    """
    conflicts: list[ConflictCreate] = []
    for key, schedule_ids in group_by_teacher_slot(schedules).items():
        if len(schedule_ids) < 2:
            continue
        conflicts.append(
            ConflictCreate(
                teacher_id=key.teacher_id,
                day_of_week=key.day_of_week,
                time_slot=key.time_slot,
                conflicting_schedule_ids=schedule_ids,
                resolved=False,
                suggestions=[],
            )
        )
    logger.debug("Found %d double-booking(s)", len(conflicts))
    return conflicts
