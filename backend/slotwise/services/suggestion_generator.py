from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Sequence

from slotwise.core.reference import TIME_SLOTS, day_name, time_slot_label
from slotwise.schemas.conflict import ConflictBase, Suggestion, SuggestionAction
from slotwise.schemas.schedule import ScheduleOut
from slotwise.schemas.slot import SlotKey
from slotwise.schemas.teacher import TeacherOut
from slotwise.stores.base import TimetableStore

logger = logging.getLogger(__name__)

PREFERENCE_NOTE = "(matches teacher preference)"


def new_suggestion_id() -> str:
    return str(uuid.uuid4())


class SuggestionGenerator:
    """Builds the candidate remediations for one double-booking.

    For each conflicting entry the candidates are, in order: moves to every
    globally unoccupied slot, swaps with every entry of another teacher, and
    reassignments to every other teacher who is free at the conflict's slot.
    Candidates are not checked for conflicts they might introduce; the next
    detection pass reports those.
    """

    def __init__(
        self,
        store: TimetableStore,
        *,
        move_search_days: int = 6,
        slots_per_day: int = len(TIME_SLOTS),
        id_factory: Callable[[], str] = new_suggestion_id,
    ) -> None:
        self._store = store
        self._move_search_days = move_search_days
        self._slots_per_day = slots_per_day
        self._id_factory = id_factory

    def generate(
        self,
        conflict: ConflictBase,
        *,
        schedules: Sequence[ScheduleOut] | None = None,
    ) -> list[Suggestion]:
        """Suggestions for every still-existing entry of ``conflict``.

        ``schedules`` lets a detection pass reuse the snapshot it grouped;
        otherwise the store is read afresh.
        """
        all_schedules = list(schedules) if schedules is not None else self._store.list_schedules()
        by_id = {schedule.id: schedule for schedule in all_schedules}
        entries = [by_id[schedule_id] for schedule_id in conflict.conflicting_schedule_ids if schedule_id in by_id]
        if len(entries) < 2:
            logger.warning(
                "Skipping suggestions for teacher %s at day %s slot %s: only %d of %d entries still exist",
                conflict.teacher_id,
                conflict.day_of_week,
                conflict.time_slot,
                len(entries),
                len(conflict.conflicting_schedule_ids),
            )
            return []

        teacher = self._store.get_teacher(conflict.teacher_id)
        conflicting_ids = set(conflict.conflicting_schedule_ids)
        occupied = {schedule.slot for schedule in all_schedules}
        swap_partners = [
            schedule
            for schedule in all_schedules
            if schedule.teacher_id != conflict.teacher_id and schedule.id not in conflicting_ids
        ]
        busy_teacher_ids = {schedule.teacher_id for schedule in all_schedules if schedule.slot == conflict.slot}
        reassign_targets = [
            candidate
            for candidate in self._store.list_teachers()
            if candidate.id != conflict.teacher_id and candidate.id not in busy_teacher_ids
        ]

        course_names: dict[int, str | None] = {}

        def course_name(course_id: int) -> str | None:
            if course_id not in course_names:
                course = self._store.get_course(course_id)
                course_names[course_id] = course.name if course is not None else None
            return course_names[course_id]

        suggestions: list[Suggestion] = []
        for entry in entries:
            name = course_name(entry.course_id) or "Course"
            suggestions.extend(self._moves(entry, name, conflict.slot, occupied, teacher))
            suggestions.extend(
                self._swap(entry, name, partner, course_name(partner.course_id) or "another course")
                for partner in swap_partners
            )
            suggestions.extend(self._reassign(entry, name, candidate) for candidate in reassign_targets)

        logger.debug(
            "Generated %d suggestion(s) for teacher %s at day %s slot %s",
            len(suggestions),
            conflict.teacher_id,
            conflict.day_of_week,
            conflict.time_slot,
        )
        return suggestions

    def _moves(
        self,
        entry: ScheduleOut,
        name: str,
        conflict_slot: SlotKey,
        occupied: set[SlotKey],
        teacher: TeacherOut | None,
    ) -> list[Suggestion]:
        moves: list[Suggestion] = []
        for day in range(self._move_search_days):
            for slot in range(self._slots_per_day):
                target = SlotKey(day, slot)
                if target == conflict_slot or target in occupied:
                    continue
                # Occupancy is global: a slot used by any teacher is skipped.
                preference_match = teacher is None or teacher.prefers(day, slot)
                description = f"Move {name} to {day_name(day)} at {time_slot_label(slot)}"
                if preference_match:
                    description = f"{description} {PREFERENCE_NOTE}"
                moves.append(
                    Suggestion(
                        id=self._id_factory(),
                        description=description,
                        action=SuggestionAction.move,
                        schedule_id=entry.id,
                        new_day_of_week=day,
                        new_time_slot=slot,
                    )
                )
        return moves

    def _swap(self, entry: ScheduleOut, name: str, partner: ScheduleOut, partner_name: str) -> Suggestion:
        return Suggestion(
            id=self._id_factory(),
            description=(
                f"Swap {name} with {partner_name} on {day_name(partner.day_of_week)} "
                f"at {time_slot_label(partner.time_slot)}"
            ),
            action=SuggestionAction.swap,
            schedule_id=entry.id,
            swap_with_schedule_id=partner.id,
        )

    def _reassign(self, entry: ScheduleOut, name: str, candidate: TeacherOut) -> Suggestion:
        return Suggestion(
            id=self._id_factory(),
            description=f"Reassign {name} to {candidate.name}",
            action=SuggestionAction.reassign,
            schedule_id=entry.id,
            new_teacher_id=candidate.id,
        )
