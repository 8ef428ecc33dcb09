from __future__ import annotations

import logging
from collections.abc import Callable
from threading import RLock

from slotwise.core.exceptions import ResourceNotFoundError
from slotwise.schemas.conflict import ConflictOut, Suggestion
from slotwise.schemas.resolution import ResolutionResult
from slotwise.schemas.schedule import ScheduleCreate, ScheduleOut, ScheduleUpdate
from slotwise.services.conflict_detector import find_double_bookings
from slotwise.services.resolution import ResolutionApplier
from slotwise.services.suggestion_generator import SuggestionGenerator, new_suggestion_id
from slotwise.stores.base import ConflictStore, TimetableStore

logger = logging.getLogger(__name__)


class ConflictEngine:
    """Detects teacher double-bookings and applies chosen remediations.

    Every "mutate schedule, then re-detect" cycle runs under one re-entrant
    lock, so readers never see a conflict marked resolved before the pass that
    follows its resolution has replaced the conflict set.
    """

    def __init__(
        self,
        store: TimetableStore,
        conflicts: ConflictStore,
        *,
        move_search_days: int = 6,
        id_factory: Callable[[], str] = new_suggestion_id,
    ) -> None:
        self._store = store
        self._conflicts = conflicts
        self._lock = RLock()
        self._generator = SuggestionGenerator(store, move_search_days=move_search_days, id_factory=id_factory)
        self._applier = ResolutionApplier(store, conflicts, redetect=self._detect)

    @property
    def store(self) -> TimetableStore:
        return self._store

    # Detection

    def detect_conflicts(self) -> list[ConflictOut]:
        with self._lock:
            return self._detect()

    def _detect(self) -> list[ConflictOut]:
        schedules = self._store.list_schedules()
        drafts = [
            draft.model_copy(update={"suggestions": self._generator.generate(draft, schedules=schedules)})
            for draft in find_double_bookings(schedules)
        ]
        conflicts = self._conflicts.rebuild(drafts)
        logger.info("Detected %d conflict(s) across %d schedule entries", len(conflicts), len(schedules))
        return conflicts

    def list_conflicts(self) -> list[ConflictOut]:
        with self._lock:
            return self._conflicts.list_conflicts()

    def get_conflict(self, conflict_id: int) -> ConflictOut:
        with self._lock:
            conflict = self._conflicts.get_conflict(conflict_id)
        if conflict is None:
            raise ResourceNotFoundError("Conflict", conflict_id)
        return conflict

    def unresolved_conflicts(self) -> list[ConflictOut]:
        return [conflict for conflict in self.list_conflicts() if not conflict.resolved]

    def conflicts_for_teacher(self, teacher_id: int) -> list[ConflictOut]:
        return [conflict for conflict in self.unresolved_conflicts() if conflict.teacher_id == teacher_id]

    def conflicts_for_schedule(self, schedule_id: int) -> list[ConflictOut]:
        return [
            conflict
            for conflict in self.unresolved_conflicts()
            if schedule_id in conflict.conflicting_schedule_ids
        ]

    def has_teacher_time_conflict(
        self,
        teacher_id: int,
        day_of_week: int,
        time_slot: int,
        ignored_schedule_id: int | None = None,
    ) -> bool:
        """Whether placing the teacher at this slot would double-book them.

        ``ignored_schedule_id`` is the entry being edited, which must not
        collide with itself.
        """
        with self._lock:
            schedules = self._store.list_schedules()
        return any(
            schedule.teacher_id == teacher_id
            and schedule.day_of_week == day_of_week
            and schedule.time_slot == time_slot
            and schedule.id != ignored_schedule_id
            for schedule in schedules
        )

    # Suggestions and resolution

    def generate_suggestions(self, conflict_id: int) -> list[Suggestion]:
        with self._lock:
            conflict = self._conflicts.get_conflict(conflict_id)
            if conflict is None:
                raise ResourceNotFoundError("Conflict", conflict_id)
            suggestions = self._generator.generate(conflict)
            # The fresh set replaces the stored one so its ids can be resolved.
            self._conflicts.replace_suggestions(conflict_id, suggestions)
            return suggestions

    def resolve_conflict(self, conflict_id: int, suggestion_id: str) -> ResolutionResult:
        with self._lock:
            return self._applier.resolve(conflict_id, suggestion_id)

    # Schedule mutations

    def create_schedule(self, payload: ScheduleCreate) -> ScheduleOut:
        with self._lock:
            schedule = self._store.create_schedule(payload)
            self._detect()
            return schedule

    def update_schedule(self, schedule_id: int, patch: ScheduleUpdate) -> ScheduleOut:
        with self._lock:
            schedule = self._store.update_schedule(schedule_id, patch)
            if schedule is None:
                raise ResourceNotFoundError("Schedule", schedule_id)
            self._detect()
            return schedule

    def delete_schedule(self, schedule_id: int) -> None:
        with self._lock:
            if not self._store.delete_schedule(schedule_id):
                raise ResourceNotFoundError("Schedule", schedule_id)
            self._detect()
