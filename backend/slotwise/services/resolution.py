from __future__ import annotations

import logging
from collections.abc import Callable

from slotwise.core.exceptions import InvalidSuggestionError, ResourceNotFoundError
from slotwise.schemas.conflict import ConflictOut, Suggestion, SuggestionAction
from slotwise.schemas.resolution import ResolutionResult
from slotwise.schemas.schedule import ScheduleOut, ScheduleUpdate
from slotwise.stores.base import ConflictStore, TimetableStore

logger = logging.getLogger(__name__)


class ResolutionApplier:
    def __init__(
        self,
        store: TimetableStore,
        conflicts: ConflictStore,
        *,
        redetect: Callable[[], list[ConflictOut]],
    ) -> None:
        self._store = store
        self._conflicts = conflicts
        self._redetect = redetect

    def resolve(self, conflict_id: int, suggestion_id: str) -> ResolutionResult:
        conflict = self._conflicts.get_conflict(conflict_id)
        if conflict is None:
            raise ResourceNotFoundError("Conflict", conflict_id)

        suggestion = conflict.find_suggestion(suggestion_id)
        if suggestion is None:
            logger.warning("Suggestion %s is not part of conflict %s", suggestion_id, conflict_id)
            raise InvalidSuggestionError(
                f"Suggestion {suggestion_id} not found for conflict {conflict_id}",
                details={"conflict_id": conflict_id, "suggestion_id": suggestion_id},
            )

        updated = self._apply(suggestion)
        # The flag is not persisted here: if re-detection fails the stored
        # conflict must stay unresolved.
        resolved = conflict.model_copy(update={"resolved": True})
        logger.info(
            "Applied %s suggestion %s to conflict %s (schedule entries %s)",
            suggestion.action.value,
            suggestion.id,
            conflict_id,
            [item.id for item in updated],
        )

        # Re-detection decides whether the double-booking is really gone.
        remaining = self._redetect()
        return ResolutionResult(
            conflict=resolved,
            suggestion=suggestion,
            updated_schedules=updated,
            remaining_conflicts=remaining,
        )

    def _apply(self, suggestion: Suggestion) -> list[ScheduleOut]:
        if suggestion.action == SuggestionAction.move:
            return [self._move(suggestion)]
        if suggestion.action == SuggestionAction.swap:
            return self._swap(suggestion)
        if suggestion.action == SuggestionAction.reassign:
            return [self._reassign(suggestion)]
        raise InvalidSuggestionError(f"Unsupported suggestion action {suggestion.action}")

    def _move(self, suggestion: Suggestion) -> ScheduleOut:
        if suggestion.new_day_of_week is None or suggestion.new_time_slot is None:
            raise InvalidSuggestionError(
                "Invalid move suggestion",
                details={"suggestion_id": suggestion.id},
            )
        updated = self._store.update_schedule(
            suggestion.schedule_id,
            ScheduleUpdate(day_of_week=suggestion.new_day_of_week, time_slot=suggestion.new_time_slot),
        )
        if updated is None:
            raise ResourceNotFoundError("Schedule", suggestion.schedule_id)
        return updated

    def _swap(self, suggestion: Suggestion) -> list[ScheduleOut]:
        if suggestion.swap_with_schedule_id is None:
            raise InvalidSuggestionError(
                "Invalid swap suggestion",
                details={"suggestion_id": suggestion.id},
            )
        first = self._store.get_schedule(suggestion.schedule_id)
        if first is None:
            raise ResourceNotFoundError("Schedule", suggestion.schedule_id)
        second = self._store.get_schedule(suggestion.swap_with_schedule_id)
        if second is None:
            raise ResourceNotFoundError("Schedule", suggestion.swap_with_schedule_id)

        updated = self._store.update_schedules(
            {
                first.id: ScheduleUpdate(day_of_week=second.day_of_week, time_slot=second.time_slot),
                second.id: ScheduleUpdate(day_of_week=first.day_of_week, time_slot=first.time_slot),
            }
        )
        if updated is None:
            raise ResourceNotFoundError("Schedule", suggestion.schedule_id)
        return updated

    def _reassign(self, suggestion: Suggestion) -> ScheduleOut:
        if suggestion.new_teacher_id is None:
            raise InvalidSuggestionError(
                "Invalid reassign suggestion",
                details={"suggestion_id": suggestion.id},
            )
        if self._store.get_teacher(suggestion.new_teacher_id) is None:
            raise ResourceNotFoundError("Teacher", suggestion.new_teacher_id)
        updated = self._store.update_schedule(
            suggestion.schedule_id,
            ScheduleUpdate(teacher_id=suggestion.new_teacher_id),
        )
        if updated is None:
            raise ResourceNotFoundError("Schedule", suggestion.schedule_id)
        return updated
