from pydantic import BaseModel

from slotwise.schemas.conflict import ConflictOut, Suggestion
from slotwise.schemas.schedule import ScheduleOut


class ResolutionResult(BaseModel):
    conflict: ConflictOut
    suggestion: Suggestion
    updated_schedules: list[ScheduleOut]
    remaining_conflicts: list[ConflictOut]
