from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from slotwise.schemas.slot import SlotKey, TeacherSlotKey


class SuggestionAction(str, Enum):
    move = "move"
    swap = "swap"
    reassign = "reassign"


class Suggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    description: str
    action: SuggestionAction
    schedule_id: int
    new_day_of_week: int | None = None  # move
    new_time_slot: int | None = None  # move
    swap_with_schedule_id: int | None = None  # swap
    new_teacher_id: int | None = None  # reassign


class ConflictBase(BaseModel):
    teacher_id: int
    day_of_week: int
    time_slot: int
    conflicting_schedule_ids: list[int] = Field(min_length=2)
    resolved: bool = False
    suggestions: list[Suggestion] = Field(default_factory=list)

    @property
    def key(self) -> TeacherSlotKey:
        return TeacherSlotKey(self.teacher_id, self.day_of_week, self.time_slot)

    @property
    def slot(self) -> SlotKey:
        return SlotKey(self.day_of_week, self.time_slot)

    def find_suggestion(self, suggestion_id: str) -> Suggestion | None:
        return next((item for item in self.suggestions if item.id == suggestion_id), None)


class ConflictCreate(ConflictBase):
    pass


class ConflictOut(ConflictBase):
    id: int

    model_config = {"from_attributes": True}
