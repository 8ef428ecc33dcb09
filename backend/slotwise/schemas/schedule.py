from pydantic import BaseModel, Field

from slotwise.schemas.slot import SlotKey, TeacherSlotKey


class ScheduleBase(BaseModel):
    program_id: int
    semester: int = Field(ge=1, le=8)
    day_of_week: int = Field(ge=0, le=6)
    time_slot: int = Field(ge=0, le=4)
    course_id: int
    teacher_id: int
    room_number: str | None = Field(default=None, max_length=50)


class ScheduleCreate(ScheduleBase):
    pass


class ScheduleUpdate(BaseModel):
    program_id: int | None = None
    semester: int | None = Field(default=None, ge=1, le=8)
    day_of_week: int | None = Field(default=None, ge=0, le=6)
    time_slot: int | None = Field(default=None, ge=0, le=4)
    course_id: int | None = None
    teacher_id: int | None = None
    room_number: str | None = Field(default=None, max_length=50)


class ScheduleOut(ScheduleBase):
    id: int

    model_config = {"from_attributes": True}

    @property
    def slot(self) -> SlotKey:
        return SlotKey(self.day_of_week, self.time_slot)

    @property
    def teacher_slot(self) -> TeacherSlotKey:
        return TeacherSlotKey(self.teacher_id, self.day_of_week, self.time_slot)
