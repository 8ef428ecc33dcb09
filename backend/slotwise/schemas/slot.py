from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class SlotKey:
    day_of_week: int
    time_slot: int


@dataclass(frozen=True, order=True)
class TeacherSlotKey:
    teacher_id: int
    day_of_week: int
    time_slot: int

    @property
    def slot(self) -> SlotKey:
        return SlotKey(self.day_of_week, self.time_slot)
