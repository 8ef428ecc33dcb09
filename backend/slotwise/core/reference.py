"""Static calendar reference data shared by the engine and the seed scripts."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TimeSlotDescriptor:
    id: int
    label: str
    period: int


TIME_SLOTS: tuple[TimeSlotDescriptor, ...] = (
    TimeSlotDescriptor(id=0, label="6:30 AM - 7:20 AM", period=1),
    TimeSlotDescriptor(id=1, label="7:20 AM - 8:10 AM", period=2),
    TimeSlotDescriptor(id=2, label="8:10 AM - 9:00 AM", period=3),
    TimeSlotDescriptor(id=3, label="9:20 AM - 10:10 AM", period=4),
    TimeSlotDescriptor(id=4, label="10:10 AM - 11:00 AM", period=5),
)

DAYS_OF_WEEK: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

DEFAULT_PROGRAMS: tuple[dict, ...] = (
    {
        "name": "Bachelor of Computer Applications",
        "code": "BCA",
        "description": "A comprehensive program focused on computer applications and software development",
        "total_semesters": 8,
    },
    {
        "name": "Bachelor of Information Technology",
        "code": "BIT",
        "description": "A program focused on information technology and systems",
        "total_semesters": 8,
    },
    {
        "name": "Bachelor of Technology in Artificial Intelligence",
        "code": "BTAI",
        "description": "A specialized program in artificial intelligence and machine learning",
        "total_semesters": 8,
    },
)


def day_name(day_of_week: int) -> str:
    if 0 <= day_of_week < len(DAYS_OF_WEEK):
        return DAYS_OF_WEEK[day_of_week]
    return f"Day {day_of_week}"


def time_slot_label(time_slot: int) -> str:
    if 0 <= time_slot < len(TIME_SLOTS):
        return TIME_SLOTS[time_slot].label
    return f"Slot {time_slot}"
