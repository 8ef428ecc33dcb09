from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from slotwise.db.base import Base


class Schedule(Base):
    __tablename__ = "schedules"
    # Not unique: double-bookings are stored and reported as conflicts.
    __table_args__ = (Index("ix_schedules_teacher_slot", "teacher_id", "day_of_week", "time_slot"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    program_id: Mapped[int] = mapped_column(Integer, nullable=False)
    semester: Mapped[int] = mapped_column(Integer, nullable=False)
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    time_slot: Mapped[int] = mapped_column(Integer, nullable=False)
    course_id: Mapped[int] = mapped_column(Integer, nullable=False)
    teacher_id: Mapped[int] = mapped_column(Integer, nullable=False)
    room_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
