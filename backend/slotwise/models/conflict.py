from sqlalchemy import Boolean, Integer, JSON
from sqlalchemy.orm import Mapped, mapped_column

from slotwise.db.base import Base


class Conflict(Base):
    __tablename__ = "conflicts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    teacher_id: Mapped[int] = mapped_column(Integer, nullable=False)
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    time_slot: Mapped[int] = mapped_column(Integer, nullable=False)
    conflicting_schedule_ids: Mapped[list[int]] = mapped_column(JSON, nullable=False, default=list)
    resolved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    suggestions: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
