from sqlalchemy import Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from slotwise.db.base import Base


class Teacher(Base):
    __tablename__ = "teachers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    specialization: Mapped[str | None] = mapped_column(String(200), nullable=True)
    skills: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    # [{"day_of_week": 1, "start_time_slot": 0, "end_time_slot": 2}, ...]
    time_preferences: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
