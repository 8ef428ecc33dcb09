from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from slotwise.db.base import Base


class Program(Base):
    __tablename__ = "programs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    code: Mapped[str] = mapped_column(String(20), unique=True, index=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    total_semesters: Mapped[int] = mapped_column(Integer, nullable=False, default=8)
