"""
Schedule models - fixed weekly availability and dated month notes.
"""
from datetime import date as date_type
from typing import Optional

from sqlalchemy import String, Integer, Date, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from proworker.lib.db import Base


class WeekSchedule(Base):
    """
    Weekly working hours: one start/end time string pair per weekday.
    Both empty means holiday.
    """
    __tablename__ = "weekschedule"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workerid: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("worker.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    start_sunday: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    end_sunday: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    start_monday: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    end_monday: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    start_tuesday: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    end_tuesday: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    start_wednesday: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    end_wednesday: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    start_thursday: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    end_thursday: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    start_friday: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    end_friday: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    start_saturday: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    end_saturday: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)

    def __repr__(self) -> str:
        return f"<WeekSchedule(workerid={self.workerid})>"


class MonthSchedule(Base):
    """Free-text note pinned to a calendar date (leave, booked day, ...)."""
    __tablename__ = "monthschedule"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workerid: Mapped[int] = mapped_column(Integer, ForeignKey("worker.id"), nullable=False, index=True)
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
