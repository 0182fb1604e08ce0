"""
Worker models - service providers, their app settings and home location.

Read-only mappings of the worker backend tables.
"""
from typing import Optional

from sqlalchemy import String, Integer, Numeric, Boolean, Float, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from proworker.lib.db import Base


class Worker(Base):
    """
    Worker entity - one gig worker's static profile.
    """
    __tablename__ = "worker"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # Profile
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    imgurl: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    contact_number: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Free text, normalized before any peer comparison
    profession: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    gender: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    # Performance and pricing
    rating: Mapped[Optional[float]] = mapped_column(
        Numeric(3, 2),
        nullable=True,
        comment="Average rating (0-5)",
    )
    charges_perhour: Mapped[Optional[float]] = mapped_column(Numeric(10, 2), nullable=True)
    charges_pervisit: Mapped[Optional[float]] = mapped_column(Numeric(10, 2), nullable=True)

    # Status
    active_status: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Worker(id={self.id}, profession={self.profession}, rating={self.rating})>"


class WorkerSettings(Base):
    """
    Per-worker app settings. Locations hang off this row, not off the worker.
    """
    __tablename__ = "workersettings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workerid: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("worker.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    applanguage: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    refercode: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    referenceid: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<WorkerSettings(id={self.id}, workerid={self.workerid})>"


class Location(Base):
    """
    Worker home location (at most one per worker settings row).
    """
    __tablename__ = "location"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workersettingsid: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("workersettings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)

    def __repr__(self) -> str:
        return f"<Location(id={self.id}, workersettingsid={self.workersettingsid})>"
