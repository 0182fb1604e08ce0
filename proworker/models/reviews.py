"""
Review models - client feedback on a worker plus attached media.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Integer, DateTime, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from proworker.lib.db import Base


class Review(Base):
    """
    Review entity - client name and comment for a worker.
    """
    __tablename__ = "review"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workerid: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("worker.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    clientid: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    createdat: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, workerid={self.workerid})>"


class ReviewImage(Base):
    """Image attached to a review. Only counted, never rendered."""
    __tablename__ = "reviewimage"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workerid: Mapped[int] = mapped_column(Integer, ForeignKey("worker.id"), nullable=False, index=True)
    createdat: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)


class ReviewVideo(Base):
    """Video attached to a review."""
    __tablename__ = "reviewvideo"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workerid: Mapped[int] = mapped_column(Integer, ForeignKey("worker.id"), nullable=False, index=True)
    createdat: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
