"""
Training models - the global training video catalog and per-worker progress.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from proworker.lib.db import Base


class TrainingVideo(Base):
    """
    Catalog entry. The catalog size is the denominator of training progress.
    """
    __tablename__ = "trainingvideo"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    video_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)


class WorkerTraining(Base):
    """
    One worker's progress on one training video (status True = completed).
    """
    __tablename__ = "workertraining"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workerid: Mapped[int] = mapped_column(Integer, ForeignKey("worker.id"), nullable=False, index=True)
    trainingvideoid: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("trainingvideo.id"),
        nullable=True,
    )
    status: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    createdat: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<WorkerTraining(workerid={self.workerid}, status={self.status})>"
