"""
Portfolio media models - images and videos a worker uploads to their profile.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from proworker.lib.db import Base


class WorkerImage(Base):
    __tablename__ = "workerimage"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workerid: Mapped[int] = mapped_column(Integer, ForeignKey("worker.id"), nullable=False, index=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    img_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    createdat: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<WorkerImage(id={self.id}, workerid={self.workerid})>"


class WorkerVideo(Base):
    __tablename__ = "workervideo"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workerid: Mapped[int] = mapped_column(Integer, ForeignKey("worker.id"), nullable=False, index=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    video_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    createdat: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<WorkerVideo(id={self.id}, workerid={self.workerid})>"
