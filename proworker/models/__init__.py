"""
SQLAlchemy models package.
Import all models here to ensure they're registered with Base.metadata.
"""
from proworker.models.workers import Worker, WorkerSettings, Location
from proworker.models.orders import Client, WorkerOrder
from proworker.models.reviews import Review, ReviewImage, ReviewVideo
from proworker.models.media import WorkerImage, WorkerVideo
from proworker.models.training import TrainingVideo, WorkerTraining
from proworker.models.schedules import WeekSchedule, MonthSchedule

__all__ = [
    "Worker",
    "WorkerSettings",
    "Location",
    "Client",
    "WorkerOrder",
    "Review",
    "ReviewImage",
    "ReviewVideo",
    "WorkerImage",
    "WorkerVideo",
    "TrainingVideo",
    "WorkerTraining",
    "WeekSchedule",
    "MonthSchedule",
]
