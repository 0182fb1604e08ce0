"""
Worker data repository - read access to the worker backend.

WorkerDataRepository is the narrow interface the aggregation engine depends
on; SqlWorkerDataRepository implements it over a SQLAlchemy session and maps
ORM rows onto the immutable analytics records.
"""
from typing import List, Optional, Protocol

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from proworker.analytics.records import (
    LocationRecord,
    MediaRecord,
    MonthScheduleRecord,
    OrderRecord,
    PeerLocation,
    ReviewRecord,
    TrainingRecord,
    WeekScheduleRecord,
    WorkerRecord,
    WorkerSettingsRecord,
)
from proworker.lib.logging import get_logger
from proworker.models import (
    Location,
    MonthSchedule,
    Review,
    ReviewImage,
    ReviewVideo,
    TrainingVideo,
    WeekSchedule,
    Worker,
    WorkerImage,
    WorkerOrder,
    WorkerSettings,
    WorkerTraining,
    WorkerVideo,
)

logger = get_logger(__name__)


class WorkerDataRepository(Protocol):
    """Fetches used by AggregationService. Missing data is None or an empty list."""

    def get_worker(self, worker_id: int) -> Optional[WorkerRecord]: ...

    def get_settings(self, worker_id: int) -> Optional[WorkerSettingsRecord]: ...

    def get_location(self, settings_id: int) -> Optional[LocationRecord]: ...

    def get_orders(self, worker_id: int) -> List[OrderRecord]: ...

    def get_reviews(self, worker_id: int) -> List[ReviewRecord]: ...

    def get_review_media(self, worker_id: int) -> List[MediaRecord]: ...

    def get_portfolio_media(self, worker_id: int) -> List[MediaRecord]: ...

    def get_training(self, worker_id: int) -> List[TrainingRecord]: ...

    def count_training_catalog(self) -> int: ...

    def get_week_schedule(self, worker_id: int) -> Optional[WeekScheduleRecord]: ...

    def get_month_schedule(self, worker_id: int) -> List[MonthScheduleRecord]: ...

    def get_all_workers(self) -> List[WorkerRecord]: ...

    def get_all_orders(self) -> List[OrderRecord]: ...

    def get_all_locations(self) -> List[PeerLocation]: ...


def _float(value) -> Optional[float]:
    return float(value) if value is not None else None


def _worker_record(row: Worker) -> WorkerRecord:
    return WorkerRecord(
        id=row.id,
        name=row.name or "",
        profession=row.profession,
        gender=row.gender,
        rating=_float(row.rating),
        charges_perhour=_float(row.charges_perhour),
        charges_pervisit=_float(row.charges_pervisit),
        active_status=bool(row.active_status),
        imgurl=row.imgurl,
        contact_number=row.contact_number,
        description=row.description,
    )


def _order_record(row: WorkerOrder, with_client: bool = True) -> OrderRecord:
    client = row.client if with_client else None
    return OrderRecord(
        id=row.id,
        worker_id=row.workerid,
        client_id=row.clientid,
        order_status=row.order_status,
        date=row.date,
        time=row.time,
        reschedule_comment=row.reschedule_comment,
        client_name=client.name if client else None,
        client_gender=client.gender if client else None,
    )


class SqlWorkerDataRepository:
    """
    SQLAlchemy-backed repository.

    Population tables are returned ordered by primary key so that rank ties
    resolve the same way on every request.
    """

    def __init__(self, db: Session):
        """
        Args:
            db: Database session (sync)
        """
        self.db = db

    def get_worker(self, worker_id: int) -> Optional[WorkerRecord]:
        row = self.db.get(Worker, worker_id)
        return _worker_record(row) if row else None

    def get_settings(self, worker_id: int) -> Optional[WorkerSettingsRecord]:
        stmt = (
            select(WorkerSettings)
            .where(WorkerSettings.workerid == worker_id)
            .order_by(WorkerSettings.id)
            .limit(1)
        )
        row = self.db.execute(stmt).scalar_one_or_none()
        if row is None:
            return None
        return WorkerSettingsRecord(
            id=row.id,
            applanguage=row.applanguage,
            refercode=row.refercode,
            referenceid=row.referenceid,
        )

    def get_location(self, settings_id: int) -> Optional[LocationRecord]:
        stmt = (
            select(Location)
            .where(Location.workersettingsid == settings_id)
            .order_by(Location.id)
            .limit(1)
        )
        row = self.db.execute(stmt).scalar_one_or_none()
        if row is None:
            return None
        return LocationRecord(latitude=row.latitude, longitude=row.longitude)

    def get_orders(self, worker_id: int) -> List[OrderRecord]:
        stmt = (
            select(WorkerOrder)
            .where(WorkerOrder.workerid == worker_id)
            .order_by(WorkerOrder.date.desc(), WorkerOrder.id.desc())
        )
        rows = self.db.execute(stmt).unique().scalars().all()
        return [_order_record(row) for row in rows]

    def get_reviews(self, worker_id: int) -> List[ReviewRecord]:
        stmt = (
            select(Review)
            .where(Review.workerid == worker_id)
            .order_by(Review.createdat.desc(), Review.id.desc())
        )
        return [
            ReviewRecord(
                id=row.id,
                name=row.name,
                comment=row.comment,
                clientid=row.clientid,
                createdat=row.createdat,
            )
            for row in self.db.execute(stmt).scalars().all()
        ]

    def get_review_media(self, worker_id: int) -> List[MediaRecord]:
        images = self.db.execute(
            select(ReviewImage).where(ReviewImage.workerid == worker_id).order_by(ReviewImage.id)
        ).scalars().all()
        videos = self.db.execute(
            select(ReviewVideo).where(ReviewVideo.workerid == worker_id).order_by(ReviewVideo.id)
        ).scalars().all()
        return (
            [MediaRecord(type="image", createdat=row.createdat) for row in images]
            + [MediaRecord(type="video", createdat=row.createdat) for row in videos]
        )

    def get_portfolio_media(self, worker_id: int) -> List[MediaRecord]:
        images = self.db.execute(
            select(WorkerImage).where(WorkerImage.workerid == worker_id).order_by(WorkerImage.id)
        ).scalars().all()
        videos = self.db.execute(
            select(WorkerVideo).where(WorkerVideo.workerid == worker_id).order_by(WorkerVideo.id)
        ).scalars().all()
        return (
            [
                MediaRecord(name=row.name, url=row.img_url, type="image", createdat=row.createdat)
                for row in images
            ]
            + [
                MediaRecord(name=row.name, url=row.video_url, type="video", createdat=row.createdat)
                for row in videos
            ]
        )

    def get_training(self, worker_id: int) -> List[TrainingRecord]:
        stmt = (
            select(WorkerTraining)
            .where(WorkerTraining.workerid == worker_id)
            .order_by(WorkerTraining.id)
        )
        return [
            TrainingRecord(id=row.id, status=bool(row.status), createdat=row.createdat)
            for row in self.db.execute(stmt).scalars().all()
        ]

    def count_training_catalog(self) -> int:
        return self.db.execute(select(func.count(TrainingVideo.id))).scalar() or 0

    def get_week_schedule(self, worker_id: int) -> Optional[WeekScheduleRecord]:
        row = self.db.execute(
            select(WeekSchedule).where(WeekSchedule.workerid == worker_id)
        ).scalar_one_or_none()
        if row is None:
            return None
        fields = {
            name: getattr(row, name)
            for name in WeekScheduleRecord.model_fields
        }
        return WeekScheduleRecord(**fields)

    def get_month_schedule(self, worker_id: int) -> List[MonthScheduleRecord]:
        stmt = (
            select(MonthSchedule)
            .where(MonthSchedule.workerid == worker_id)
            .order_by(MonthSchedule.date.asc())
        )
        return [
            MonthScheduleRecord(date=row.date, note=row.note)
            for row in self.db.execute(stmt).scalars().all()
        ]

    def get_all_workers(self) -> List[WorkerRecord]:
        rows = self.db.execute(select(Worker).order_by(Worker.id)).scalars().all()
        return [_worker_record(row) for row in rows]

    def get_all_orders(self) -> List[OrderRecord]:
        stmt = select(WorkerOrder).order_by(WorkerOrder.id)
        rows = self.db.execute(stmt).unique().scalars().all()
        return [_order_record(row, with_client=False) for row in rows]

    def get_all_locations(self) -> List[PeerLocation]:
        stmt = (
            select(Location.latitude, Location.longitude, WorkerSettings.workerid)
            .join(WorkerSettings, Location.workersettingsid == WorkerSettings.id)
            .order_by(Location.id)
        )
        return [
            PeerLocation(worker_id=workerid, latitude=latitude, longitude=longitude)
            for latitude, longitude, workerid in self.db.execute(stmt).all()
        ]
