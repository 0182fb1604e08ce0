"""
Integration fixtures: an in-memory SQLite copy of the worker schema.
"""
from datetime import date, datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from proworker.lib.db import Base
from proworker.models import (
    Client,
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


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def seeded(session_factory):
    """Three workers; worker 1 has the full set of secondary rows."""
    ts = datetime(2025, 2, 1, 9, 30, tzinfo=timezone.utc)
    with session_factory() as db:
        db.add_all([
            Worker(id=1, name="Karim", profession="Plumber", gender="Male", rating=4.5,
                   charges_perhour=25, charges_pervisit=50, active_status=True),
            Worker(id=2, name="Salma", profession="plumber", gender="F", rating=4.9,
                   charges_perhour=30, charges_pervisit=60, active_status=True),
            Worker(id=3, name="Rafi", profession="Electrician", gender="m", rating=3.8,
                   charges_perhour=20, charges_pervisit=40, active_status=True),
            Client(id=1, name="Rahim", gender="male"),
        ])
        db.flush()
        db.add_all([
            WorkerSettings(id=10, workerid=1, applanguage="Bangla"),
            WorkerSettings(id=20, workerid=2, applanguage="English"),
            WorkerSettings(id=30, workerid=3, applanguage="English"),
        ])
        db.flush()
        db.add_all([
            Location(id=1, workersettingsid=10, latitude=23.8103, longitude=90.4125),
            Location(id=2, workersettingsid=20, latitude=23.8150, longitude=90.4200),
            WorkerOrder(id=1, workerid=1, clientid=1, order_status=3, date=date(2025, 3, 2), time="10:00"),
            WorkerOrder(id=2, workerid=1, clientid=None, order_status=4, date=date(2025, 2, 20),
                        reschedule_comment="Client travelling"),
            WorkerOrder(id=3, workerid=1, clientid=1, order_status=1, date=None),
            WorkerOrder(id=4, workerid=2, clientid=1, order_status=3, date=date(2025, 3, 1)),
            Review(id=1, workerid=1, clientid=1, name="Rahim", comment="Very tidy", createdat=ts),
            ReviewImage(id=1, workerid=1, createdat=ts),
            ReviewVideo(id=1, workerid=1, createdat=ts),
            WorkerImage(id=1, workerid=1, name="Kitchen sink", img_url="https://cdn/img.jpg", createdat=ts),
            WorkerVideo(id=1, workerid=1, name="Pipe fix", video_url="https://cdn/v.mp4", createdat=ts),
            TrainingVideo(id=1, title="Safety"),
            TrainingVideo(id=2, title="Customer care"),
            TrainingVideo(id=3, title="Billing"),
        ])
        db.flush()
        db.add_all([
            WorkerTraining(id=1, workerid=1, trainingvideoid=1, status=True, createdat=ts),
            WorkerTraining(id=2, workerid=1, trainingvideoid=2, status=False),
            WeekSchedule(id=1, workerid=1, start_sunday="09:00", end_sunday="17:00",
                         start_monday="09:00", end_monday="13:00"),
            MonthSchedule(id=1, workerid=1, date=date(2025, 3, 20), note="Family event"),
        ])
        db.commit()
    return session_factory
