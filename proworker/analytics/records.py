"""
Input records consumed by the aggregation engine.

These are storage-agnostic, immutable shapes. The SQL repository maps ORM
rows onto them; tests build them directly.
"""
from datetime import date as date_type, datetime
import enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class Record(BaseModel):
    """Base for frozen input records."""

    model_config = ConfigDict(frozen=True)


class OrderStatus(int, enum.Enum):
    """Order status codes as stored by the worker backend."""
    PENDING = 1
    ACCEPTED = 2
    COMPLETED = 3
    CANCELLED = 4
    RESCHEDULED = 5


STATUS_LABELS = {
    OrderStatus.PENDING: "Pending",
    OrderStatus.ACCEPTED: "Accepted",
    OrderStatus.COMPLETED: "Completed",
    OrderStatus.CANCELLED: "Cancelled",
    OrderStatus.RESCHEDULED: "Rescheduled",
}


def status_label(code: Optional[int]) -> Optional[str]:
    """Human label for a status code; None for codes outside the enumeration."""
    try:
        return STATUS_LABELS[OrderStatus(code)]
    except ValueError:
        return None


class WorkerRecord(Record):
    id: int
    name: str = ""
    profession: Optional[str] = None
    gender: Optional[str] = None
    rating: Optional[float] = None  # 0-5
    charges_perhour: Optional[float] = None
    charges_pervisit: Optional[float] = None
    active_status: bool = True
    imgurl: Optional[str] = None
    contact_number: Optional[str] = None
    description: Optional[str] = None


class WorkerSettingsRecord(Record):
    id: int
    applanguage: Optional[str] = None
    refercode: Optional[int] = None
    referenceid: Optional[int] = None


class LocationRecord(Record):
    latitude: float
    longitude: float


class PeerLocation(Record):
    """A population location joined to its owning worker (id may be missing)."""
    worker_id: Optional[int] = None
    latitude: float
    longitude: float


class OrderRecord(Record):
    id: int
    worker_id: int
    client_id: Optional[int] = None
    order_status: int
    date: Optional[date_type] = None
    time: Optional[str] = None
    reschedule_comment: Optional[str] = None

    # Denormalized from the client join
    client_name: Optional[str] = None
    client_gender: Optional[str] = None


class ReviewRecord(Record):
    id: int
    name: Optional[str] = None
    comment: Optional[str] = None
    clientid: Optional[int] = None
    createdat: Optional[datetime] = None


class MediaRecord(Record):
    name: Optional[str] = None
    url: Optional[str] = None
    type: Literal["image", "video"]
    createdat: Optional[datetime] = None


class TrainingRecord(Record):
    id: int
    status: bool = False
    createdat: Optional[datetime] = None


class WeekScheduleRecord(Record):
    start_sunday: Optional[str] = None
    end_sunday: Optional[str] = None
    start_monday: Optional[str] = None
    end_monday: Optional[str] = None
    start_tuesday: Optional[str] = None
    end_tuesday: Optional[str] = None
    start_wednesday: Optional[str] = None
    end_wednesday: Optional[str] = None
    start_thursday: Optional[str] = None
    end_thursday: Optional[str] = None
    start_friday: Optional[str] = None
    end_friday: Optional[str] = None
    start_saturday: Optional[str] = None
    end_saturday: Optional[str] = None


class MonthScheduleRecord(Record):
    date: date_type
    note: Optional[str] = None
