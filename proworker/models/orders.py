"""
Order models - service engagements between clients and workers.
"""
from datetime import date as date_type
from typing import Optional

from sqlalchemy import String, Integer, Date, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from proworker.lib.db import Base


class Client(Base):
    """
    Client entity - the customer side of an order.
    """
    __tablename__ = "client"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    gender: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    def __repr__(self) -> str:
        return f"<Client(id={self.id})>"


class WorkerOrder(Base):
    """
    Order entity.

    order_status: 1=Pending, 2=Accepted, 3=Completed, 4=Cancelled, 5=Rescheduled
    """
    __tablename__ = "workerorder"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workerid: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("worker.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    clientid: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("client.id", ondelete="SET NULL"),
        nullable=True,
    )
    order_status: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    # Timing
    date: Mapped[Optional[date_type]] = mapped_column(Date, nullable=True, index=True)
    time: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)

    reschedule_comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    client: Mapped[Optional[Client]] = relationship(Client, lazy="joined")

    def __repr__(self) -> str:
        return f"<WorkerOrder(id={self.id}, workerid={self.workerid}, status={self.order_status})>"
