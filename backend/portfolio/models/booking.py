"""
Portfolio API — Booking SQLAlchemy Model
=========================================

What:  ORM model for the `bookings` table: one inquiry from the public form.

Lifecycle:
    1. Created by POST /api/bookings with status 'New' (client value ignored)
    2. Status changed by the admin (free text, e.g. 'Contacted', 'Confirmed')
    3. Never deleted through the API
"""

import uuid
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import Date, DateTime, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.database import Base

DEFAULT_BOOKING_STATUS = "New"


class Booking(Base):
    """A booking inquiry submitted through the public form."""

    __tablename__ = "bookings"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    client_name: Mapped[str] = mapped_column(Text, nullable=False)
    client_email: Mapped[str] = mapped_column(String(320), nullable=False)
    event_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    service_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=DEFAULT_BOOKING_STATUS,
        server_default=text(f"'{DEFAULT_BOOKING_STATUS}'"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_bookings_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, client_email='{self.client_email}', "
            f"status='{self.status}')>"
        )
