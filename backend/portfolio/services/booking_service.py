"""
Portfolio API — Booking Service
================================

What:  Data access for the `bookings` table.
How:   Same shape as ProjectService: one statement per call, writes commit
       before returning, SQLAlchemy errors become DataAccessError.
Who:   Called by the public booking form route and the admin booking routes.

Invariants:
    - New bookings are always stored with status 'New', whatever the client sent
    - A status update touches the status column and nothing else
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.database import db_error_message
from portfolio.exceptions import DataAccessError, RecordNotFoundError
from portfolio.models.booking import DEFAULT_BOOKING_STATUS, Booking
from portfolio.schemas.booking import BookingCreate

logger = logging.getLogger(__name__)


class BookingService:

    async def create_booking(self, db: AsyncSession, payload: BookingCreate) -> Booking:
        """Insert an inquiry from the public form with status 'New'."""
        booking = Booking(
            client_name=payload.client_name,
            client_email=payload.client_email,
            event_date=payload.event_date,
            service_type=payload.service_type,
            message=payload.message,
            status=DEFAULT_BOOKING_STATUS,
        )
        try:
            db.add(booking)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating booking: %s", e)
            raise DataAccessError(
                message=db_error_message(e),
                context={"operation": "create_booking"},
            ) from e

        logger.info("Booking received: %s (%s)", booking.id, booking.service_type)
        return booking

    async def list_bookings(self, db: AsyncSession) -> List[Booking]:
        """All bookings, newest first."""
        try:
            result = await db.execute(select(Booking).order_by(desc(Booking.created_at)))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing bookings: %s", e)
            raise DataAccessError(
                message=db_error_message(e),
                context={"operation": "list_bookings"},
            ) from e

    async def update_status(self, db: AsyncSession, booking_id: UUID, status: str) -> Booking:
        """
        Set the status of one booking.

        Raises:
            RecordNotFoundError: No booking with this id (reported as a 500)
            DataAccessError: Query execution failed
        """
        try:
            result = await db.execute(select(Booking).where(Booking.id == booking_id))
            booking = result.scalar_one_or_none()
            if booking is None:
                # Not a SQLAlchemyError, so it passes the except below untouched
                raise RecordNotFoundError(resource="booking", resource_id=str(booking_id))

            booking.status = status
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating booking %s: %s", booking_id, e)
            raise DataAccessError(
                message=db_error_message(e),
                context={"operation": "update_status", "booking_id": str(booking_id)},
            ) from e

        logger.info("Booking %s status → %s", booking_id, status)
        return booking


# Why singleton: stateless, like ProjectService
booking_service = BookingService()
