"""
Portfolio API — Booking Schemas
================================

What:  Request and response models for the booking routes.

BookingCreate has no `status` field. Pydantic ignores unknown keys, so a
client-supplied status never reaches the service.
"""

import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class BookingCreate(BaseModel):
    """Body of POST /api/bookings (public booking form)."""
    client_name: str = Field(min_length=1)
    client_email: str = Field(min_length=3)
    event_date: Optional[date] = Field(default=None, description="ISO date (YYYY-MM-DD)")
    service_type: Optional[str] = Field(default=None)
    message: Optional[str] = Field(default=None)


class BookingStatusUpdate(BaseModel):
    """Body of PUT /api/admin/bookings/{id}."""
    status: str = Field(min_length=1, description="New status, e.g. 'Contacted'")


class BookingResponse(BaseModel):
    """A booking row as returned to clients."""
    id: uuid.UUID
    client_name: str
    client_email: str
    event_date: Optional[date] = None
    service_type: Optional[str] = None
    message: Optional[str] = None
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}
