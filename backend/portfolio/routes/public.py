"""
Portfolio API — Public Route Handlers
======================================

What:  Unauthenticated routes used by the public site.
How:   Thin handlers: parse the request, call a service, return the row(s).

Route Inventory (relative to the API prefix):
    GET  /  and  /root        → liveness message
    GET  /projects            → gallery, newest first (optional ?category=)
    GET  /projects/{id}       → one project
    POST /bookings            → booking inquiry, stored with status 'New'
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.database import get_db_session
from portfolio.schemas.booking import BookingCreate, BookingResponse
from portfolio.schemas.common import ErrorResponse, MessageResponse
from portfolio.schemas.project import ProjectResponse
from portfolio.services.booking_service import booking_service
from portfolio.services.project_service import project_service

logger = logging.getLogger(__name__)

API_MESSAGE = "Photographer Portfolio API"

router = APIRouter(tags=["Public"])


@router.get("/", response_model=MessageResponse, summary="API liveness message")
@router.get("/root", response_model=MessageResponse, include_in_schema=False)
async def root() -> MessageResponse:
    return MessageResponse(message=API_MESSAGE)


@router.get(
    "/projects",
    response_model=List[ProjectResponse],
    responses={500: {"model": ErrorResponse}},
    summary="List gallery projects, newest first",
)
async def list_projects(
    category: Optional[str] = Query(
        default=None,
        description="Only return projects in this category (e.g. Photography)",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[ProjectResponse]:
    projects = await project_service.list_projects(db, category=category)
    return [ProjectResponse.model_validate(p) for p in projects]


@router.get(
    "/projects/{project_id}",
    response_model=ProjectResponse,
    responses={500: {"description": "Lookup failed or no such project", "model": ErrorResponse}},
    summary="Get one project",
)
async def get_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ProjectResponse:
    project = await project_service.get_project(db, project_id)
    return ProjectResponse.model_validate(project)


@router.post(
    "/bookings",
    response_model=BookingResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Submit a booking inquiry",
    description="Any `status` in the body is ignored; new bookings always start as 'New'.",
)
async def create_booking(
    payload: BookingCreate,
    db: AsyncSession = Depends(get_db_session),
) -> BookingResponse:
    booking = await booking_service.create_booking(db, payload)
    return BookingResponse.model_validate(booking)
