"""
Portfolio API — Admin Route Handlers
=====================================

What:  Routes behind the authorization gate.
How:   Every route here is an AdminRoute, which awaits `require_admin`
       before the body is parsed or any dependency runs; an unverified
       caller gets 401 and nothing is read or written.

Route Inventory (relative to the API prefix):
    GET    /cloudinary/signature     → signed upload parameters
    POST   /admin/projects           → create project
    PUT    /admin/projects/{id}      → overwrite project fields
    DELETE /admin/projects/{id}      → delete project
    GET    /admin/bookings           → all bookings, newest first
    PUT    /admin/bookings/{id}      → change booking status only
"""

import logging
from typing import Callable, Coroutine, List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.routing import APIRoute
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.database import get_db_session
from portfolio.dependencies import get_media_service, require_admin
from portfolio.schemas.booking import BookingResponse, BookingStatusUpdate
from portfolio.schemas.common import ErrorResponse, SuccessResponse, UploadSignatureResponse
from portfolio.schemas.project import ProjectPayload, ProjectResponse
from portfolio.services.booking_service import booking_service
from portfolio.services.media_service import DEFAULT_RESOURCE_TYPE, MediaSignatureService
from portfolio.services.project_service import project_service

logger = logging.getLogger(__name__)


class AdminRoute(APIRoute):
    """
    Route class that runs the admin gate ahead of FastAPI's request handling.

    Why not a router dependency: FastAPI decodes and validates the body
    before resolving dependencies, so `{not json` from an anonymous caller
    would be answered with a body error instead of 401.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[None, None, Response]]:
        handler = super().get_route_handler()

        async def gated_handler(request: Request) -> Response:
            await require_admin(request)
            return await handler(request)

        return gated_handler


router = APIRouter(
    tags=["Admin"],
    route_class=AdminRoute,
    responses={401: {"description": "Missing or invalid bearer token", "model": ErrorResponse}},
)


@router.get(
    "/cloudinary/signature",
    response_model=UploadSignatureResponse,
    summary="Sign a direct upload to the media host",
)
async def upload_signature(
    resource_type: str = Query(default=DEFAULT_RESOURCE_TYPE, description="image or video"),
    media: MediaSignatureService = Depends(get_media_service),
) -> UploadSignatureResponse:
    return media.sign_upload(resource_type)


@router.post("/admin/projects", response_model=ProjectResponse, summary="Create a project")
async def create_project(
    payload: ProjectPayload,
    db: AsyncSession = Depends(get_db_session),
) -> ProjectResponse:
    project = await project_service.create_project(db, payload)
    return ProjectResponse.model_validate(project)


@router.put(
    "/admin/projects/{project_id}",
    response_model=ProjectResponse,
    summary="Overwrite a project",
)
async def update_project(
    project_id: UUID,
    payload: ProjectPayload,
    db: AsyncSession = Depends(get_db_session),
) -> ProjectResponse:
    project = await project_service.update_project(db, project_id, payload)
    return ProjectResponse.model_validate(project)


@router.delete(
    "/admin/projects/{project_id}",
    response_model=SuccessResponse,
    summary="Delete a project",
)
async def delete_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await project_service.delete_project(db, project_id)
    return SuccessResponse(success=True)


@router.get(
    "/admin/bookings",
    response_model=List[BookingResponse],
    summary="List all bookings, newest first",
)
async def list_bookings(db: AsyncSession = Depends(get_db_session)) -> List[BookingResponse]:
    bookings = await booking_service.list_bookings(db)
    return [BookingResponse.model_validate(b) for b in bookings]


@router.put(
    "/admin/bookings/{booking_id}",
    response_model=BookingResponse,
    summary="Change a booking's status",
)
async def update_booking_status(
    booking_id: UUID,
    payload: BookingStatusUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> BookingResponse:
    booking = await booking_service.update_status(db, booking_id, payload.status)
    return BookingResponse.model_validate(booking)
