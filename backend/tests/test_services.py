"""
Portfolio API — Project & Booking Service Unit Tests
=====================================================

What:  Tests for the data-access services with a mocked AsyncSession.
How:   No database; the mock session records what the service added and
       returns canned query results.

What we test:
    ✅ Inserts build rows from the payload (booking status forced to 'New')
    ✅ Missing rows raise RecordNotFoundError (a DataAccessError)
    ✅ SQLAlchemy failures are re-raised as DataAccessError with the driver message
    ✅ Status update touches status only
    ✅ Every write commits before returning; a failed commit is a DataAccessError
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from portfolio.exceptions import DataAccessError, RecordNotFoundError
from portfolio.models.booking import Booking
from portfolio.models.project import Project
from portfolio.schemas.booking import BookingCreate
from portfolio.schemas.project import ProjectPayload
from portfolio.services.booking_service import BookingService
from portfolio.services.project_service import ProjectService


def db_down() -> OperationalError:
    return OperationalError("SELECT", {}, Exception("could not connect to server"))


class TestProjectService:

    def setup_method(self):
        self.service = ProjectService()

    @pytest.mark.asyncio
    async def test_create_adds_row_from_payload(self, mock_db_session):
        payload = ProjectPayload(title="Dune shoot", category="Photography", media_url="m", thumbnail_url="t")

        project = await self.service.create_project(mock_db_session, payload)

        added = mock_db_session.add.call_args.args[0]
        assert added is project
        assert (project.title, project.category, project.media_url, project.thumbnail_url) == (
            "Dune shoot", "Photography", "m", "t",
        )
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_missing_raises_record_not_found(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(RecordNotFoundError) as exc_info:
            await self.service.get_project(mock_db_session, uuid4())
        assert isinstance(exc_info.value, DataAccessError)

    @pytest.mark.asyncio
    async def test_list_wraps_driver_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=db_down())

        with pytest.raises(DataAccessError) as exc_info:
            await self.service.list_projects(mock_db_session)
        assert exc_info.value.message == "could not connect to server"

    @pytest.mark.asyncio
    async def test_update_overwrites_fields(self, mock_db_session):
        existing = Project(title="old", category="Editing", media_url="a", thumbnail_url="b")
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = existing
        mock_db_session.execute.return_value = mock_result

        updated = await self.service.update_project(
            mock_db_session, uuid4(), ProjectPayload(title="new")
        )

        assert updated is existing
        assert updated.title == "new"
        assert updated.category is None
        assert updated.media_url is None
        assert updated.thumbnail_url is None


class TestBookingService:

    def setup_method(self):
        self.service = BookingService()

    @pytest.mark.asyncio
    async def test_create_forces_new_status(self, mock_db_session):
        payload = BookingCreate.model_validate(
            {
                "client_name": "Jane",
                "client_email": "jane@x.com",
                "event_date": "2024-06-01",
                "service_type": "Photography",
                "message": "hi",
                "status": "Confirmed",
            }
        )

        booking = await self.service.create_booking(mock_db_session, payload)

        assert booking.status == "New"
        assert booking.event_date == date(2024, 6, 1)
        mock_db_session.add.assert_called_once_with(booking)

    @pytest.mark.asyncio
    async def test_update_status_only(self, mock_db_session):
        existing = Booking(
            client_name="Sam",
            client_email="sam@example.com",
            service_type="Editing",
            message="color grade",
            status="New",
        )
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = existing
        mock_db_session.execute.return_value = mock_result

        updated = await self.service.update_status(mock_db_session, uuid4(), "Contacted")

        assert updated.status == "Contacted"
        assert (updated.client_name, updated.client_email, updated.service_type, updated.message) == (
            "Sam", "sam@example.com", "Editing", "color grade",
        )

    @pytest.mark.asyncio
    async def test_update_missing_booking(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(RecordNotFoundError):
            await self.service.update_status(mock_db_session, uuid4(), "Contacted")
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_wraps_driver_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=db_down())

        with pytest.raises(DataAccessError):
            await self.service.list_bookings(mock_db_session)

    @pytest.mark.asyncio
    async def test_failed_commit_is_data_access_error(self, mock_db_session, sample_booking_body):
        mock_db_session.commit = AsyncMock(side_effect=db_down())

        with pytest.raises(DataAccessError) as exc_info:
            await self.service.create_booking(mock_db_session, BookingCreate(**sample_booking_body))
        assert exc_info.value.message == "could not connect to server"
        assert exc_info.value.context == {"operation": "create_booking"}


class TestWritesCommitBeforeReturning:

    @pytest.mark.asyncio
    async def test_project_delete_commits(self, mock_db_session):
        mock_db_session.execute.return_value = MagicMock(rowcount=0)
        await ProjectService().delete_project(mock_db_session, uuid4())
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_project_update_commits(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = Project(title="old")
        mock_db_session.execute.return_value = mock_result

        await ProjectService().update_project(mock_db_session, uuid4(), ProjectPayload(title="new"))
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_status_update_commits(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = Booking(status="New")
        mock_db_session.execute.return_value = mock_result

        await BookingService().update_status(mock_db_session, uuid4(), "Confirmed")
        mock_db_session.commit.assert_awaited_once()
