"""
Portfolio API — Project Service
================================

What:  Data access for the `projects` table.
How:   Each method receives the request's AsyncSession, runs one statement
       and returns ORM rows. Writes commit before returning. SQLAlchemy
       failures are re-raised as DataAccessError carrying the driver's
       message.
Why:   Committing here, not in the session dependency, means the route
       only answers once the row is durable; a failed commit is a 500.
Who:   Called by the public gallery routes and the admin project routes.

Query plan:
    list:   SELECT * FROM projects [WHERE category = :c] ORDER BY created_at DESC
            → idx_projects_created_at
    get:    SELECT * FROM projects WHERE id = :id  → primary key
    update: SELECT by id, then UPDATE of the four editable columns
    delete: DELETE FROM projects WHERE id = :id
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.database import db_error_message
from portfolio.exceptions import DataAccessError, RecordNotFoundError
from portfolio.models.project import Project
from portfolio.schemas.project import ProjectPayload

logger = logging.getLogger(__name__)


class ProjectService:
    """
    CRUD operations on gallery projects.

    Stateless: the session is passed into every call, so one instance can
    serve all requests.
    """

    async def list_projects(
        self,
        db: AsyncSession,
        category: Optional[str] = None,
    ) -> List[Project]:
        """All projects, newest first, optionally narrowed to one category."""
        query = select(Project)
        if category:
            query = query.where(Project.category == category)
        query = query.order_by(desc(Project.created_at))

        try:
            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing projects: %s", e)
            raise DataAccessError(
                message=db_error_message(e),
                context={"operation": "list_projects"},
            ) from e

    async def get_project(self, db: AsyncSession, project_id: UUID) -> Project:
        """
        Fetch a single project.

        Raises:
            RecordNotFoundError: No row with this id (reported as a 500)
            DataAccessError: Query execution failed
        """
        try:
            result = await db.execute(select(Project).where(Project.id == project_id))
            project = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching project %s: %s", project_id, e)
            raise DataAccessError(
                message=db_error_message(e),
                context={"operation": "get_project", "project_id": str(project_id)},
            ) from e

        if project is None:
            raise RecordNotFoundError(resource="project", resource_id=str(project_id))
        return project

    async def create_project(self, db: AsyncSession, payload: ProjectPayload) -> Project:
        """Insert a project; id and created_at are generated on insert."""
        project = Project(
            title=payload.title,
            category=payload.category,
            media_url=payload.media_url,
            thumbnail_url=payload.thumbnail_url,
        )
        try:
            db.add(project)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating project: %s", e)
            raise DataAccessError(
                message=db_error_message(e),
                context={"operation": "create_project"},
            ) from e

        logger.info("Project created: %s", project.id)
        return project

    async def update_project(
        self,
        db: AsyncSession,
        project_id: UUID,
        payload: ProjectPayload,
    ) -> Project:
        """
        Overwrite every editable field of a project.

        Fields missing from the payload are written as null; this is a full
        replacement, not a patch.
        """
        project = await self.get_project(db, project_id)

        project.title = payload.title
        project.category = payload.category
        project.media_url = payload.media_url
        project.thumbnail_url = payload.thumbnail_url

        try:
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating project %s: %s", project_id, e)
            raise DataAccessError(
                message=db_error_message(e),
                context={"operation": "update_project", "project_id": str(project_id)},
            ) from e

        logger.info("Project updated: %s", project_id)
        return project

    async def delete_project(self, db: AsyncSession, project_id: UUID) -> None:
        """Delete by id. Deleting an id that does not exist is not an error."""
        try:
            result = await db.execute(delete(Project).where(Project.id == project_id))
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting project %s: %s", project_id, e)
            raise DataAccessError(
                message=db_error_message(e),
                context={"operation": "delete_project", "project_id": str(project_id)},
            ) from e

        logger.info("Project delete: %s (%d row(s))", project_id, result.rowcount)


# Why singleton: ProjectService holds no state; the session travels with each call
project_service = ProjectService()
