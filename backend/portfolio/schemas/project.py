"""
Portfolio API — Project Schemas
================================

What:  Request and response models for the project routes.
How:   FastAPI validates request bodies against ProjectPayload and
       serializes ORM rows through ProjectResponse (from_attributes).

Both POST and PUT take the same payload: PUT overwrites all four editable
fields, so an omitted optional field is stored as null.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ProjectPayload(BaseModel):
    """Body of POST /api/admin/projects and PUT /api/admin/projects/{id}."""
    title: str = Field(min_length=1, description="Display title")
    category: Optional[str] = Field(
        default=None,
        description="Photography, Videography or Editing (not enforced)",
    )
    media_url: Optional[str] = Field(default=None, description="Full-size media URL")
    thumbnail_url: Optional[str] = Field(default=None, description="Thumbnail URL")


class ProjectResponse(BaseModel):
    """A project row as returned to clients."""
    id: uuid.UUID
    title: str
    category: Optional[str] = None
    media_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}
