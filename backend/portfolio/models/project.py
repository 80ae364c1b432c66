"""
Portfolio API — Project SQLAlchemy Model
=========================================

What:  ORM model for the `projects` table: one gallery entry per row.
Who:   Read by the public gallery routes; written by the admin routes.

Columns:
    - id: UUID, generated on insert
    - title: Display title (required)
    - category: Photography / Videography / Editing by convention; free text
    - media_url / thumbnail_url: URLs on the media host
    - created_at: UTC insert time; the gallery lists newest first
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.database import Base


class Project(Base):
    """A portfolio piece shown in the public gallery."""

    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    # Not constrained to the three known categories
    category: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    media_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    thumbnail_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_projects_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, title='{self.title}', category='{self.category}')>"
