"""Create projects and bookings tables

Revision ID: 001
Revises: None
Create Date: 2024-05-20 00:00:00.000000+00:00

What:  Creates the two tables behind the gallery and the booking form.
How:   PostgreSQL UUID keys generated by gen_random_uuid(), timestamps with
       time zone, and a created_at DESC index on each table for the
       newest-first listings.

Rollback: downgrade() drops both tables (all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("title", sa.Text(), nullable=False),
        # Photography / Videography / Editing by convention; not constrained
        sa.Column("category", sa.String(50), nullable=True),
        sa.Column("media_url", sa.Text(), nullable=True),
        sa.Column("thumbnail_url", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_projects_created_at",
        "projects",
        [sa.text("created_at DESC")],
    )

    op.create_table(
        "bookings",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("client_name", sa.Text(), nullable=False),
        sa.Column("client_email", sa.String(320), nullable=False),
        sa.Column("event_date", sa.Date(), nullable=True),
        sa.Column("service_type", sa.String(50), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        # Free text; the API writes 'New' on insert
        sa.Column(
            "status",
            sa.String(50),
            server_default=sa.text("'New'"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_bookings_created_at",
        "bookings",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_bookings_created_at", table_name="bookings")
    op.drop_table("bookings")
    op.drop_index("idx_projects_created_at", table_name="projects")
    op.drop_table("projects")
