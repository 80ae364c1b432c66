"""ORM models. Importing this package registers every table on Base.metadata."""

from portfolio.models.booking import Booking
from portfolio.models.project import Project

__all__ = ["Booking", "Project"]
