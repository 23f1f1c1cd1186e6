"""SQLAlchemy ORM models for Edge Notes."""

from edgenotes.models.base import Base
from edgenotes.models.entry import KeyValueEntry

__all__ = [
    "Base",
    "KeyValueEntry",
]
