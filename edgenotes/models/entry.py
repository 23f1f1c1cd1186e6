"""Key-value entry model."""

from __future__ import annotations

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from edgenotes.models.base import Base


class KeyValueEntry(Base):
    """One key of the flat note namespace (``pages:list``, ``note:<id>``, ...)."""

    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(Text, primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
