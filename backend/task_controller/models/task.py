"""Task ORM — persists a work item.

Invariants:
    - id is a UUIDv7 string generated by the application, never by the database
    - title is non-nullable
    - created_at/updated_at are filled by the model defaults, never by callers

Design Decisions:
    - String primary key: ids cross the API as strings and stay sortable as text
    - Association rows are not mapped as a relationship: the orchestrator
      sequences them explicitly inside its transaction
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from task_controller.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskModel(Base):
    """Task table."""
    __tablename__ = "task"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )
    deadline: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    is_end: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
