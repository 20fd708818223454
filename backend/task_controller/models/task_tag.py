"""TaskTag ORM — junction rows between task and tag.

Invariants:
    - (task_id, tag_id) is the primary key: a tag is linked to a task at most once
    - Both columns reference their parent rows; ON DELETE CASCADE backs up the
      orchestrator's explicit association delete

Design Decisions:
    - No surrogate id: the pair is the natural key
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from task_controller.db.base import Base


class TaskTagModel(Base):
    """Task/tag association table."""
    __tablename__ = "task_tag"

    task_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("task.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("tag.id", ondelete="CASCADE"),
        primary_key=True,
    )
