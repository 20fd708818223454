"""Tag ORM — persists a reusable label.

Invariants:
    - name is unique and non-nullable
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from task_controller.db.base import Base


class TagModel(Base):
    """Tag table."""
    __tablename__ = "tag"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
