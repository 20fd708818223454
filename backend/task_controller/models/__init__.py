"""ORM Models — SQLAlchemy declarative models for task, tag and their junction.

Invariants:
    - All models inherit from Base (db/base.py)
    - Only infrastructure/ stores touch these classes; core/ sees dataclasses

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all runs
"""

from task_controller.models.task import TaskModel  # noqa: F401
from task_controller.models.tag import TagModel  # noqa: F401
from task_controller.models.task_tag import TaskTagModel  # noqa: F401
