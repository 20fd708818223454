"""Task Schemas — request and response shapes for /api/v1/tasks.

Invariants:
    - title length is capped here; emptiness is checked by check_title_present()
      in the route so it reports through ValidationFailureError
    - tag_ids defaults to [] and is passed through untouched: the placeholder
      rule ([""]) is applied by the orchestrator, not stripped here
"""

from datetime import datetime

from pydantic import Field

from task_controller.core.domain_types import ResolvedTask
from task_controller.schemas.base import CamelModel
from task_controller.schemas.tag import TagResponse


class TaskCreate(CamelModel):
    title: str = Field(max_length=255)
    description: str | None = None
    deadline: datetime | None = None
    tag_ids: list[str] = Field(default_factory=list)


class TaskUpdate(CamelModel):
    title: str = Field(max_length=255)
    description: str | None = None
    deadline: datetime | None = None
    is_end: bool = False
    tag_ids: list[str] = Field(default_factory=list)


class TaskResponse(CamelModel):
    id: str
    title: str
    description: str | None
    created_at: datetime
    updated_at: datetime
    deadline: datetime | None
    is_end: bool
    tags: list[TagResponse]

    @classmethod
    def from_resolved(cls, resolved: ResolvedTask) -> "TaskResponse":
        task = resolved.task
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            created_at=task.created_at,
            updated_at=task.updated_at,
            deadline=task.deadline,
            is_end=task.is_end,
            tags=[TagResponse.from_tag(tag) for tag in resolved.tags],
        )


class TaskEnvelope(CamelModel):
    task: TaskResponse


class TaskListResponse(CamelModel):
    tasks: list[TaskResponse]
