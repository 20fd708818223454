"""Task Routes — HTTP surface of the task orchestrator.

Invariants:
    - Title presence is checked here before the orchestrator runs
    - limit=0 is forwarded as-is; the orchestrator applies the default page size
    - Errors propagate to the global handlers (no per-route try/except)
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from task_controller.api.dependencies import get_task_orchestrator
from task_controller.core.enforce_params import check_title_present
from task_controller.schemas.base import IdResponse, SuccessResponse
from task_controller.schemas.task import (
    TaskCreate, TaskEnvelope, TaskListResponse, TaskResponse, TaskUpdate,
)
from task_controller.services.task_orchestrator import TaskOrchestrator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


@router.post(
    "", response_model=IdResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    body: TaskCreate,
    orchestrator: TaskOrchestrator = Depends(get_task_orchestrator),
):
    """Create a task and link it to existing tags."""
    check_title_present(body.title)
    task_id = await orchestrator.create_task(
        title=body.title,
        description=body.description,
        deadline=body.deadline,
        tag_ids=body.tag_ids,
    )
    return IdResponse(id=task_id)


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    limit: int = Query(0, ge=0),
    offset: int = Query(0, ge=0),
    orchestrator: TaskOrchestrator = Depends(get_task_orchestrator),
):
    """List tasks with their tags."""
    resolved = await orchestrator.list_tasks(limit=limit, offset=offset)
    return TaskListResponse(
        tasks=[TaskResponse.from_resolved(r) for r in resolved],
    )


@router.get("/{task_id}", response_model=TaskEnvelope)
async def get_task(
    task_id: str,
    orchestrator: TaskOrchestrator = Depends(get_task_orchestrator),
):
    """Get one task with its tags."""
    resolved = await orchestrator.get_task(task_id)
    return TaskEnvelope(task=TaskResponse.from_resolved(resolved))


@router.put("/{task_id}", response_model=SuccessResponse)
async def update_task(
    task_id: str,
    body: TaskUpdate,
    orchestrator: TaskOrchestrator = Depends(get_task_orchestrator),
):
    """Overwrite a task and replace its tags."""
    check_title_present(body.title)
    success = await orchestrator.update_task(
        task_id=task_id,
        title=body.title,
        description=body.description,
        deadline=body.deadline,
        is_end=body.is_end,
        tag_ids=body.tag_ids,
    )
    return SuccessResponse(success=success)


@router.delete("/{task_id}", response_model=SuccessResponse)
async def delete_task(
    task_id: str,
    orchestrator: TaskOrchestrator = Depends(get_task_orchestrator),
):
    """Delete a task and its tag links."""
    success = await orchestrator.delete_task(task_id)
    return SuccessResponse(success=success)
