"""Boundary Protocols — contracts between the orchestrator and storage.

Invariants:
    - Core NEVER imports from infrastructure; dependency arrows point inward only
    - Write methods that must be atomic with other writes take the transaction handle
      yielded by TransactionRunner.transaction(); reads run outside any scope
    - get() raises ResourceNotFoundError on a miss, never returns None;
      get_many() returns only the rows that exist, in no particular order
    - TaskStore.delete() raises ResourceNotFoundError when no row was removed;
      TaskStore.update() and TagStore.delete() do not check rows affected

Design Decisions:
    - Protocol over ABC: structural subtyping, in-memory fakes need no base class
    - Transaction handle typed as Any: its concrete type belongs to the store technology
"""

from contextlib import AbstractAsyncContextManager
from typing import Any, Awaitable, Callable, Protocol, Sequence, TypeVar

from task_controller.core.domain_types import (
    NewTask, Tag, TagId, Task, TaskChanges, TaskId, TaskTag,
)

T = TypeVar("T")


class TransactionRunner(Protocol):
    """Contract for atomic units of work, implemented by infrastructure."""
    def transaction(self) -> AbstractAsyncContextManager[Any]: ...
    async def run(self, unit_of_work: Callable[[Any], Awaitable[T]]) -> T: ...


class TaskStore(Protocol):
    """Contract for task row persistence."""
    async def create(self, tx: Any, task: NewTask) -> None: ...
    async def get(self, task_id: TaskId) -> Task: ...
    async def list(self, limit: int, offset: int) -> list[Task]: ...
    async def update(self, tx: Any, changes: TaskChanges) -> None: ...
    async def delete(self, tx: Any, task_id: TaskId) -> None: ...


class TagStore(Protocol):
    """Contract for tag row persistence."""
    async def create(self, tag: Tag) -> None: ...
    async def get(self, tag_id: TagId) -> Tag: ...
    async def get_many(self, tag_ids: Sequence[TagId]) -> list[Tag]: ...
    async def list(self, limit: int, offset: int) -> list[Tag]: ...
    async def delete(self, tag_id: TagId) -> None: ...


class TaskTagStore(Protocol):
    """Contract for task/tag association rows."""
    async def create(self, tx: Any, task_id: TaskId, tag_id: TagId) -> None: ...
    async def list_by_task(self, task_id: TaskId) -> list[TaskTag]: ...
    async def delete_by_task(self, tx: Any, task_id: TaskId) -> None: ...
