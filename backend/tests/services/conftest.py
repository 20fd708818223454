"""Service test fixtures — in-memory stores and transaction runner.

Invariants:
    - Fake stores honour the same contracts as the SQL stores (NotFound on get,
      rows-affected check on task delete only, foreign-key and duplicate-pair checks)
    - FakeTransactionRunner restores a snapshot on failure, so atomicity is observable
    - Writes through a closed handle raise TransactionClosedError

Design Decisions:
    - Fakes over mocks: the property tests assert on resulting state, not call order
    - Call logs on the fakes let tests assert sequential vs batched tag lookups
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone

import pytest

from task_controller.core.domain_types import Tag, TagId, Task, TaskId, TaskTag
from task_controller.core.errors import (
    ConstraintViolationError, ResourceNotFoundError,
    TransactionClosedError, TransactionError,
)
from task_controller.services.tag_service import TagService
from task_controller.services.task_orchestrator import TaskOrchestrator


@dataclass
class MemoryDB:
    tasks: dict[str, Task] = field(default_factory=dict)
    tags: dict[str, Tag] = field(default_factory=dict)
    links: list[TaskTag] = field(default_factory=list)

    def snapshot(self):
        return dict(self.tasks), dict(self.tags), list(self.links)

    def restore(self, snapshot) -> None:
        tasks, tags, links = snapshot
        self.tasks, self.tags, self.links = dict(tasks), dict(tags), list(links)

    def links_for(self, task_id: str) -> list[TaskTag]:
        return [link for link in self.links if link.task_id == task_id]


class FakeHandle:
    def __init__(self):
        self.closed = False

    def check_open(self) -> None:
        if self.closed:
            raise TransactionClosedError()


class FakeTransactionRunner:
    def __init__(self, db: MemoryDB):
        self.db = db
        self.commits = 0
        self.rollbacks = 0
        self.rollback_error: Exception | None = None
        self.handles: list[FakeHandle] = []

    @asynccontextmanager
    async def transaction(self):
        snapshot = self.db.snapshot()
        handle = FakeHandle()
        self.handles.append(handle)
        try:
            try:
                yield handle
            except BaseException as exc:
                self.rollbacks += 1
                if self.rollback_error is not None:
                    raise TransactionError(exc, self.rollback_error) from exc
                self.db.restore(snapshot)
                raise
            self.commits += 1
        finally:
            handle.closed = True

    async def run(self, unit_of_work):
        async with self.transaction() as tx:
            return await unit_of_work(tx)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class FakeTaskStore:
    def __init__(self, db: MemoryDB):
        self.db = db

    async def create(self, tx, task):
        tx.check_open()
        if task.id in self.db.tasks:
            raise ConstraintViolationError("insert task")
        now = _now()
        self.db.tasks[task.id] = Task(
            id=task.id, title=task.title, description=task.description,
            is_end=task.is_end, deadline=task.deadline,
            created_at=now, updated_at=now,
        )

    async def get(self, task_id):
        if task_id not in self.db.tasks:
            raise ResourceNotFoundError("Task", task_id)
        return self.db.tasks[task_id]

    async def list(self, limit, offset):
        ordered = sorted(self.db.tasks.values(), key=lambda t: t.id)
        return ordered[offset:offset + limit]

    async def update(self, tx, changes):
        tx.check_open()
        current = self.db.tasks.get(changes.id)
        if current is None:
            return
        self.db.tasks[changes.id] = Task(
            id=current.id, title=changes.title,
            description=changes.description, is_end=changes.is_end,
            deadline=changes.deadline, created_at=current.created_at,
            updated_at=_now(),
        )

    async def delete(self, tx, task_id):
        tx.check_open()
        if self.db.tasks.pop(task_id, None) is None:
            raise ResourceNotFoundError("Task", task_id)


class FakeTagStore:
    def __init__(self, db: MemoryDB):
        self.db = db
        self.get_calls: list[str] = []
        self.get_many_calls: list[list[str]] = []

    async def create(self, tag):
        if tag.id in self.db.tags or any(
            t.name == tag.name for t in self.db.tags.values()
        ):
            raise ConstraintViolationError("insert tag")
        self.db.tags[tag.id] = tag

    async def get(self, tag_id):
        self.get_calls.append(tag_id)
        if tag_id not in self.db.tags:
            raise ResourceNotFoundError("Tag", tag_id)
        return self.db.tags[tag_id]

    async def get_many(self, tag_ids):
        self.get_many_calls.append(list(tag_ids))
        # Reverse to prove callers do not rely on store order
        return [self.db.tags[i] for i in reversed(tag_ids) if i in self.db.tags]

    async def list(self, limit, offset):
        ordered = sorted(self.db.tags.values(), key=lambda t: t.id)
        return ordered[offset:offset + limit]

    async def delete(self, tag_id):
        self.db.tags.pop(tag_id, None)
        self.db.links = [l for l in self.db.links if l.tag_id != tag_id]


class FakeTaskTagStore:
    def __init__(self, db: MemoryDB):
        self.db = db
        self.fail_on: str | None = None

    async def create(self, tx, task_id, tag_id):
        tx.check_open()
        if tag_id == self.fail_on:
            raise ConstraintViolationError("insert task_tag")
        if task_id not in self.db.tasks or tag_id not in self.db.tags:
            raise ConstraintViolationError("insert task_tag")
        link = TaskTag(task_id=TaskId(task_id), tag_id=TagId(tag_id))
        if link in self.db.links:
            raise ConstraintViolationError("insert task_tag")
        self.db.links.append(link)

    async def list_by_task(self, task_id):
        return self.db.links_for(task_id)

    async def delete_by_task(self, tx, task_id):
        tx.check_open()
        self.db.links = [l for l in self.db.links if l.task_id != task_id]


@pytest.fixture
def memory_db():
    return MemoryDB()


@pytest.fixture
def fake_runner(memory_db):
    return FakeTransactionRunner(memory_db)


@pytest.fixture
def fake_tag_store(memory_db):
    return FakeTagStore(memory_db)


@pytest.fixture
def fake_task_tag_store(memory_db):
    return FakeTaskTagStore(memory_db)


@pytest.fixture
def orchestrator(memory_db, fake_runner, fake_tag_store, fake_task_tag_store):
    return TaskOrchestrator(
        tasks=FakeTaskStore(memory_db),
        tags=fake_tag_store,
        task_tags=fake_task_tag_store,
        transactions=fake_runner,
    )


@pytest.fixture
def batched_orchestrator(memory_db, fake_runner, fake_tag_store, fake_task_tag_store):
    return TaskOrchestrator(
        tasks=FakeTaskStore(memory_db),
        tags=fake_tag_store,
        task_tags=fake_task_tag_store,
        transactions=fake_runner,
        batch_tag_lookup=True,
    )


@pytest.fixture
def tag_service(fake_tag_store):
    return TagService(fake_tag_store)


@pytest.fixture
def seed_tags(memory_db):
    """Three stored tags: t1, t2, t3."""
    for tag_id, name in (("t1", "urgent"), ("t2", "home"), ("t3", "work")):
        memory_db.tags[tag_id] = Tag(id=TagId(tag_id), name=name)
    return memory_db.tags
