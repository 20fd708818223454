"""Domain Types — identity wrappers and row shapes shared by core, services and stores.

Invariants:
    - TaskId, TagId wrap the string form of a UUIDv7; never mix them up in signatures
    - Row dataclasses are frozen: stores return values, never live ORM objects
    - ResolvedTask.tags keeps association-row order

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
    - Plain dataclasses instead of ORM models: the core stays storage-agnostic
      and in-memory fakes can build the same shapes
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

TaskId = NewType("TaskId", str)
TagId = NewType("TagId", str)


# ─── Rows ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Task:
    """Task row as stored."""
    id: TaskId
    title: str
    description: str | None
    is_end: bool
    deadline: datetime | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Tag:
    """Tag row as stored."""
    id: TagId
    name: str


@dataclass(frozen=True)
class TaskTag:
    """Junction row; the pair is the natural key."""
    task_id: TaskId
    tag_id: TagId


# ─── Write parameters ────────────────────────────────────────────

@dataclass(frozen=True)
class NewTask:
    """Fields written on task insert. Timestamps are filled by the store."""
    id: TaskId
    title: str
    description: str | None
    deadline: datetime | None
    is_end: bool = False


@dataclass(frozen=True)
class TaskChanges:
    """Mutable task fields written on update."""
    id: TaskId
    title: str
    description: str | None
    deadline: datetime | None
    is_end: bool


# ─── Read assembly ───────────────────────────────────────────────

@dataclass(frozen=True)
class ResolvedTask:
    """A task together with its tags, resolved from the association rows."""
    task: Task
    tags: list[Tag] = field(default_factory=list)
