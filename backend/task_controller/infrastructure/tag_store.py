"""Tag Store — SQL persistence for tag rows.

Invariants:
    - Every call uses its own short session and commits itself (no transaction handle)
    - delete() is unconditional: removing an unknown id succeeds
    - get_many() returns the rows that exist, unordered
"""

from typing import Sequence

from sqlalchemy import delete, insert, select

from task_controller.core.domain_types import Tag, TagId
from task_controller.core.errors import ResourceNotFoundError
from task_controller.infrastructure.database import (
    DatabaseSessionManager, translate_errors,
)
from task_controller.models.tag import TagModel


def _to_tag(row: TagModel) -> Tag:
    return Tag(id=TagId(row.id), name=row.name)


class SqlTagStore:
    """TagStore backed by the `tag` table."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def create(self, tag: Tag) -> None:
        async with self._db.session() as db:
            async with translate_errors("insert tag"):
                await db.execute(insert(TagModel).values(id=tag.id, name=tag.name))
                await db.commit()

    async def get(self, tag_id: TagId) -> Tag:
        async with self._db.session() as db:
            async with translate_errors("select tag"):
                result = await db.execute(
                    select(TagModel).where(TagModel.id == tag_id),
                )
                row = result.scalar_one_or_none()
            if row is None:
                raise ResourceNotFoundError("Tag", tag_id)
            return _to_tag(row)

    async def get_many(self, tag_ids: Sequence[TagId]) -> list[Tag]:
        if not tag_ids:
            return []
        async with self._db.session() as db:
            async with translate_errors("select tags"):
                result = await db.execute(
                    select(TagModel).where(TagModel.id.in_(list(tag_ids))),
                )
                return [_to_tag(row) for row in result.scalars().all()]

    async def list(self, limit: int, offset: int) -> list[Tag]:
        async with self._db.session() as db:
            async with translate_errors("list tags"):
                result = await db.execute(
                    select(TagModel).order_by(TagModel.id).limit(limit).offset(offset),
                )
                return [_to_tag(row) for row in result.scalars().all()]

    async def delete(self, tag_id: TagId) -> None:
        async with self._db.session() as db:
            async with translate_errors("delete tag"):
                await db.execute(
                    delete(TagModel)
                    .where(TagModel.id == tag_id)
                    .execution_options(synchronize_session=False),
                )
                await db.commit()
