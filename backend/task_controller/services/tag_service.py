"""Tag Service — pass-through CRUD on the tag store.

Invariants:
    - No transaction scope: each call is a single-row operation
    - delete_tag() is idempotent (unknown ids succeed); task delete is not
    - list_tags(limit=0) uses the default page size (100)
"""

import logging

from task_controller.core.domain_types import Tag, TagId
from task_controller.core.enforce_params import DEFAULT_TAG_LIMIT, resolve_limit
from task_controller.core.identifiers import new_time_ordered_id
from task_controller.core.repository_protocols import TagStore

logger = logging.getLogger(__name__)


class TagService:
    """Tag use cases."""

    def __init__(self, tags: TagStore, default_limit: int = DEFAULT_TAG_LIMIT):
        self._tags = tags
        self._default_limit = default_limit

    async def create_tag(self, name: str) -> TagId:
        tag = Tag(id=TagId(new_time_ordered_id()), name=name)
        await self._tags.create(tag)
        logger.info("Tag created", extra={"tag_id": tag.id})
        return tag.id

    async def get_tag(self, tag_id: str) -> Tag:
        return await self._tags.get(TagId(tag_id))

    async def list_tags(self, limit: int = 0, offset: int = 0) -> list[Tag]:
        return await self._tags.list(
            resolve_limit(limit, self._default_limit), offset,
        )

    async def delete_tag(self, tag_id: str) -> bool:
        await self._tags.delete(TagId(tag_id))
        logger.info("Tag deleted", extra={"tag_id": tag_id})
        return True
