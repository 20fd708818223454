"""Tag Schemas — request and response shapes for /api/v1/tags."""

from pydantic import Field

from task_controller.core.domain_types import Tag
from task_controller.schemas.base import CamelModel


class TagCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)


class TagResponse(CamelModel):
    id: str
    name: str

    @classmethod
    def from_tag(cls, tag: Tag) -> "TagResponse":
        return cls(id=tag.id, name=tag.name)


class TagEnvelope(CamelModel):
    tag: TagResponse


class TagListResponse(CamelModel):
    tags: list[TagResponse]
