"""Schema Base — camelCase aliasing shared by every API model."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes by camelCase alias, accepts both spellings on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IdResponse(CamelModel):
    id: str


class SuccessResponse(CamelModel):
    success: bool
