"""Parameter Rules — pure checks and defaults applied to task/tag requests.

Invariants:
    - tags_to_link() is the only place the empty-placeholder rule lives:
      [] or a list whose first element is "" links nothing, trailing items ignored
    - resolve_limit() maps 0 to the per-resource default, never to "unlimited"
    - check_title_present() is called at the HTTP boundary, not by the orchestrator

Design Decisions:
    - Placeholder rule kept for callers that send [""] instead of []; only the
      first element is inspected, so ["", "t1"] still links nothing
"""

from typing import Sequence

from task_controller.core.domain_types import TagId
from task_controller.core.errors import ValidationFailureError

DEFAULT_TASK_LIMIT = 10
DEFAULT_TAG_LIMIT = 100


def tags_to_link(tag_ids: Sequence[str] | None) -> list[TagId]:
    """Return the tag ids to associate, in input order."""
    if not tag_ids or tag_ids[0] == "":
        return []
    return [TagId(tag_id) for tag_id in tag_ids]


def resolve_limit(limit: int, default: int) -> int:
    """Apply the default page size when the caller sent 0."""
    return default if limit == 0 else limit


def check_title_present(title: str | None) -> str:
    """Raise ValidationFailureError for a missing or blank title."""
    if title is None or not title.strip():
        raise ValidationFailureError("title is required", field="title")
    return title
