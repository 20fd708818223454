"""Parameter Rules — placeholder tag lists, default limits, title check."""

import pytest

from task_controller.core.enforce_params import (
    DEFAULT_TAG_LIMIT, DEFAULT_TASK_LIMIT,
    check_title_present, resolve_limit, tags_to_link,
)
from task_controller.core.errors import ValidationFailureError


@pytest.mark.parametrize("tag_ids", [None, [], [""], ["", "t1"], ("", "t1", "t2")])
def test_placeholder_lists_link_nothing(tag_ids):
    assert tags_to_link(tag_ids) == []


def test_real_tag_list_is_kept_in_order():
    assert tags_to_link(["t2", "t1"]) == ["t2", "t1"]


def test_only_first_element_is_inspected():
    # An empty string after a real id is passed through untouched
    assert tags_to_link(["t1", ""]) == ["t1", ""]


def test_zero_limit_uses_default():
    assert resolve_limit(0, DEFAULT_TASK_LIMIT) == 10
    assert resolve_limit(0, DEFAULT_TAG_LIMIT) == 100


def test_nonzero_limit_is_kept():
    assert resolve_limit(2, DEFAULT_TASK_LIMIT) == 2


@pytest.mark.parametrize("title", [None, "", "   "])
def test_blank_title_is_rejected(title):
    with pytest.raises(ValidationFailureError) as exc_info:
        check_title_present(title)
    assert exc_info.value.field == "title"
    assert exc_info.value.http_status == 400


def test_title_is_returned_unchanged():
    assert check_title_present(" Write report ") == " Write report "
