"""Tests for message window selection."""

import pytest
from pydantic import ValidationError

from chatgpt_share_mcp.models import WindowSpec
from chatgpt_share_mcp.parser import message_chain
from chatgpt_share_mcp.window import select_window

from conftest import make_record


@pytest.fixture
def chain():
    return message_chain(make_record(10))


def ids(window) -> list[int]:
    return [int(node.id[1:]) for node in window.messages]


@pytest.mark.parametrize(
    ("start", "end"),
    [(2, 5), (0, 10), (8, 20), (5, 2), (12, 15), (0, 0)],
)
def test_start_and_end_is_half_open_slice(chain, start, end) -> None:
    window = select_window(chain, WindowSpec(start_index=start, end_index=end))
    assert ids(window) == list(range(10))[start:end]


def test_skip_and_max(chain) -> None:
    window = select_window(chain, WindowSpec(skip_messages=2, max_messages=3))

    assert ids(window) == [2, 3, 4]
    assert window.skipped == 2
    assert window.truncated == 5
    assert window.is_elided


def test_start_with_max(chain) -> None:
    window = select_window(chain, WindowSpec(start_index=3, max_messages=2, skip_messages=7))

    assert ids(window) == [3, 4]
    assert window.skipped == 3
    assert window.truncated == 5


def test_start_index_alone_runs_to_end(chain) -> None:
    window = select_window(chain, WindowSpec(start_index=6))
    assert ids(window) == [6, 7, 8, 9]
    assert window.truncated == 0


def test_end_index_alone_is_ignored(chain) -> None:
    """Without start_index, end_index falls through to skip/max handling."""
    assert ids(select_window(chain, WindowSpec(end_index=3))) == list(range(10))

    window = select_window(chain, WindowSpec(end_index=3, skip_messages=1, max_messages=4))
    assert ids(window) == [1, 2, 3, 4]


def test_no_options_selects_everything(chain) -> None:
    window = select_window(chain, WindowSpec())
    assert ids(window) == list(range(10))
    assert not window.is_elided


def test_out_of_range_start_is_empty(chain) -> None:
    window = select_window(chain, WindowSpec(start_index=20))

    assert window.messages == []
    assert window.skipped == 20
    assert window.truncated == 0


@pytest.mark.parametrize(
    "kwargs",
    [{"max_messages": 0}, {"max_messages": 1001}, {"skip_messages": -1}, {"start_index": -2}],
)
def test_invalid_specs_rejected(kwargs) -> None:
    with pytest.raises(ValidationError):
        WindowSpec(**kwargs)
