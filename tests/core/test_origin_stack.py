from __future__ import annotations

import numpy as np
import pytest

from common.errors import StackUnderflowError
from engine.core.matrix import make_scale, make_translate
from engine.core.stack import OriginStack


def test_new_stack_holds_single_identity() -> None:
    st = OriginStack()
    assert st.depth == 1
    np.testing.assert_array_equal(st.peek(), np.eye(4))


def test_push_duplicates_top_as_independent_copy() -> None:
    st = OriginStack()
    st.transform_top(make_translate(1, 2, 3))
    parent = st.peek().copy()
    st.push()
    assert st.depth == 2
    np.testing.assert_array_equal(st.peek(), parent)

    st.transform_top(make_scale(2, 2, 2))
    assert not np.array_equal(st.peek(), parent)
    st.pop()
    np.testing.assert_array_equal(st.peek(), parent)


def test_transform_top_replaces_in_place_without_pushing() -> None:
    st = OriginStack()
    st.transform_top(make_translate(5, 0, 0))
    st.transform_top(make_scale(2, 2, 2))
    assert st.depth == 1
    np.testing.assert_allclose(st.peek(), make_translate(5, 0, 0) @ make_scale(2, 2, 2))


def test_pop_on_base_frame_raises_and_keeps_identity() -> None:
    st = OriginStack()
    with pytest.raises(StackUnderflowError):
        st.pop()
    assert st.depth == 1
    np.testing.assert_array_equal(st.peek(), np.eye(4))


@pytest.mark.parametrize(
    "sequence",
    ["", "P", "PP", "Pp", "PPpP", "PpPpPp", "PPPppp", "PPPpPp"],
)
def test_depth_is_one_plus_push_minus_pop(sequence: str) -> None:
    st = OriginStack()
    for ch in sequence:
        if ch == "P":
            st.push()
        else:
            st.pop()
        assert st.depth >= 1
    assert st.depth == 1 + sequence.count("P") - sequence.count("p")


def test_reset_restores_single_identity() -> None:
    st = OriginStack()
    st.push()
    st.transform_top(make_translate(1, 1, 1))
    st.reset()
    assert len(st) == 1
    np.testing.assert_array_equal(st.peek(), np.eye(4))
