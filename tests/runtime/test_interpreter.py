from __future__ import annotations

import math

import numpy as np
import pytest

from common.errors import StackUnderflowError, UnknownSymbolError
from engine.core.matrix import make_rot_y, make_scale, make_translate
from engine.render.types import RenderContext
from engine.runtime.frame import FrameState
from engine.runtime.interpreter import Interpreter
from mdl import operations as op
from mdl.symtab import WHITE, Constants


@pytest.fixture()
def frame() -> FrameState:
    return FrameState.new(0, 16)


@pytest.fixture()
def interp(symbols, recorder, exporter) -> Interpreter:
    return Interpreter(symbols, recorder, exporter, step=6)


def test_move_replaces_top_with_translation(interp, frame) -> None:
    interp.run((op.Move((5.0, 0.0, 0.0)),), frame)
    assert frame.stack.depth == 1
    np.testing.assert_allclose(frame.stack.peek(), make_translate(5, 0, 0))


def test_move_then_scale_composes_on_the_right(interp, frame) -> None:
    interp.run((op.Move((5.0, 0.0, 0.0)), op.Scale((2.0, 2.0, 2.0))), frame)
    np.testing.assert_allclose(frame.stack.peek(), make_translate(5, 0, 0) @ make_scale(2, 2, 2))


def test_knob_scales_each_component(interp, symbols, frame) -> None:
    symbols.set("k", 0.5)
    interp.run((op.Move((4.0, -2.0, 8.0), "k"),), frame)
    np.testing.assert_allclose(frame.stack.peek(), make_translate(2, -1, 4))


def test_zero_knob_gives_zero_displacement(interp, symbols, frame) -> None:
    symbols.set("k", 0.0)
    interp.run((op.Move((10.0, 10.0, 10.0), "k"),), frame)
    np.testing.assert_allclose(frame.stack.peek(), np.eye(4))


def test_rotate_knob_multiplies_radians(interp, symbols, frame) -> None:
    symbols.set("spin", 90.0)
    interp.run((op.Rotate(1, 1.0, "spin"),), frame)
    np.testing.assert_allclose(frame.stack.peek(), make_rot_y(math.pi / 2), atol=1e-12)


def test_unknown_knob_raises(interp, frame) -> None:
    with pytest.raises(UnknownSymbolError):
        interp.run((op.Move((1.0, 1.0, 1.0), "missing"),), frame)


def test_push_pop_leaves_parent_untouched(interp, frame) -> None:
    interp.run((op.Move((1.0, 0.0, 0.0)), op.Push(), op.Scale((3.0, 3.0, 3.0)), op.Pop()), frame)
    assert frame.stack.depth == 1
    np.testing.assert_allclose(frame.stack.peek(), make_translate(1, 0, 0))


def test_pop_underflow_raises(interp, frame) -> None:
    with pytest.raises(StackUnderflowError):
        interp.run((op.Push(), op.Pop(), op.Pop()), frame)
    assert frame.stack.depth == 1


def test_solid_is_transformed_by_top_and_buffer_cleared(interp, recorder, frame) -> None:
    interp.run((op.Move((10.0, 0.0, 0.0)), op.Box((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))), frame)
    assert [c.kind for c in recorder.calls] == ["solid"]
    pts = recorder.calls[0].points
    assert pts.shape == (4, 36)
    assert pts[0].min() == pytest.approx(10.0)
    assert pts[0].max() == pytest.approx(11.0)
    assert frame.polygons.is_empty


def test_default_constants_do_not_leak_between_primitives(interp, symbols, recorder, frame) -> None:
    shiny = Constants.uniform(0.3, 0.9, 0.1)
    symbols.set_constants("shiny", shiny)
    interp.run(
        (
            op.Sphere((0.0, 0.0, 0.0), 1.0, constants="shiny"),
            op.Sphere((0.0, 0.0, 0.0), 1.0),
        ),
        frame,
    )
    assert recorder.calls[0].args["constants"] is shiny
    assert recorder.calls[1].args["constants"] is WHITE


def test_context_values_reach_the_rasterizer(symbols, recorder, exporter, frame) -> None:
    ctx = RenderContext(view=(0.0, 0.0, -1.0), ambient=(1, 2, 3), line_color=(9, 8, 7))
    interp = Interpreter(symbols, recorder, exporter, ctx, step=6)
    interp.run((op.Torus((0, 0, 0), 1.0, 3.0), op.Line((0, 0, 0), (1, 1, 1))), frame)
    solid, line = recorder.calls
    assert solid.args["view"] == (0.0, 0.0, -1.0)
    assert solid.args["ambient"] == (1, 2, 3)
    assert line.args["color"] == (9, 8, 7)


def test_unknown_constants_name_raises(interp, frame) -> None:
    with pytest.raises(UnknownSymbolError) as exc:
        interp.run((op.Sphere((0.0, 0.0, 0.0), 1.0, constants="nope"),), frame)
    assert exc.value.kind == "constants"


def test_line_endpoints_are_transformed(interp, recorder, frame) -> None:
    interp.run((op.Scale((2.0, 2.0, 2.0)), op.Line((1.0, 0.0, 0.0), (0.0, 1.0, 0.0))), frame)
    np.testing.assert_allclose(recorder.calls[0].points[:3].T, [[2, 0, 0], [0, 2, 0]])
    assert frame.edges.is_empty


def test_save_and_display_follow_operation_order(interp, recorder, exporter, frame) -> None:
    ops = (
        op.Save("before.png"),
        op.Sphere((0.0, 0.0, 0.0), 1.0),
        op.Display(),
        op.Save("after.png"),
    )
    interp.run(ops, frame)
    assert exporter.events == [("save", "before.png"), ("show", None), ("save", "after.png")]
    assert len(recorder.calls) == 1


def test_pass_operations_are_noops(interp, recorder, exporter, frame) -> None:
    interp.run((op.Frames(3), op.Basename("b"), op.Vary("k", 0, 2, 0.0, 1.0)), frame)
    assert recorder.calls == [] and exporter.events == []
    np.testing.assert_array_equal(frame.stack.peek(), np.eye(4))


def test_unknown_operation_type_raises(interp, frame) -> None:
    with pytest.raises(TypeError):
        interp.execute(object(), frame)  # type: ignore[arg-type]
