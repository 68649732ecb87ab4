from __future__ import annotations

import pytest

from common.errors import ScriptLoadError
from mdl import operations as op
from mdl.loader import build_operation, load_document, load_script
from mdl.symtab import Constants

DOC = {
    "constants": {
        "shiny": {"red": [0.3, 0.7, 0.9], "green": [0.1, 0.2, 0.3], "blue": [0.0, 0.5, 1.0]},
        "dull": [0.2, 0.4, 0.1],
    },
    "knobs": {"spin": 0},
    "ops": [
        {"op": "frames", "num_frames": 10},
        {"op": "BASENAME", "name": "spin"},
        {"op": "vary", "knob": "spin", "start_frame": 0, "end_frame": 9, "start_val": 0, "end_val": 1},
        {"op": "push"},
        {"op": "move", "d": [250, 250, 0]},
        {"op": "scale", "d": [1, 2, 3], "knob": "spin"},
        {"op": "rotate", "axis": "y", "degrees": 360, "knob": "spin"},
        {"op": "box", "d0": [0, 0, 0], "d1": [1, 1, 1], "constants": "dull"},
        {"op": "sphere", "d": [0, 0, 0], "r": 100, "constants": "shiny"},
        {"op": "torus", "d": [0, 0, 0], "r0": 10, "r1": 50},
        {"op": "line", "p0": [0, 0, 0], "p1": [1, 1, 1]},
        {"op": "pop"},
        {"op": "display"},
        {"op": "save", "filename": "out.png"},
    ],
}


def test_document_builds_every_operation_in_order() -> None:
    ops, table = load_document(DOC)
    assert [o.opcode for o in ops] == [
        "FRAMES", "BASENAME", "VARY", "PUSH", "MOVE", "SCALE", "ROTATE",
        "BOX", "SPHERE", "TORUS", "LINE", "POP", "DISPLAY", "SAVE",
    ]  # fmt: skip
    assert ops[2] == op.Vary("spin", 0, 9, 0.0, 1.0)
    assert ops[4] == op.Move((250.0, 250.0, 0.0))
    assert ops[6] == op.Rotate(1, 360.0, "spin")
    assert ops[8].constants == "shiny"
    assert table.get("spin") == 0.0


def test_constants_accept_mapping_or_uniform_triple() -> None:
    _, table = load_document(DOC)
    assert table.get_constants("dull") == Constants.uniform(0.2, 0.4, 0.1)
    shiny = table.get_constants("shiny")
    assert shiny.diffuse == (0.7, 0.2, 0.5)


def test_numeric_axis_is_accepted() -> None:
    assert build_operation({"op": "rotate", "axis": 2, "degrees": 45}) == op.Rotate(2, 45.0)


@pytest.mark.parametrize(
    "entry, fragment",
    [
        ({"op": "spin"}, "未知の opcode"),
        ({"d": [1, 2, 3]}, "'op'"),
        ({"op": "move"}, "'d'"),
        ({"op": "move", "d": [1, 2]}, "MOVE.d"),
        ({"op": "frames", "num_frames": 2.5}, "FRAMES.num_frames"),
        ({"op": "rotate", "axis": "w", "degrees": 1}, "ROTATE.axis"),
        ({"op": "push", "d": [1, 2, 3]}, "未知のフィールド"),
        ({"op": "sphere", "d": [0, 0, 0], "r": "big"}, "SPHERE.r"),
    ],
)
def test_bad_entries_raise_with_index(entry, fragment: str) -> None:
    with pytest.raises(ScriptLoadError) as exc:
        load_document({"ops": [{"op": "push"}, entry]})
    assert exc.value.index == 1
    assert fragment in str(exc.value)
    assert str(exc.value).startswith("op #1:")


def test_document_without_ops_list_is_rejected() -> None:
    with pytest.raises(ScriptLoadError):
        load_document({"constants": {}})
    with pytest.raises(ScriptLoadError):
        load_document(["not", "a", "mapping"])  # type: ignore[arg-type]


def test_load_script_reads_yaml_file(tmp_path) -> None:
    path = tmp_path / "scene.yaml"
    path.write_text(
        "knobs: {k: 2}\nops:\n  - {op: move, d: [1, 0, 0], knob: k}\n  - {op: display}\n",
        encoding="utf-8",
    )
    ops, table = load_script(path)
    assert ops == (op.Move((1.0, 0.0, 0.0), "k"), op.Display())
    assert table.get("k") == 2.0


def test_load_script_reports_missing_and_malformed_files(tmp_path) -> None:
    with pytest.raises(ScriptLoadError):
        load_script(tmp_path / "missing.yaml")
    bad = tmp_path / "bad.yaml"
    bad.write_text("ops: [ {op: push\n", encoding="utf-8")
    with pytest.raises(ScriptLoadError):
        load_script(bad)


@pytest.mark.smoke
@pytest.mark.parametrize("name", ["spin.yaml", "robot.yaml"])
def test_shipped_scenes_load(name: str) -> None:
    from pathlib import Path

    root = Path(__file__).resolve().parents[2]
    ops, _ = load_script(root / "scenes" / name)
    assert ops and all(o.opcode for o in ops)
