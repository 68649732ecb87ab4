from __future__ import annotations

import imageio.v3 as iio
import numpy as np
import pytest

from engine.export.animation import assemble
from engine.export.image import resolve_image_path, save_image
from engine.export.service import FileExporter

pytestmark = pytest.mark.integration


def _frame(value: int, size: int = 8) -> np.ndarray:
    img = np.zeros((size, size, 3), dtype=np.uint8)
    img[: value % size + 1, :, 0] = 40 * value % 256
    img[:, :, 1] = value
    return img


def test_png_round_trip(tmp_path) -> None:
    img = _frame(3)
    path = save_image(img, tmp_path / "nested" / "out.png")
    assert path.exists()
    np.testing.assert_array_equal(iio.imread(path), img)


def test_missing_extension_gets_default(tmp_path) -> None:
    assert resolve_image_path("shot").suffix == ".png"
    path = save_image(_frame(1), tmp_path / "shot")
    assert path.name == "shot.png" and path.exists()


def test_non_rgb_buffer_is_rejected(tmp_path) -> None:
    with pytest.raises(ValueError):
        save_image(np.zeros((4, 4), dtype=np.uint8), tmp_path / "x.png")


def test_assemble_writes_gif_next_to_frames(tmp_path) -> None:
    frames = [save_image(_frame(i + 1), tmp_path / f"wave{i:03d}.png") for i in range(3)]
    path = assemble("wave", frames, delay_ms=20)
    assert path == tmp_path / "wave.gif"
    assert path.stat().st_size > 0
    assert len(list(iio.imiter(path))) == 3


def test_assemble_uses_only_the_given_frames(tmp_path) -> None:
    # 以前の長い実行の残り（spin002..）と別ベース名 "spin2" のフレームが同じ場所にある
    for i in range(6):
        save_image(_frame(i + 1), tmp_path / f"spin{i:03d}.png")
    save_image(_frame(7), tmp_path / "spin2000.png")
    current = [tmp_path / "spin000.png", tmp_path / "spin001.png"]

    path = assemble("spin", current, directory=tmp_path)
    assert len(list(iio.imiter(path))) == 2


def test_assemble_without_frames_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        assemble("nothing", [], directory=tmp_path)
    with pytest.raises(FileNotFoundError):
        assemble("nothing", [tmp_path / "absent000.png"])


def test_file_exporter_saves_and_assembles(tmp_path) -> None:
    exp = FileExporter(tmp_path / "out")
    frames = []
    for i in range(2):
        name = str(tmp_path / "out" / f"clip{i:03d}.png")
        exp.save(_frame(i + 2), name)
        frames.append(name)
    exp.assemble("clip", frames)
    assert (tmp_path / "out" / "clip.gif").exists()
