from __future__ import annotations

import logging

import pytest

from common import settings
from common.errors import AnimationConfigError
from engine.animation.config import MISSING_FRAMES_MESSAGE, first_pass
from mdl import operations as op


def test_vary_without_frames_is_fatal() -> None:
    ops = (op.Vary("k", 0, 4, 0.0, 1.0), op.Sphere((0, 0, 0), 1.0))
    with pytest.raises(AnimationConfigError) as exc:
        first_pass(ops)
    assert str(exc.value) == MISSING_FRAMES_MESSAGE == "Please specify number of frames!"


def test_no_frames_means_single_frame() -> None:
    cfg = first_pass((op.Push(), op.Sphere((0, 0, 0), 1.0), op.Pop()))
    assert cfg.num_frames == 1
    assert not cfg.is_animation
    assert not cfg.has_vary


def test_frames_without_basename_uses_default_and_notifies(caplog) -> None:
    caplog.set_level(logging.INFO, logger="engine.animation.config")
    cfg = first_pass((op.Frames(4), op.Vary("k", 0, 3, 0.0, 1.0)))
    assert cfg.num_frames == 4
    assert cfg.basename == "image"
    assert 'Basename set to "image" by default...' in caplog.text


def test_default_basename_follows_environment(monkeypatch) -> None:
    monkeypatch.setenv("MDL_DEFAULT_BASENAME", "shot")
    settings.reload_from_env()
    assert first_pass((op.Frames(2), op.Vary("k", 0, 1, 0.0, 1.0))).basename == "shot"


def test_frames_without_vary_warns_and_continues(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="engine.animation.config")
    cfg = first_pass((op.Frames(3), op.Basename("still")))
    assert cfg.num_frames == 3
    assert cfg.basename == "still"
    assert "Generating 3 identical frames..." in caplog.text


def test_last_frames_and_basename_win() -> None:
    ops = (
        op.Frames(3),
        op.Basename("first"),
        op.Frames(8),
        op.Basename("second"),
        op.Vary("k", 0, 7, 0.0, 1.0),
    )
    cfg = first_pass(ops)
    assert (cfg.num_frames, cfg.basename, cfg.has_vary) == (8, "second", True)


def test_frames_zero_with_vary_is_fatal() -> None:
    with pytest.raises(AnimationConfigError):
        first_pass((op.Frames(0), op.Vary("k", 0, 0, 0.0, 1.0)))
