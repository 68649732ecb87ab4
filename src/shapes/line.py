from __future__ import annotations

from typing import Any

from common.types import Vec3
from engine.core.geometry import GeometryBuffer

from .registry import shape, target_buffer


@shape
def line(
    *,
    p0: Vec3 = (0.0, 0.0, 0.0),
    p1: Vec3 = (1.0, 0.0, 0.0),
    into: GeometryBuffer | None = None,
    **params: Any,
) -> GeometryBuffer:
    """2 端点の線分 1 本を生成します。"""
    buf = target_buffer(into, "edges")
    return buf.add_edge(p0, p1)
