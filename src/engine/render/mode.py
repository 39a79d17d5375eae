"""
どこで: `engine.render.mode`
何を: 種別・次元・面表示フラグとジオメトリから描画モード（polytope / raymarch / none）を決める。
なぜ: 描画前の判断を副作用のない関数に閉じ込め、基本表を差し替えても上書き規則を保つため。
"""

from __future__ import annotations

from typing import Callable

from engine.core.geometry import Geometry

from .capabilities import RenderMode, base_render_mode

RenderModeLookup = Callable[[str, int, bool], RenderMode]


def determine_render_mode(
    geometry: Geometry | None,
    object_type: str,
    dimension: int,
    faces_visible: bool,
    lookup: RenderModeLookup = base_render_mode,
) -> RenderMode:
    """描画モードを決定する（純関数）。

    基本モードは `lookup` に委ね、上書きは 1 つだけ:
    基本が "polytope" でジオメトリに頂点が無い（または None）なら "none"。
    """
    mode = lookup(object_type, dimension, faces_visible)
    if mode == "polytope" and (geometry is None or geometry.is_empty):
        return "none"
    return mode


__all__ = ["determine_render_mode", "RenderModeLookup"]
