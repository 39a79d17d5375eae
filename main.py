from __future__ import annotations

import logging

from api import Scene, SceneState, SliceBinding, get_polytope_properties
from common.logging import setup_default_logging
from engine.core.cross_section import get_w_range
from engine.core.frame_clock import FrameClock
from engine.core.slice_animator import SliceAnimator
from util.utils import scene_defaults, slice_animation_defaults

logger = logging.getLogger("main")

FRAMES = 8
FRAME_DT = 1 / 30


def main() -> None:
    """構成の既定シーンを作り、断面スライスを数フレーム進めて要約を出力する。"""
    setup_default_logging()
    scene = Scene(SceneState(**scene_defaults()))

    g = scene.geometry()
    lo, hi = get_w_range(g)
    animator = SliceAnimator(**{**slice_animation_defaults(), "enabled": True})
    animator.set_range(lo, hi)
    clock = FrameClock([SliceBinding(scene, animator)])

    props = get_polytope_properties(g.with_faces(scene.faces()))
    logger.info("%s: %s", props["name"], props)
    logger.info("render mode: %s", scene.render_mode())
    for _ in range(FRAMES):
        clock.tick(FRAME_DT)
        section = scene.cross_section()
        logger.info(
            "w=%.3f points=%d edges=%d",
            scene.state.slice_w,
            section.points.shape[0],
            section.edges.shape[0],
        )


if __name__ == "__main__":
    main()
