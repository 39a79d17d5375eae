"""共通フィクスチャ。

- 乱数シード固定
- 小さな Geometry 試料
- 設定（環境変数）の差し替え
"""

from __future__ import annotations

from typing import Callable, Iterator

import numpy as np
import pytest

from common import settings
from engine.core.geometry import Geometry


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def geom_empty() -> Geometry:
    return Geometry.empty(4, "simplex")


@pytest.fixture()
def geom_square_4d() -> Geometry:
    """XW 平面上の正方形（4 頂点 4 辺）。"""
    verts = np.array(
        [
            [-1.0, 0.0, 0.0, -1.0],
            [1.0, 0.0, 0.0, -1.0],
            [1.0, 0.0, 0.0, 1.0],
            [-1.0, 0.0, 0.0, 1.0],
        ]
    )
    return Geometry(4, "hypercube", verts, [(0, 1), (1, 2), (2, 3), (0, 3)])


@pytest.fixture()
def env_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[Callable[..., None]]:
    """`env_settings(NDP_FACE_MAX_COUNT="3")` の形で設定を差し替え、終了時に戻す。"""

    def _apply(**env: str) -> None:
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        settings.reload_from_env()

    yield _apply
    monkeypatch.undo()
    settings.reload_from_env()
