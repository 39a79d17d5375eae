"""
どこで: `engine.core` の簡易フレームドライバ。
何を: `Tickable` の列を固定順序で呼び出す FrameClock（単調時計での dt 測定）。
なぜ: 外部ループから呼び出すだけで複数のアニメーション入力の更新順を統一するため。
"""

from __future__ import annotations

import time
from typing import Callable, Sequence

from .tickable import Tickable


class FrameClock:
    """登録された Tickable を固定順序で実行するだけの極小クラス。

    `now` は単調時計（既定 `time.perf_counter`）。テストでは差し替え可能。
    """

    def __init__(
        self,
        tickables: Sequence[Tickable] = (),
        now: Callable[[], float] = time.perf_counter,
    ):
        self._tickables: list[Tickable] = list(tickables)
        self._now = now
        self._last_time = now()
        self.frame_count = 0

    def add(self, tickable: Tickable) -> None:
        """末尾に追加（実行順は登録順）。"""
        self._tickables.append(tickable)

    @property
    def tickables(self) -> tuple[Tickable, ...]:
        return tuple(self._tickables)

    def tick(self, dt: float | None = None) -> float:
        """全 Tickable を進め、使用した dt を返す。

        `dt` 省略時は前回呼び出しからの経過時間を測る。
        """
        now = self._now()
        if dt is None:
            dt = now - self._last_time
        self._last_time = now

        for t in self._tickables:
            t.tick(dt)
        self.frame_count += 1
        return dt
