"""
どこで: `common.logging`
何を: カーネル向けの軽量ロギングユーティリティ。
なぜ: 面検出/変換の劣化結果を warning で可視化しつつ、ライブラリ側ではハンドラを勝手に追加しないため。

要点:
- 各モジュールは `logging.getLogger(__name__)` でロガーを取得する。
- アプリ側で設定が無い場合でも、妥当な最小構成を 1 度だけ適用するヘルパーを提供する。
- 既定レベルは `settings.LOG_LEVEL`（環境変数 `NDP_LOG_LEVEL`）。
"""

from __future__ import annotations

import logging

from .settings import get as _get_settings

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = _get_settings().LOG_LEVEL
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return int(level)


def setup_default_logging(level: int | str | None = None) -> bool:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあれば何もしない（False を返す）
    - 上位のランナー/CLI から呼び出す想定
    """
    root = logging.getLogger()
    if root.handlers:
        return False
    logging.basicConfig(level=_resolve_level(level), format=_FORMAT)
    return True


__all__ = ["setup_default_logging"]
