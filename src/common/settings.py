"""
どこで: `common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_int, env_str


@dataclass
class _Settings:
    # 面検出（フレーム予算内に収めるための上限）
    FACE_MAX_CYCLE_LENGTH: int = 4
    FACE_MAX_COUNT: int = 200_000
    COPLANAR_EPS: float = 1e-6

    # 派生値キャッシュ（api.scene）
    DERIVED_CACHE_MAXSIZE: int = 32

    # アニメーション
    MAX_TICK_DELTA: float = 0.1

    # Misc
    USE_NUMBA: bool = True
    LOG_LEVEL: str = "INFO"


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - bool は `env_bool`、int は `env_int`、float は `env_float`、str は `env_str` を使用。
    - 一部は下限丸めを適用。
    """
    # 面検出: 3 未満の周長は面を成さない
    _settings.FACE_MAX_CYCLE_LENGTH = env_int("NDP_FACE_MAX_CYCLE_LENGTH", 4, min_value=3) or 4
    _settings.FACE_MAX_COUNT = env_int("NDP_FACE_MAX_COUNT", 200_000, min_value=0) or 0
    _settings.COPLANAR_EPS = env_float("NDP_COPLANAR_EPS", 1e-6, min_value=0.0)

    _settings.DERIVED_CACHE_MAXSIZE = env_int("NDP_DERIVED_CACHE_MAXSIZE", 32, min_value=0) or 0

    _settings.MAX_TICK_DELTA = env_float("NDP_MAX_TICK_DELTA", 0.1, min_value=0.0)

    _settings.USE_NUMBA = env_bool("NDP_USE_NUMBA", True)
    _settings.LOG_LEVEL = env_str("NDP_LOG_LEVEL", "INFO")


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
