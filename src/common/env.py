"""
どこで: `common.env`
何を: `NDP_*` 環境変数の型付きパースヘルパ（int/float/bool/str）。
なぜ: 設定値の読み取りを `common.settings` に集約し、不正値は既定値へフォールバックさせるため。

規約:
- 未設定や空文字、パース不能な値は既定値を返す（例外にしない）。
- `min_value` 指定時は下限へ丸める。
"""

from __future__ import annotations

import math
import os
from typing import Optional

_TRUE = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSE = frozenset({"0", "false", "f", "no", "n", "off"})


def _raw(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def env_int(
    name: str, default: Optional[int] = None, *, min_value: Optional[int] = None
) -> Optional[int]:
    """整数環境変数を取得する。

    Parameters
    ----------
    name : str
        環境変数名。
    default : Optional[int]
        未設定/不正時の値。
    min_value : Optional[int]
        下限。下回った値は下限に丸める。
    """
    raw = _raw(name)
    if raw is None:
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    return max(val, min_value) if min_value is not None else val


def env_float(name: str, default: float, *, min_value: Optional[float] = None) -> float:
    """浮動小数環境変数を取得する（`nan` は不正値扱い）。"""
    raw = _raw(name)
    if raw is None:
        return float(default)
    try:
        val = float(raw)
    except ValueError:
        return float(default)
    if math.isnan(val):
        return float(default)
    return max(val, float(min_value)) if min_value is not None else val


def env_bool(name: str, default: bool = False) -> bool:
    """真偽環境変数を取得する（0/1, true/false, yes/no, on/off）。"""
    raw = _raw(name)
    if raw is None:
        return bool(default)
    s = raw.lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    try:
        return int(s) != 0
    except ValueError:
        return bool(default)


def env_str(name: str, default: str) -> str:
    raw = _raw(name)
    return default if raw is None else raw


__all__ = ["env_int", "env_float", "env_bool", "env_str"]
