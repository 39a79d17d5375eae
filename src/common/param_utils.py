"""
どこで: `common` のパラメータ正規化ユーティリティ。
何を: キャッシュ鍵向けにパラメータをハッシュ可能な値へ正規化する。
なぜ: `api.scene` の派生値キャッシュが、決定的かつ比較容易な鍵で入力変化を検出できるようにするため。
"""

from __future__ import annotations

import hashlib
from typing import Any, Mapping, Tuple

import numpy as np


def _key_for_sorting_object_key(k: object) -> str:
    return f"{type(k).__name__}:{repr(k)}"


def make_hashable_param(obj: object) -> object:
    """キャッシュ鍵生成のためにハッシュ可能へ正規化する。

    - dict: キーを安定ソートし、(k, v) のタプル列に再帰変換。
    - list/tuple: 再帰的にタプル化。
    - numpy.ndarray: dtype=object は tolist() で列挙。それ以外は ("nd", shape, dtype, blake2b-128) へ。
    - set/frozenset: 要素を安定ソートしてタプル化。
    - numpy scalar: Python 組込みへ。
    - それ以外: ハッシュ可能ならそのまま、不可なら ("obj", qualname, id) にフォールバック。
    """
    if isinstance(obj, dict):
        items = sorted(obj.items(), key=lambda kv: _key_for_sorting_object_key(kv[0]))
        return tuple((k, make_hashable_param(v)) for k, v in items)

    if isinstance(obj, (list, tuple)):
        return tuple(make_hashable_param(x) for x in obj)

    if isinstance(obj, np.generic):
        return obj.item()

    if isinstance(obj, np.ndarray):
        if obj.dtype.kind == "O":
            return ("nd_obj", tuple(make_hashable_param(x) for x in obj.tolist()))
        arr = np.ascontiguousarray(obj)
        h = hashlib.blake2b(digest_size=16)
        h.update(arr.view(np.uint8).tobytes())
        return ("nd", arr.shape, str(arr.dtype), h.digest())

    if isinstance(obj, (set, frozenset)):
        return (
            "set",
            tuple(sorted((make_hashable_param(x) for x in obj), key=_key_for_sorting_object_key)),
        )

    try:
        hash(obj)  # type: ignore[arg-type]
        return obj
    except TypeError:
        cls_name = getattr(obj, "__class__", type(obj)).__qualname__
        return ("obj", cls_name, id(obj))


def params_to_tuple(params: Mapping[str, Any]) -> Tuple[Tuple[str, object], ...]:
    """パラメータ辞書を「順序安定・ハッシュ可能」なタプル列に正規化する。"""
    items = sorted(params.items(), key=lambda kv: _key_for_sorting_object_key(kv[0]))
    return tuple((k, make_hashable_param(v)) for k, v in items)


def ordered_items_to_tuple(params: Mapping[str, Any]) -> Tuple[Tuple[str, object], ...]:
    """挿入順を保ったままタプル列に正規化する（シアー/回転のように順序が意味を持つ入力用）。"""
    return tuple((k, make_hashable_param(v)) for k, v in params.items())


__all__ = [
    "make_hashable_param",
    "params_to_tuple",
    "ordered_items_to_tuple",
]
