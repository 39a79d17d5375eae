"""
共通レジストリ基底クラス

生成器（shapes）を種別タグで引くための名前→関数の対応表。
"clifford-torus" / "clifford_torus" / "CliffordTorus" は同じキーに正規化される。
"""

import re
from typing import Any, Callable, Iterator


class BaseRegistry:
    """名前正規化つきのレジストリ。

    - 文字列キーは正規化されます（ハイフン→アンダースコア、キャメル→スネーク、小文字化）。
    - デコレータは名前省略可。省略時は関数名から自動推論します。
    - 同じキーへ別オブジェクトを登録しようとすると ValueError。
    """

    def __init__(self) -> None:
        self._registry: dict[str, Any] = {}

    # === 内部ユーティリティ ===
    @staticmethod
    def _camel_to_snake(name: str) -> str:
        s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
        s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
        return s2.lower()

    @classmethod
    def normalize_key(cls, name: str) -> str:
        """レジストリキーの正規化（例: "Cross-Polytope" -> "cross_polytope"）。"""
        if not isinstance(name, str):
            raise TypeError(f"レジストリキーは str である必要があります: got {type(name)!r}")
        if not name:
            raise ValueError("レジストリキーは空であってはなりません")
        name = name.replace("-", "_")
        if any(c.isupper() for c in name):
            return re.sub(r"_+", "_", cls._camel_to_snake(name))
        return name.lower()

    def register(self, name: str | None = None) -> Callable[[Any], Any]:
        """関数をレジストリに登録するデコレータ。"""

        def decorator(obj: Any) -> Any:
            key = self.normalize_key(name) if name else self.normalize_key(obj.__name__)
            if key in self._registry and self._registry[key] is not obj:
                raise ValueError(f"'{key}' は既に登録されています")
            self._registry[key] = obj
            return obj

        return decorator

    def get(self, name: str) -> Any:
        """登録された関数を取得（未登録は KeyError）。"""
        key = self.normalize_key(name)
        if key not in self._registry:
            raise KeyError(f"'{name}' は登録されていません")
        return self._registry[key]

    def list_all(self) -> list[str]:
        """登録されているすべての名前を取得（未ソート）。"""
        return list(self._registry.keys())

    def is_registered(self, name: str) -> bool:
        return self.normalize_key(name) in self._registry

    def unregister(self, name: str) -> None:
        """レジストリから削除（名前が存在しない場合は無視）。"""
        self._registry.pop(self.normalize_key(name), None)

    def clear(self) -> None:
        self._registry.clear()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and bool(name) and self.is_registered(name)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._registry))

    def __len__(self) -> int:
        return len(self._registry)

    @property
    def registry(self) -> dict[str, Any]:
        """レジストリのコピー（読み取り専用アクセス）"""
        return self._registry.copy()
