"""
どこで: `engine.core.errors`
何を: カーネル共通の例外型。
なぜ: 呼び出し側へ伝播させる「設定不正」と、内部で握りつぶして空結果へ劣化させる
      入力欠落を区別するため（後者は例外ではなく warning ログで表現する）。
"""

from __future__ import annotations


class DomainError(ValueError):
    """生成/変換の設定不正（次元不足・不正な平面名・次元不一致など）。

    単一呼び出しに対して致命的。呼び出し側で修正メッセージを提示する想定。
    """


__all__ = ["DomainError"]
