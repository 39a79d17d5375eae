"""
どこで: `engine.core` サブパッケージ。
何を: Geometry・行列/回転・変換パイプライン・面検出・断面・フレーム駆動（Tickable/FrameClock）を提供。
なぜ: N 次元幾何の計算基盤を構成し、上位層（api.scene / 外部描画層）から再利用可能にするため。
"""
