"""
どこで: `engine.render` サブパッケージ。
何を: オブジェクト種別の能力表（静的）と、描画モード（polytope / raymarch-* / none）の判定。
なぜ: 外部の描画層が「何をどう描くか」を純関数だけで決められるようにするため。
"""
