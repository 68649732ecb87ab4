"""
どこで: `engine.render` サブパッケージ。
何を: 描画パラメータ（RenderContext）・画像/深度バッファ・ラスタライザ契約と既定実装。
なぜ: 解釈（runtime）と描画の責務を分離し、ラスタライザを差し替え可能にするため。
"""
