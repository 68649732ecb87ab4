"""
どこで: `engine.core` サブパッケージ。
何を: 同次変換行列・原点スタック・ジオメトリバッファを提供。
なぜ: 解釈（runtime）と描画（render）の双方が使う計算の基盤を 1 箇所にまとめるため。
"""
