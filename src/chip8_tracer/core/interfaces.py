# chip8_tracer/core/interfaces.py
"""
表示・入力の外部協調者とのインターフェース。

コアは特定のウィンドウシステムや入力ライブラリに依存せず、
「64x32の2値ビットマップを受け取る」「16キーの押下状態を返す」という
二つの狭い能力だけを外部に要求します。
"""
from typing import Any, List, Protocol, Sequence


# @intent:responsibility リファレンスのピクセル表現 (32bit RGBA) を返します。
def reference_pixel(cell: int) -> int:
    """点灯セルは不透明な白 (0xFFFFFFFF)、消灯セルは不透明な黒 (0x000000FF)。"""
    return ((0xFFFFFF00 * cell) | 0x000000FF) & 0xFFFFFFFF


class FrameSink(Protocol):
    """フレームバッファの書き出し先。"""

    def encode_pixel(self, cell: int) -> Any:
        """0/1のセルを書き出し先のピクセル表現に変換する。"""

    def present(self, pixels: List[Any]) -> None:
        """行優先で並んだ 64*32 個のピクセルを表示する。"""


class KeySource(Protocol):
    """16キーの入力状態の供給元。"""

    def key_states(self) -> Sequence[bool]:
        """キー 0x0-0xF の現在の押下状態を返す。"""
