# chip8_tracer/arch/chip8/opcode.py
"""
16bit命令語のフィールド分解。
"""
from dataclasses import dataclass


# @intent:responsibility 1つの命令語を不変に保持し、各ビットフィールドへのアクセサを提供します。
# @intent:rationale レジスタ番号フィールド(x, y)はマスクにより必ず0-15に収まるため、後段での範囲チェックは不要です。
@dataclass(frozen=True)
class Opcode:
    word: int

    @property
    def msb(self) -> int:
        """上位ニブル (命令クラス)。"""
        return self.word & 0xF000

    @property
    def nnn(self) -> int:
        """下位12bit (アドレス/即値)。"""
        return self.word & 0x0FFF

    @property
    def n(self) -> int:
        """下位4bit (スプライトの高さなど)。"""
        return self.word & 0x000F

    @property
    def x(self) -> int:
        """上位バイトの下位ニブル。"""
        return (self.word & 0x0F00) >> 8

    @property
    def y(self) -> int:
        """下位バイトの上位ニブル。"""
        return (self.word & 0x00F0) >> 4

    @property
    def kk(self) -> int:
        """下位8bit (即値)。"""
        return self.word & 0x00FF

    @property
    def hex(self) -> str:
        return f"{self.word:04X}"
