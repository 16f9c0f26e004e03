# chip8_tracer/arch/chip8/state.py
"""
CHIP-8固有の状態定義。
"""
import random
from dataclasses import dataclass, field
from typing import List

from chip8_tracer.core.state import CpuState

# @intent:constant 表示領域とスタック・フォントの寸法。
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SCREEN_PIXEL_COUNT = SCREEN_WIDTH * SCREEN_HEIGHT
STACK_DEPTH = 16
REGISTER_COUNT = 16
KEY_COUNT = 16
PROGRAM_START = 0x200
FONT_GLYPH_SIZE = 5

# @intent:constant 0-Fの16進フォント (1グリフ5バイト)。メモリの0x000から配置されます。
FONT_SPRITES = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

# @intent:responsibility CHIP-8のレジスタ、スタック、タイマー、フレームバッファ、キー状態を保持します。
# @intent:rationale RAMはBus側が所有します。それ以外の可変状態はこの1つの集約にまとめ、各命令ハンドラへ明示的に渡します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8の状態を保持するデータクラス。
    spはスタック上の使用中スロット数 (0-16) を表します。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)  # V0-VF
    i: int = 0x000  # Address Register
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    delay_timer: int = 0
    sound_timer: int = 0
    frame_buffer: bytearray = field(default_factory=lambda: bytearray(SCREEN_PIXEL_COUNT))
    keypad: List[bool] = field(default_factory=lambda: [False] * KEY_COUNT)
    should_redraw: bool = False
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    # @intent:accessor VFはキャリー/ボロー/衝突フラグとして上書きされます。
    @property
    def vf(self) -> int:
        return self.v[0xF]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[0xF] = value & 0xFF

    # @intent:responsibility 可変なリスト類を含めて状態を複製します。履歴保持用。
    def copy(self) -> "Chip8CpuState":
        return Chip8CpuState(
            pc=self.pc,
            sp=self.sp,
            v=list(self.v),
            i=self.i,
            stack=list(self.stack),
            delay_timer=self.delay_timer,
            sound_timer=self.sound_timer,
            frame_buffer=bytearray(self.frame_buffer),
            keypad=list(self.keypad),
            should_redraw=self.should_redraw,
            rng=self.rng,
        )

    def pixel(self, x: int, y: int) -> int:
        return self.frame_buffer[y * SCREEN_WIDTH + x]
