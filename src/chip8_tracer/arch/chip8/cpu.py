# chip8_tracer/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。
"""
import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from chip8_tracer.common.errors import Chip8Fault
from chip8_tracer.common.types import RegisterLayoutInfo, RegisterInfo
from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.snapshot import Operation, Snapshot
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.opcode import Opcode
from chip8_tracer.arch.chip8.state import Chip8CpuState, FONT_SPRITES, KEY_COUNT
from chip8_tracer.arch.chip8.instructions import decode_opcode, execute_instruction
from chip8_tracer.arch.chip8 import disassembler

T = TypeVar("T")

# @intent:responsibility CHIP-8の具体的なエミュレーションロジック（フェッチ、デコード、実行、タイマー、画面の書き出し）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8仮想マシンをエミュレートするクラス。
    外部のループが step() をN回、tick_timers() を1回、export_frame() を必要に応じて呼び出します。
    """
    # @intent:pre-condition busには0x000-0xFFFの4KBがマップされている必要があります。
    def __init__(self, bus: Bus, rng: Optional[random.Random] = None):
        self._rng = rng if rng is not None else random.Random()
        super().__init__(bus)
        self.load_font()

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState(rng=self._rng)

    # @intent:responsibility 状態を初期化し、フォントを再配置します。ROM領域のメモリはそのまま残ります。
    def reset(self) -> None:
        super().reset()
        self.load_font()

    # @intent:responsibility 16進フォントをメモリの0x000から配置します。
    def load_font(self) -> None:
        for offset, data in enumerate(FONT_SPRITES):
            self._bus.load(offset, data)

    # @intent:responsibility PCとPC+1の2バイトをビッグエンディアンで読み出し、PCを2進めます。
    def _fetch(self) -> Opcode:
        pc = self._state.pc
        word = (self._bus.read(pc) << 8) | self._bus.read(pc + 1)
        self._state.pc = (pc + 2) & 0xFFFF
        return Opcode(word)

    def _decode(self, opcode: Opcode) -> Operation:
        return decode_opcode(opcode)

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._bus)

    # @intent:responsibility 1命令を実行します。フォールト時はPCを当該命令の先頭へ戻し、アドレスを付与して再送出します。
    def step(self) -> Snapshot:
        initial_pc = self._state.pc
        try:
            return super().step()
        except Chip8Fault as fault:
            self._state.pc = initial_pc
            fault.pc = initial_pc
            raise

    # @intent:rationale レジスタ配列やフレームバッファを呼び出し側と共有しないよう、複製してから取り込みます。
    def restore_state(self, state: Chip8CpuState, cycle_count: Optional[int] = None) -> None:
        super().restore_state(state.copy(), cycle_count)

    # @intent:responsibility 遅延タイマーとサウンドタイマーをそれぞれ1減らします (0未満にはならない)。
    def tick_timers(self) -> None:
        state = self._state
        if state.delay_timer > 0:
            state.delay_timer -= 1
        if state.sound_timer > 0:
            state.sound_timer -= 1

    # @intent:responsibility 再描画フラグが立っている場合のみ、フレームバッファを呼び出し側のピクセル表現へ変換して返します。
    # @intent:post-condition 変換した場合は再描画フラグをクリアします。フレームバッファ自体は変更しません。
    def export_frame(self, to_pixel: Callable[[int], T]) -> Optional[List[T]]:
        state = self._state
        if not state.should_redraw:
            return None
        pixels = [to_pixel(cell) for cell in state.frame_buffer]
        state.should_redraw = False
        return pixels

    # @intent:responsibility 外部の入力協調者からのキー状態をキーパッドへ反映します。
    def set_key_states(self, states: Sequence[bool]) -> None:
        if len(states) != KEY_COUNT:
            raise ValueError(f"Expected {KEY_COUNT} key states, got {len(states)}.")
        self._state.keypad[:] = [bool(s) for s in states]

    def set_key(self, key: int, pressed: bool) -> None:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"Key index {key} is outside 0x0-0xF.")
        self._state.keypad[key] = pressed

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{index:X}": value for index, value in enumerate(s.v)}
        registers.update({
            "I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer
        })
        return registers

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{index:X}", 8) for index in range(16)]),
            RegisterLayoutInfo("Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    # @intent:responsibility 現在のコールスタックの内容（底から順）を返します。
    def get_call_stack(self) -> List[int]:
        return list(self._state.stack[:self._state.sp])

    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        return disassembler.disassemble(self._bus, start_addr, length)
