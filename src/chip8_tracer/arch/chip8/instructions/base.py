# chip8_tracer/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
from chip8_tracer.common.errors import MemoryAccessFault, StackOverflow, StackUnderflow
from chip8_tracer.transport.bus import MEMORY_SIZE
from chip8_tracer.arch.chip8.state import Chip8CpuState, STACK_DEPTH

# @intent:utility_function 次の命令を読み飛ばします (PCを2進める)。
def skip_next(state: Chip8CpuState) -> None:
    state.pc = (state.pc + 2) & 0xFFFF

# @intent:utility_function 戻りアドレスをスタックに積みます。
# @intent:pre-condition 使用中スロットが16未満であること。満杯の場合は状態を変えずにStackOverflowを送出します。
def push_return(state: Chip8CpuState, address: int) -> None:
    if state.sp >= STACK_DEPTH:
        raise StackOverflow(f"Call stack overflow: more than {STACK_DEPTH} nested calls.")
    state.stack[state.sp] = address
    state.sp += 1

# @intent:utility_function スタックから戻りアドレスを取り出します。
# @intent:pre-condition スタックが空でないこと。空の場合は状態を変えずにStackUnderflowを送出します。
def pop_return(state: Chip8CpuState) -> int:
    if state.sp <= 0:
        raise StackUnderflow("Return with an empty call stack.")
    state.sp -= 1
    return state.stack[state.sp]

# @intent:utility_function I相対のブロックアクセスが4KB空間に収まるか事前に検証します。
# @intent:rationale 書き込み途中でフォールトしないよう、メモリを変更する前に範囲全体を検査します。
def check_range(address: int, count: int) -> None:
    if count <= 0:
        return
    if address < 0 or address + count > MEMORY_SIZE:
        raise MemoryAccessFault(
            f"Access of {count} byte(s) at {address:#05x} exceeds the {MEMORY_SIZE:#x}-byte address space."
        )
