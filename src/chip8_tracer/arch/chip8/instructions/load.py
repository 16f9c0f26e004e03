# chip8_tracer/arch/chip8/instructions/load.py
"""
ロード/ストア命令（即値、Iレジスタ、タイマー、BCD、レジスタ一括転送）の実装。
"""
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.opcode import Opcode
from chip8_tracer.arch.chip8.state import Chip8CpuState, FONT_GLYPH_SIZE
from .base import check_range

# --- LD Vx, byte (6xkk) ---
def execute_ld_imm(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    state.v[opcode.x] = opcode.kk

# --- LD I, addr (Annn) ---
def execute_ld_i(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    state.i = opcode.nnn

# --- LD Vx, DT (Fx07) ---
def execute_ld_vx_dt(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    state.v[opcode.x] = state.delay_timer

# --- LD DT, Vx (Fx15) ---
def execute_ld_dt_vx(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    state.delay_timer = state.v[opcode.x]

# --- LD ST, Vx (Fx18) ---
def execute_ld_st_vx(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    state.sound_timer = state.v[opcode.x]

# --- ADD I, Vx (Fx1E) ---
# 16bit加算、VFは変化しない
def execute_add_i(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    state.i = (state.i + state.v[opcode.x]) & 0xFFFF

# --- LD F, Vx (Fx29) ---
def execute_ld_font(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    state.i = state.v[opcode.x] * FONT_GLYPH_SIZE

# --- LD B, Vx (Fx33) ---
# @intent:responsibility Vxの10進3桁（百の位、十の位、一の位）をI, I+1, I+2へ書き込みます。
def execute_ld_bcd(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    value = state.v[opcode.x]
    check_range(state.i, 3)
    bus.write(state.i, value // 100)
    bus.write(state.i + 1, (value // 10) % 10)
    bus.write(state.i + 2, value % 10)

# --- LD [I], Vx (Fx55) ---
# @intent:responsibility V0..Vxをメモリ[I..]へ格納し、その後Iをx+1進めます。
def execute_ld_store(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    count = opcode.x + 1
    check_range(state.i, count)
    for index in range(count):
        bus.write(state.i + index, state.v[index])
    state.i = (state.i + count) & 0xFFFF

# --- LD Vx, [I] (Fx65) ---
def execute_ld_load(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    count = opcode.x + 1
    check_range(state.i, count)
    for index in range(count):
        state.v[index] = bus.read(state.i + index)
    state.i = (state.i + count) & 0xFFFF
