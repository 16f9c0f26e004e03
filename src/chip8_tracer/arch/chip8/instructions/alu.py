# chip8_tracer/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

レジスタ間のLD/OR/AND/XORはVFを0にクリアします。
シフト命令はVyをVxへコピーしてからシフトし、VFには上書き前のVxから押し出されるビットを設定します。
"""
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.opcode import Opcode
from chip8_tracer.arch.chip8.state import Chip8CpuState

# --- ADD Vx, byte (7xkk) ---
# フラグは変化しない
def execute_add_imm(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    state.v[opcode.x] = (state.v[opcode.x] + opcode.kk) & 0xFF

# --- LD Vx, Vy (8xy0) ---
def execute_ld_reg(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    state.v[opcode.x] = state.v[opcode.y]
    state.vf = 0

# --- OR Vx, Vy (8xy1) ---
def execute_or(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    state.v[opcode.x] |= state.v[opcode.y]
    state.vf = 0

# --- AND Vx, Vy (8xy2) ---
def execute_and(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    state.v[opcode.x] &= state.v[opcode.y]
    state.vf = 0

# --- XOR Vx, Vy (8xy3) ---
def execute_xor(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    state.v[opcode.x] ^= state.v[opcode.y]
    state.vf = 0

# --- ADD Vx, Vy (8xy4) ---
# @intent:responsibility 9bitの中間和の下位8bitをVxへ、桁あふれをVFへ設定します。
def execute_add(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    total = state.v[opcode.x] + state.v[opcode.y]
    state.v[opcode.x] = total & 0xFF
    state.vf = 1 if total > 0xFF else 0

# --- SUB Vx, Vy (8xy5) ---
# @intent:responsibility VF=1はボローなし (減算前に Vy < Vx)。等しい場合はVF=0となります。
def execute_sub(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    vx = state.v[opcode.x]
    vy = state.v[opcode.y]
    no_borrow = vy < vx
    state.v[opcode.x] = (vx - vy) & 0xFF
    state.vf = 1 if no_borrow else 0

# --- SHR Vx, Vy (8xy6) ---
def execute_shr(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    shifted_out = state.v[opcode.x] & 0x01
    state.v[opcode.x] = (state.v[opcode.y] >> 1) & 0xFF
    state.vf = shifted_out

# --- SUBN Vx, Vy (8xy7) ---
def execute_subn(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    vx = state.v[opcode.x]
    vy = state.v[opcode.y]
    no_borrow = vy > vx
    state.v[opcode.x] = (vy - vx) & 0xFF
    state.vf = 1 if no_borrow else 0

# --- SHL Vx, Vy (8xyE) ---
def execute_shl(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    shifted_out = (state.v[opcode.x] >> 7) & 0x01
    state.v[opcode.x] = (state.v[opcode.y] << 1) & 0xFF
    state.vf = shifted_out

# --- RND Vx, byte (Cxkk) ---
def execute_rnd(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    state.v[opcode.x] = state.rng.randrange(256) & opcode.kk
