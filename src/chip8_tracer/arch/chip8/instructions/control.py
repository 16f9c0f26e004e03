# chip8_tracer/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ、キー待ち）の実装。
"""
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.opcode import Opcode
from chip8_tracer.common.errors import InvalidKeyFault
from chip8_tracer.arch.chip8.state import Chip8CpuState, KEY_COUNT
from .base import skip_next, push_return, pop_return

# @intent:constant キー待ち命令が走査するキー数。キー0xFは走査範囲外です。
WAIT_KEY_SCAN_LIMIT = 0xF

# --- RET (00EE) ---
def execute_ret(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    state.pc = pop_return(state)

# --- JP addr (1nnn) ---
def execute_jp(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    state.pc = opcode.nnn

# --- CALL addr (2nnn) ---
# @intent:responsibility 戻りアドレス (フェッチ済みのため次命令を指すPC) を積んでからジャンプします。
def execute_call(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    push_return(state, state.pc)
    state.pc = opcode.nnn

# --- SE Vx, byte (3xkk) ---
def execute_se_imm(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    if state.v[opcode.x] == opcode.kk:
        skip_next(state)

# --- SNE Vx, byte (4xkk) ---
def execute_sne_imm(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    if state.v[opcode.x] != opcode.kk:
        skip_next(state)

# --- SE Vx, Vy (5xy0) ---
def execute_se_reg(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    if state.v[opcode.x] == state.v[opcode.y]:
        skip_next(state)

# --- SNE Vx, Vy (9xy0) ---
def execute_sne_reg(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    if state.v[opcode.x] != state.v[opcode.y]:
        skip_next(state)

# --- JP V0, addr (Bnnn) ---
def execute_jp_v0(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    state.pc = (opcode.nnn + state.v[0]) & 0xFFFF

# @intent:utility_function Vxが指すキーの押下状態を返します。
# @intent:pre-condition Vxは0x0-0xFであること。範囲外の場合は状態を変えずにInvalidKeyFaultを送出します。
def _key_pressed(state: Chip8CpuState, register: int) -> bool:
    key = state.v[register]
    if key >= KEY_COUNT:
        raise InvalidKeyFault(f"V{register:X}={key:#04x} is not a key index (0x0-0xF).")
    return state.keypad[key]

# --- SKP Vx (Ex9E) ---
def execute_skp(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    if _key_pressed(state, opcode.x):
        skip_next(state)

# --- SKNP Vx (ExA1) ---
def execute_sknp(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    if not _key_pressed(state, opcode.x):
        skip_next(state)

# --- LD Vx, K (Fx0A) ---
# @intent:responsibility キー入力を待ちます。PCを巻き戻して同じ命令を再実行させ、押下キーが見つかった時点で巻き戻しを取り消します。
# @intent:rationale 走査はキー0x0-0xEのみで、キー0xFは検出されません。この挙動は互換性のためそのまま維持しています。
def execute_ld_key(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    state.pc = (state.pc - 2) & 0xFFFF
    for key in range(WAIT_KEY_SCAN_LIMIT):
        if state.keypad[key]:
            state.v[opcode.x] = key
            skip_next(state)
            break
