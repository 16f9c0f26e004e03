# chip8_tracer/arch/chip8/instructions/display.py
"""
画面命令（消去、スプライト描画）の実装。
"""
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.opcode import Opcode
from chip8_tracer.arch.chip8.state import Chip8CpuState, SCREEN_WIDTH, SCREEN_HEIGHT, SCREEN_PIXEL_COUNT
from .base import check_range

SPRITE_WIDTH = 8

# --- CLS (00E0) ---
def execute_cls(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    state.frame_buffer[:] = bytes(SCREEN_PIXEL_COUNT)
    state.should_redraw = True

# --- DRW Vx, Vy, n (Dxyn) ---
# @intent:responsibility メモリ[I..I+n)の8ピクセル幅スプライトを(Vx mod 64, Vy mod 32)へXOR合成します。
# @intent:rationale 画面外にはみ出す行・列は折り返さずに切り捨てます。
#                  VFはスプライト全体を通して、点灯ピクセルが1つでも消えた場合に1となります。
def execute_drw(state: Chip8CpuState, bus: Bus, opcode: Opcode) -> None:
    origin_x = state.v[opcode.x] % SCREEN_WIDTH
    origin_y = state.v[opcode.y] % SCREEN_HEIGHT
    rows = min(opcode.n, SCREEN_HEIGHT - origin_y)
    check_range(state.i, rows)

    frame_buffer = state.frame_buffer
    collision = False
    for row in range(rows):
        sprite_row = bus.read(state.i + row)
        row_base = (origin_y + row) * SCREEN_WIDTH
        for col in range(SPRITE_WIDTH):
            if origin_x + col >= SCREEN_WIDTH:
                break
            if sprite_row & (0x80 >> col):
                position = row_base + origin_x + col
                if frame_buffer[position]:
                    collision = True
                frame_buffer[position] ^= 1

    state.vf = 1 if collision else 0
    state.should_redraw = True
