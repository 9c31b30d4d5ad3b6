# retro_chip8/arch/chip8/instructions/display.py
"""
表示系命令: 画面クリアとスプライト描画。

スプライトは1行1バイト、ビット7が左端です。座標は画面端でラップアラウンドし、
クリッピングはしません。各ピクセルはXORで合成されます。
"""
from random import Random

from retro_chip8.transport.bus import Bus
from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState, DISPLAY_WIDTH, DISPLAY_HEIGHT, FLAG_REGISTER
from .base import wrap_address

# --- 00E0 CLEAR_SCREEN ---
def execute_clear_screen(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    state.clear_display()

# --- Dxyn DRAW_SPRITE ---
# @intent:logic VFは命令開始時に0とし、点灯済みピクセルに点灯ビットが重なった場合に1とします。
#              走査順は行優先、各行はビット7から。
def execute_draw_sprite(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    origin_x = state.v[op.x]
    origin_y = state.v[op.y]
    state.v[FLAG_REGISTER] = 0
    collision = 0

    for row in range(op.n):
        row_byte = bus.read(wrap_address(state.i + row))
        dest_row = (origin_y + row) % DISPLAY_HEIGHT
        for col in range(8):
            if not row_byte & (0x80 >> col):
                continue
            index = dest_row * DISPLAY_WIDTH + (origin_x + col) % DISPLAY_WIDTH
            if state.display[index]:
                collision = 1
            state.display[index] = not state.display[index]

    state.v[FLAG_REGISTER] = collision
