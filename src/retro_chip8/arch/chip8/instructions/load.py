# retro_chip8/arch/chip8/instructions/load.py
"""
ロード/ストア系命令: アドレスレジスタ、タイマー、フォント、BCD、レジスタ一括転送。
"""
from random import Random

from retro_chip8.transport.bus import Bus
from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState, FaultKind
from retro_chip8.arch.chip8.font import FONT_ADDRESS, FONT_HEIGHT
from .base import require_nibble, wrap_address

# --- Annn LOAD_ADDR ---
def execute_load_addr(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    state.i = op.nnn

# --- Fx07 GET_DELAY ---
def execute_get_delay(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    state.v[op.x] = state.delay_timer

# --- Fx15 SET_DELAY ---
def execute_set_delay(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    state.delay_timer = state.v[op.x]

# --- Fx18 SET_SOUND ---
def execute_set_sound(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    state.sound_timer = state.v[op.x]

# --- Fx1E ADD_TO_ADDR ---
def execute_add_to_addr(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    state.i = wrap_address(state.i + state.v[op.x])

# --- Fx29 FONT_ADDR ---
# @intent:pre-condition VXは16進数字(0-15)でなければINVALID_HEX_DIGITフォールト。
def execute_font_addr(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    digit = require_nibble(state.v[op.x], FaultKind.INVALID_HEX_DIGIT)
    state.i = FONT_ADDRESS + digit * FONT_HEIGHT

# --- Fx33 STORE_BCD ---
def execute_store_bcd(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    value = state.v[op.x]
    digits = (value // 100, value // 10 % 10, value % 10)
    for offset, digit in enumerate(digits):
        bus.write(wrap_address(state.i + offset), digit)

# --- Fx55 STORE_REGS ---
# @intent:logic V0..VXを書き込むごとにIを1つ進めます（Iは命令後にX+1進んだ状態になる）。
def execute_store_regs(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    for reg in range(op.x + 1):
        bus.write(state.i, state.v[reg])
        state.i = wrap_address(state.i + 1)

# --- Fx65 LOAD_REGS ---
def execute_load_regs(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    for reg in range(op.x + 1):
        state.v[reg] = bus.read(state.i)
        state.i = wrap_address(state.i + 1)
