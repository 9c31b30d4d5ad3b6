# retro_chip8/arch/chip8/instructions/keypad.py
"""
入力系命令: キー状態によるスキップとキー入力待ち。
"""
from random import Random

from retro_chip8.transport.bus import Bus
from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState, FaultKind
from .base import require_nibble, skip_next

# --- Ex9E SKIP_KEY_PRESSED ---
def execute_skip_key_pressed(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    key = require_nibble(state.v[op.x], FaultKind.INVALID_KEY)
    if state.keys[key]:
        skip_next(state)

# --- ExA1 SKIP_KEY_NOT_PRESSED ---
def execute_skip_key_not_pressed(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    key = require_nibble(state.v[op.x], FaultKind.INVALID_KEY)
    if not state.keys[key]:
        skip_next(state)

# --- Fx0A WAIT_KEY ---
# @intent:logic 格納先のレジスタ番号を記録するだけです。解決は次のkey_downイベントで行われます。
def execute_wait_key(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    state.pending_key_target = op.x
