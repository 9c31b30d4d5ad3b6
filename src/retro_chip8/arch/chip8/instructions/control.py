# retro_chip8/arch/chip8/instructions/control.py
"""
制御系命令: サブルーチン呼び出し、ジャンプ、条件スキップ。

PCはフェッチ時点で既に次の命令を指しています。
"""
from random import Random

from retro_chip8.transport.bus import Bus
from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState, FaultKind
from .base import InstructionFault, skip_next, wrap_address

# --- 00EE RETURN ---
# @intent:pre-condition コールスタックが空であればSTACK_UNDERFLOWフォールト。
def execute_return(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    if not state.stack:
        raise InstructionFault(FaultKind.STACK_UNDERFLOW)
    state.pc = state.stack.pop()

# --- 1nnn JUMP ---
def execute_jump(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    state.pc = op.nnn

# --- 2nnn CALL ---
# @intent:logic 戻り先として、既に進められた現在のPCをプッシュします。
def execute_call(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    state.stack.append(state.pc)
    state.pc = op.nnn

# --- 3xkk SKIP_EQ_IMM ---
def execute_skip_eq_imm(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    if state.v[op.x] == op.kk:
        skip_next(state)

# --- 4xkk SKIP_NE_IMM ---
def execute_skip_ne_imm(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    if state.v[op.x] != op.kk:
        skip_next(state)

# --- 5xy0 SKIP_EQ_REG ---
def execute_skip_eq_reg(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    if state.v[op.x] == state.v[op.y]:
        skip_next(state)

# --- 9xy0 SKIP_NE_REG ---
def execute_skip_ne_reg(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    if state.v[op.x] != state.v[op.y]:
        skip_next(state)

# --- Bnnn JUMP_OFFSET ---
def execute_jump_offset(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    state.pc = wrap_address(op.nnn + state.v[0])

# --- 未定義パターン ---
def execute_invalid(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    raise InstructionFault(FaultKind.INVALID_OPCODE)
