# retro_chip8/arch/chip8/instructions/alu.py
"""
演算系命令: 即値ロード/加算、レジスタ間の論理演算、加減算、シフト、乱数。

全ての結果は8bitでラップアラウンドします。
VFへの書き込みは、結果とフラグの両方を計算した後に行います
（X/YがVF自身を指している場合でも、フラグが最後に残ります）。
"""
from random import Random

from retro_chip8.transport.bus import Bus
from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState, FLAG_REGISTER

# --- 6xkk LOAD_IMM ---
def execute_load_imm(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    state.v[op.x] = op.kk

# --- 7xkk ADD_IMM (VFは変化しない) ---
def execute_add_imm(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    state.v[op.x] = (state.v[op.x] + op.kk) & 0xFF

# --- 8xy0 MOVE ---
def execute_move(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    state.v[op.x] = state.v[op.y]

# --- 8xy1 / 8xy2 / 8xy3 ---
def execute_or(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    state.v[op.x] |= state.v[op.y]

def execute_and(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    state.v[op.x] &= state.v[op.y]

def execute_xor(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    state.v[op.x] ^= state.v[op.y]

# --- 8xy4 ADD_REG ---
def execute_add_reg(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    total = state.v[op.x] + state.v[op.y]
    state.v[op.x] = total & 0xFF
    state.v[FLAG_REGISTER] = 1 if total > 0xFF else 0

# --- 8xy5 SUB_REG ---
def execute_sub_reg(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    vx, vy = state.v[op.x], state.v[op.y]
    no_borrow = 1 if vx >= vy else 0
    state.v[op.x] = (vx - vy) & 0xFF
    state.v[FLAG_REGISTER] = no_borrow

# --- 8xy6 SHIFT_RIGHT ---
# @intent:logic 結果はVYを右シフトした値、フラグはシフト前のVXの最下位ビット。
def execute_shift_right(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    lsb = state.v[op.x] & 0x01
    state.v[op.x] = state.v[op.y] >> 1
    state.v[FLAG_REGISTER] = lsb

# --- 8xy7 SUBN_REG ---
def execute_subn_reg(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    vx, vy = state.v[op.x], state.v[op.y]
    no_borrow = 1 if vy >= vx else 0
    state.v[op.x] = (vy - vx) & 0xFF
    state.v[FLAG_REGISTER] = no_borrow

# --- 8xyE SHIFT_LEFT ---
# @intent:logic 結果はVYを左シフトした値、フラグはシフト前のVXの最上位ビット。
def execute_shift_left(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    msb = (state.v[op.x] >> 7) & 0x01
    state.v[op.x] = (state.v[op.y] << 1) & 0xFF
    state.v[FLAG_REGISTER] = msb

# --- Cxkk RANDOM ---
def execute_random(state: Chip8CpuState, bus: Bus, op: Operation, rng: Random) -> None:
    state.v[op.x] = rng.getrandbits(8) & op.kk
