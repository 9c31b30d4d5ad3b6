# retro_chip8/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。

レジスタ、コールスタック、タイマー、フレームバッファ、キー状態、
入力待ちとフォールトのラッチを一つの可変データクラスにまとめます。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from retro_chip8.core.state import CpuState

# @intent:constant マシンの固定パラメータ。
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = 0x1000 - PROGRAM_START
DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
NUM_REGISTERS = 16
NUM_KEYS = 16
FLAG_REGISTER = 0xF
ADDRESS_MASK = 0x0FFF

# @intent:responsibility 実行を停止させるフォールトの種類を定義します。値は報告用のテキストです。
class FaultKind(Enum):
    INVALID_OPCODE = "invalid opcode"
    INVALID_KEY = "invalid key"
    INVALID_HEX_DIGIT = "invalid hex digit"
    STACK_UNDERFLOW = "stack underflow"

# @intent:responsibility ラッチされたフォールトの内容（種類、命令アドレス、命令語）を保持します。
@dataclass(frozen=True)
class Fault:
    kind: FaultKind
    address: int
    opcode: int

    def __str__(self) -> str:
        return f"{self.kind.value} at 0x{self.address:03x} (opcode: 0x{self.opcode:04x})"

# @intent:responsibility CHIP-8マシンの全ての状態を保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8のマシン状態を保持するデータクラス。
    メモリはBus側が保持します。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=lambda: [0] * NUM_REGISTERS)  # V0-VF
    i: int = 0x000  # Address register
    stack: List[int] = field(default_factory=list)  # 深さの上限なし
    delay_timer: int = 0
    sound_timer: int = 0
    display: List[bool] = field(default_factory=lambda: [False] * (DISPLAY_WIDTH * DISPLAY_HEIGHT))
    keys: List[bool] = field(default_factory=lambda: [False] * NUM_KEYS)
    pending_key_target: Optional[int] = None  # 入力待ちの格納先レジスタ番号
    fault: Optional[Fault] = None

    # @intent:accessor VFはキャリー/ボロー/衝突フラグを兼ねます。
    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF

    @property
    def is_halted(self) -> bool:
        return self.fault is not None

    @property
    def is_waiting_for_key(self) -> bool:
        return self.pending_key_target is not None

    def pixel(self, x: int, y: int) -> bool:
        return self.display[y * DISPLAY_WIDTH + x]

    def clear_display(self) -> None:
        self.display[:] = [False] * (DISPLAY_WIDTH * DISPLAY_HEIGHT)

    # @intent:responsibility 表示用に1行分の文字列を生成します（デバッグ、テスト用）。
    def display_rows(self, on: str = "#", off: str = ".") -> List[str]:
        return [
            "".join(on if lit else off for lit in self.display[row * DISPLAY_WIDTH:(row + 1) * DISPLAY_WIDTH])
            for row in range(DISPLAY_HEIGHT)
        ]
