# retro_chip8/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from random import Random

from retro_chip8.transport.bus import Bus
from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import InstructionFault
from .maps import EXECUTE_MAP, INVALID, lookup_name

# @intent:responsibility 16bit命令語をデコードし、オペランドフィールドを切り出します。
def decode_opcode(opcode: int) -> Operation:
    """
    CHIP-8の命令語をデコードし、Operationオブジェクトを返します。
    未定義のパターンは名前INVALIDのOperationになります。
    """
    return Operation(
        opcode=opcode,
        name=lookup_name(opcode),
        x=(opcode >> 8) & 0xF,
        y=(opcode >> 4) & 0xF,
        n=opcode & 0xF,
        nnn=opcode & 0x0FFF,
        kk=opcode & 0xFF,
    )

# @intent:responsibility デコードされたCHIP-8命令を実行します。
# @intent:post-condition 不正な命令の場合はInstructionFaultを送出します。
def execute_instruction(operation: Operation, state: Chip8CpuState, bus: Bus, rng: Random) -> None:
    """
    デコードされたCHIP-8命令を実行し、マシンの状態を変更します。
    """
    executor = EXECUTE_MAP.get(operation.name, EXECUTE_MAP[INVALID])
    executor(state, bus, operation, rng)

__all__ = ["decode_opcode", "execute_instruction", "InstructionFault", "INVALID"]
