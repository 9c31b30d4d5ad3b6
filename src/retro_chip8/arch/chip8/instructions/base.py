# retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
from retro_chip8.arch.chip8.state import Chip8CpuState, FaultKind, ADDRESS_MASK

# @intent:responsibility 命令の実行が不正であることをCPUに通知する内部例外。
# @intent:rationale 命令ハンドラは状態を変更する前に検査を行い、この例外を送出します。
#                  Chip8Cpuが捕捉してフォールトとしてラッチするため、step()の外には漏れません。
class InstructionFault(Exception):
    def __init__(self, kind: FaultKind):
        super().__init__(kind.value)
        self.kind = kind

# @intent:utility_function 次の命令をスキップします（PCをさらに2進める）。
def skip_next(state: Chip8CpuState) -> None:
    state.pc = (state.pc + 2) & ADDRESS_MASK

# @intent:utility_function 12bitアドレスにラップアラウンドさせます。
def wrap_address(addr: int) -> int:
    return addr & ADDRESS_MASK

# @intent:utility_function レジスタ値が0-15の範囲にあることを検査します。
# @intent:pre-condition 上位ニブルが非ゼロであれば `kind` のフォールトを送出します。
def require_nibble(value: int, kind: FaultKind) -> int:
    if value & 0xF0:
        raise InstructionFault(kind)
    return value
