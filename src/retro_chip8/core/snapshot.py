# retro_chip8/core/snapshot.py
"""
実行状態のスナップショット

このモジュールは、1命令サイクルの結果（状態、命令、バスアクティビティ）を記録する
データ構造を定義します。デバッガとUIへの情報提供に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from retro_chip8.core.state import CpuState
from retro_chip8.transport.bus import BusAccess


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令語と、そこから取り出したオペランドフィールドを記録するデータクラス。
    """
    opcode: int # 16bit命令語 例: 0x8014
    name: str # 例: "ADD_REG"
    x: int = 0 # 第2ニブル（レジスタ番号）
    y: int = 0 # 第3ニブル（レジスタ番号）
    n: int = 0 # 最下位ニブル
    nnn: int = 0 # 12bitアドレス
    kk: int = 0 # 8bit即値
    length: int = 2 # 命令のバイト長

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    """
    実行に関するメタデータ（累計実行命令数、実行したアドレスなど）を記録するデータクラス。
    """
    cycle_count: int
    address: Optional[int] = None # 実行した命令のアドレス。停止中はNone

# @intent:responsibility ある一時点におけるCPUとバスの状態を記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    1サイクル実行後のCPUの状態と、そのサイクルで発生したバスアクティビティ。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)

    # @intent:rationale stateはコピーせずに参照を保持します。過去の値が必要な呼び出し元（Debugger）は
    #                  自分でコピーを取ります。
