# retro_chip8/debugger/debugger.py
"""
デバッガモジュール。

コアエンジンの実行を制御し、ユーザーが指定した条件（ブレークポイント）で
実行を中断させる責務を負います。
"""
import copy
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Deque, List, Optional

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.core.snapshot import Snapshot
from retro_chip8.transport.bus import BusAccessType

logger = logging.getLogger(__name__)

# @intent:responsibility ブレークポイントの条件タイプを定義します。
class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # プログラムカウンタが特定のアドレスに一致
    MEMORY_READ = "MEMORY_READ"         # 特定のアドレスが読み込まれた
    MEMORY_WRITE = "MEMORY_WRITE"       # 特定のアドレスに書き込まれた
    REGISTER_VALUE = "REGISTER_VALUE"   # 特定のレジスタが特定の値になった
    REGISTER_CHANGE = "REGISTER_CHANGE" # 特定のレジスタの値が変化した

# @intent:responsibility run()が停止した理由を定義します。
class StopReason(Enum):
    BREAKPOINT = "BREAKPOINT"
    FAULT = "FAULT"
    WAITING_FOR_KEY = "WAITING_FOR_KEY"
    STOPPED = "STOPPED"
    STEP_LIMIT = "STEP_LIMIT"

# @intent:responsibility ブレークポイントをトリガーする条件を定義します。
@dataclass(frozen=True)
class BreakpointCondition:
    """
    ブレークポイントがヒットするための条件を定義するデータクラス。
    レジスタ名は get_register_map() のキー（"V0".."VF", "I", "PC", "SP", "DT", "ST"）です。
    """
    condition_type: BreakpointConditionType
    value: Optional[int] = None           # PC_MATCH, REGISTER_VALUEで使用
    address: Optional[int] = None         # MEMORY_READ, MEMORY_WRITEで使用
    register_name: Optional[str] = None   # REGISTER_VALUE, REGISTER_CHANGEで使用
    enabled: bool = True

# @intent:responsibility コアエンジンの実行制御とブレークポイント管理を行います。
class Debugger:
    """
    CPUの実行を制御し、ブレークポイントの管理を行うクラス。
    """
    def __init__(self, cpu: Chip8Cpu, history_limit: int = 1024):
        self._cpu = cpu
        self._breakpoints: List[BreakpointCondition] = []
        self._running: bool = False
        self._previous_registers = cpu.get_register_map()
        self._last_snapshot: Optional[Snapshot] = None
        # @intent:responsibility 直近の実行履歴を保持します（各Snapshotは実行直後の状態のコピー）。
        self._history: Deque[Snapshot] = deque(maxlen=history_limit)

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition not in self._breakpoints:
            self._breakpoints.append(condition)

    def update_breakpoint(self, old_condition: BreakpointCondition, new_condition: BreakpointCondition) -> None:
        if old_condition in self._breakpoints:
            idx = self._breakpoints.index(old_condition)
            self._breakpoints[idx] = new_condition

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition in self._breakpoints:
            self._breakpoints.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._breakpoints)

    def get_history(self) -> List[Snapshot]:
        return list(self._history)

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    def _check_pc_breakpoints(self, pc: int) -> bool:
        return any(
            bp.enabled and bp.condition_type == BreakpointConditionType.PC_MATCH and bp.value == pc
            for bp in self._breakpoints
        )

    def _check_other_breakpoints(self, snapshot: Snapshot) -> bool:
        """
        Snapshotに基づいてPC_MATCH以外のブレークポイントをチェックします。
        """
        registers = self._cpu.get_register_map()

        for bp in self._breakpoints:
            if not bp.enabled:
                continue

            if bp.condition_type == BreakpointConditionType.MEMORY_READ:
                for access in snapshot.bus_activity:
                    if access.access_type == BusAccessType.READ and access.address == bp.address:
                        return True
            elif bp.condition_type == BreakpointConditionType.MEMORY_WRITE:
                for access in snapshot.bus_activity:
                    if access.access_type == BusAccessType.WRITE and access.address == bp.address:
                        return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_VALUE:
                if bp.register_name in registers and registers[bp.register_name] == bp.value:
                    return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_CHANGE:
                name = bp.register_name
                if name in registers and name in self._previous_registers:
                    if registers[name] != self._previous_registers[name]:
                        return True
        return False

    def step_instruction(self) -> Snapshot:
        """
        CPUを1命令分実行し、その結果のSnapshotを返します。
        """
        self._previous_registers = self._cpu.get_register_map()
        snapshot = self._cpu.step()
        # Snapshotは状態を参照で持つため、履歴にはコピーを残す
        recorded = Snapshot(
            state=copy.deepcopy(snapshot.state),
            operation=snapshot.operation,
            metadata=snapshot.metadata,
            bus_activity=list(snapshot.bus_activity),
        )
        self._last_snapshot = recorded
        self._history.append(recorded)
        return recorded

    # @intent:responsibility 停止条件を満たすまでCPUの実行を継続します。
    # @intent:rationale CHIP-8のプログラムは通常無限ループで終わるため、max_stepsで上限を設けます。
    # @intent:pre-condition `on_step`は各命令の実行後にSnapshotを受け取ります。その中からstop()を呼ぶと中断できます。
    def run(self, max_steps: int = 100000,
            on_step: Optional[Callable[[Snapshot], None]] = None) -> StopReason:
        self._running = True

        # 現在のPCにあるブレークポイントで即座に止まらないよう、最初の1命令は無条件に実行する
        first = True
        steps = 0
        while self._running:
            state: Chip8CpuState = self._cpu.get_state()
            if state.is_halted:
                self._running = False
                return StopReason.FAULT
            if state.is_waiting_for_key:
                self._running = False
                return StopReason.WAITING_FOR_KEY
            if not first and self._check_pc_breakpoints(state.pc):
                self._running = False
                logger.info("Breakpoint hit at PC: %#05x", state.pc)
                return StopReason.BREAKPOINT
            if steps >= max_steps:
                self._running = False
                return StopReason.STEP_LIMIT

            snapshot = self.step_instruction()
            first = False
            steps += 1

            if self._check_other_breakpoints(snapshot):
                self._running = False
                logger.info("Breakpoint hit at PC: %#05x", snapshot.state.pc)
                return StopReason.BREAKPOINT
            if on_step is not None:
                on_step(snapshot)

        return StopReason.STOPPED

    # @intent:responsibility 実行中のrun()を次の命令の前で中断させます。
    def stop(self) -> None:
        self._running = False
