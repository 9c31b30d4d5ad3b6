# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。
"""
import logging
from random import Random
from typing import Dict, List, Optional

from retro_chip8.core.snapshot import Operation, Metadata, Snapshot
from retro_chip8.common.types import RegisterLayoutInfo, RegisterInfo
from retro_chip8.common.errors import RomTooLargeError
from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import (
    Chip8CpuState, Fault, FaultKind, ADDRESS_MASK, MAX_PROGRAM_SIZE, NUM_KEYS, PROGRAM_START,
)
from retro_chip8.arch.chip8.font import FONT, FONT_ADDRESS
from retro_chip8.arch.chip8.instructions import decode_opcode, execute_instruction, InstructionFault

logger = logging.getLogger(__name__)

# @intent:constant 停止中のstep()が返す疑似命令。
HALT_OPERATION = Operation(opcode=0x0000, name="HALT", length=0)
WAIT_OPERATION = Operation(opcode=0x0000, name="WAIT", length=0)

# @intent:responsibility CHIP-8の具体的なエミュレーションロジック（フェッチ、デコード、実行、フォールト）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8仮想マシンをエミュレートするクラス。

    ホストはstep()を1サイクルごとに呼び出し、タイマーはtick_timers()で
    実時間に合わせて別途減算します。フォールトは例外ではなくstateに記録され、
    一度記録されるとstep()は何もしなくなります。
    """
    # @intent:responsibility Chip8Cpuを初期化し、フォントをロードします。
    # @intent:pre-condition `rng`はgetrandbits()を持つ乱数源。省略時はシードなしのRandom。
    def __init__(self, bus: Bus, rng: Optional[Random] = None):
        self._rng = rng if rng is not None else Random()
        self._fetch_address = PROGRAM_START
        self._fetch_opcode = 0x0000
        super().__init__(bus)
        self.load_font()

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility 状態とメモリを初期化し直します。プログラムは再ロードが必要です。
    def reset(self) -> None:
        self._bus.clear()
        super().reset()
        self.load_font()

    # --- ホスト向けAPI ---

    def load_font(self) -> None:
        self._bus.load(FONT_ADDRESS, FONT)

    # @intent:pre-condition プログラムは0xE00バイト以下である必要があります。
    def load_program(self, data: bytes) -> None:
        if len(data) > MAX_PROGRAM_SIZE:
            raise RomTooLargeError(len(data))
        self._bus.load(PROGRAM_START, bytes(data))
        logger.info("Loaded %d program bytes at 0x%03X", len(data), PROGRAM_START)

    # @intent:responsibility キー押下イベントを処理し、入力待ちであれば解決します。
    # @intent:rationale 入力待ちの解決はこのイベントでのみ行います。命令実行時に既に押されていたキーは解決しません。
    def key_down(self, key: int) -> None:
        self._check_key(key)
        state = self._state
        state.keys[key] = True
        if state.pending_key_target is not None:
            state.v[state.pending_key_target] = key
            state.pending_key_target = None

    def key_up(self, key: int) -> None:
        self._check_key(key)
        self._state.keys[key] = False

    # @intent:responsibility 1ティック分タイマーを減算します（ホストが60Hzで呼び出す）。
    def tick_timers(self) -> None:
        state = self._state
        if state.delay_timer:
            state.delay_timer -= 1
        if state.sound_timer:
            state.sound_timer -= 1

    def format_fault(self) -> str:
        fault = self._state.fault
        return str(fault) if fault is not None else "no error"

    @staticmethod
    def _check_key(key: int) -> None:
        if not 0 <= key < NUM_KEYS:
            raise ValueError(f"Key {key} is not a valid key index (0-15).")

    # --- 読み取り用プロパティ ---

    @property
    def memory(self) -> bytes:
        return self._bus.dump()

    @property
    def display(self) -> List[bool]:
        return list(self._state.display)

    @property
    def registers(self) -> List[int]:
        return list(self._state.v)

    @property
    def delay_timer(self) -> int:
        return self._state.delay_timer

    @property
    def sound_timer(self) -> int:
        return self._state.sound_timer

    @property
    def fault(self) -> Optional[Fault]:
        return self._state.fault

    @property
    def is_halted(self) -> bool:
        return self._state.is_halted

    @property
    def is_waiting_for_key(self) -> bool:
        return self._state.is_waiting_for_key

    # --- 命令サイクル ---

    # @intent:responsibility フォールト中または入力待ち中は状態を変えずにSnapshotを返します。
    def _handle_halt(self, current_pc: int) -> Optional[Snapshot]:
        state = self._state
        if state.fault is not None:
            operation = HALT_OPERATION
        elif state.pending_key_target is not None:
            operation = WAIT_OPERATION
        else:
            return None
        return Snapshot(
            state=state,
            operation=operation,
            metadata=Metadata(cycle_count=self._cycle_count),
            bus_activity=[],
        )

    # @intent:responsibility PCとPC+1の2バイトをビッグエンディアンで結合して命令語を得ます。
    # @intent:rationale フォールト記録用に、命令語とそのアドレスをここで保存しておきます。
    def _fetch(self) -> int:
        pc = self._state.pc
        opcode = (self._bus.read(pc) << 8) | self._bus.read((pc + 1) & ADDRESS_MASK)
        self._fetch_address = pc
        self._fetch_opcode = opcode
        return opcode

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    def _update_pc(self, operation: Operation) -> None:
        self._state.pc = (self._state.pc + operation.length) & ADDRESS_MASK

    # @intent:responsibility 命令を実行し、不正な命令であればフォールトをラッチします。
    def _execute(self, operation: Operation) -> None:
        try:
            execute_instruction(operation, self._state, self._bus, self._rng)
        except InstructionFault as e:
            self._latch_fault(e.kind)

    # @intent:post-condition PCは不正な命令自身を指し、以降のstep()は何もしません。
    def _latch_fault(self, kind: FaultKind) -> None:
        state = self._state
        state.pc = (state.pc - 2) & ADDRESS_MASK
        state.fault = Fault(kind=kind, address=self._fetch_address, opcode=self._fetch_opcode)
        logger.warning("Machine halted: %s", state.fault)

    # --- UI向けAPI ---

    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        reg_map = {f"V{index:X}": value for index, value in enumerate(s.v)}
        reg_map.update({
            "I": s.i, "PC": s.pc, "SP": len(s.stack), "DT": s.delay_timer, "ST": s.sound_timer
        })
        return reg_map

    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{index:X}", 8) for index in range(16)]),
            RegisterLayoutInfo("Address/Stack", [
                RegisterInfo("I", 12), RegisterInfo("PC", 12), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    def get_flag_state(self) -> Dict[str, bool]:
        s = self._state
        return {
            "VF": bool(s.vf & 0x01), "WAIT": s.is_waiting_for_key, "HALT": s.is_halted
        }
