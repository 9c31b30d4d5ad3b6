# retro_chip8/host/frame.py
"""
フレーム駆動モジュール。

1フレームごとにCPUを固定回数だけ進め、その後タイマーを1回だけ減算します。
これによりタイマーの実時間レート(60Hz)とエミュレーション速度を切り離します。
描画と発音はこのモジュールの結果を見てホスト(UI)が行います。
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.state import Fault

logger = logging.getLogger(__name__)

# @intent:utility_function タイマー周波数からフレーム間隔(ms)を求めます。60Hzで16msになるよう切り捨てます。
def frame_interval_ms(timer_hz: int) -> int:
    if timer_hz <= 0:
        raise ValueError("timer_hz must be a positive integer.")
    return max(1, 1000 // timer_hz)

# @intent:responsibility 1フレームの実行結果を記録します。
@dataclass(frozen=True)
class FrameResult:
    executed: int  # このフレームで実際に実行された命令数
    sound_on: bool  # このフレームでトーンを鳴らすべきか
    fault: Optional[Fault] = None

class FrameRunner:
    """
    CPUをフレーム単位で駆動するクラス。
    """
    def __init__(self, cpu: Chip8Cpu, cycles_per_frame: int = 16):
        if cycles_per_frame <= 0:
            raise ValueError("cycles_per_frame must be a positive integer.")
        self._cpu = cpu
        self._cycles_per_frame = cycles_per_frame
        self._frame_count = 0

    @property
    def frame_count(self) -> int:
        return self._frame_count

    # @intent:responsibility 1フレーム分のサイクルを実行し、タイマーを1ティック進めます。
    # @intent:post-condition フォールト発生時はタイマーを減算せずに結果を返します。
    def run_frame(self) -> FrameResult:
        executed = 0
        for _ in range(self._cycles_per_frame):
            if self._cpu.is_halted:
                break
            before = self._cpu.get_cycle_count()
            self._cpu.step()
            executed += self._cpu.get_cycle_count() - before

        self._frame_count += 1
        fault = self._cpu.fault
        if fault is not None:
            logger.error("Chip-8 Error: %s", self._cpu.format_fault())
            return FrameResult(executed=executed, sound_on=False, fault=fault)

        sound_on = self._cpu.sound_timer > 0
        self._cpu.tick_timers()
        return FrameResult(executed=executed, sound_on=sound_on)

    # @intent:responsibility 指定フレーム数だけヘッドレスで実行します。フォールトで打ち切ります。
    def run(self, frames: int) -> List[FrameResult]:
        results = []
        for _ in range(frames):
            result = self.run_frame()
            results.append(result)
            if result.fault is not None:
                break
        return results
