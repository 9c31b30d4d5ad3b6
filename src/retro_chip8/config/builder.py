from random import Random
from typing import Optional, Tuple

from retro_chip8.transport.bus import Bus, RAM, MEMORY_SIZE
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from .models import HostConfig

# @intent:responsibility 設定（Config）に基づいて、Bus、RAM、CPUを生成・接続し、プログラムをロードします。
class SystemBuilder:
    def build_system(self, config: HostConfig, program: Optional[bytes] = None) -> Tuple[Chip8Cpu, Bus]:
        bus = Bus()
        bus.register_device(0x000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))

        # シード指定時は再現可能な乱数列になる
        cpu = Chip8Cpu(bus, rng=Random(config.seed))

        if program is not None:
            cpu.load_program(program)

        return cpu, bus
