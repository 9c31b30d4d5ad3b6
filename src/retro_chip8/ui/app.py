# retro_chip8/ui/app.py
"""
アプリケーションのエントリポイント。
設定とROMを読み込み、システムを組み立ててメインウィンドウ（またはヘッドレス実行）を起動します。
"""
import argparse
import logging
import os
import sys
from typing import List, Optional

from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.config.models import HostConfig
from retro_chip8.loader.loader import RomLoader
from retro_chip8.host.frame import FrameRunner

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="Chip-8 interpreter")
    parser.add_argument("rom", help="Path to the ROM file")
    parser.add_argument("--config", help="YAML host configuration file")
    parser.add_argument("--cycles", type=int, help="Instructions executed per frame")
    parser.add_argument("--scale", type=int, help="Window pixels per Chip-8 pixel")
    parser.add_argument("--seed", type=int, help="Seed for the random-number instruction")
    parser.add_argument("--headless", type=int, metavar="FRAMES",
                        help="Run FRAMES frames without a window and print the display")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser

# @intent:responsibility コマンドライン引数で設定を上書きします。
def apply_overrides(config: HostConfig, args: argparse.Namespace) -> HostConfig:
    if args.cycles is not None:
        if args.cycles <= 0:
            raise ValueError("--cycles must be a positive integer.")
        config.cycles_per_frame = args.cycles
    if args.scale is not None:
        if args.scale <= 0:
            raise ValueError("--scale must be a positive integer.")
        config.scale = args.scale
    if args.seed is not None:
        config.seed = args.seed
    return config

def run_headless(runner: FrameRunner, cpu, frames: int) -> int:
    runner.run(frames)
    for row in cpu.get_state().display_rows():
        print(row)
    if cpu.is_halted:
        print(f"Chip-8 Error: {cpu.format_fault()}", file=sys.stderr)
        return 1
    return 0

# @intent:responsibility アプリケーションを起動し、終了コードを返します。
# @intent:post-condition ROMや設定が不正な場合は起動せずに1を返します。
def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = ConfigLoader().load_from_file(args.config) if args.config else HostConfig()
        config = apply_overrides(config, args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        program = RomLoader().read_rom(args.rom)
    except (OSError, ValueError) as e:
        logger.error("ROM could not be loaded: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    cpu, _ = SystemBuilder().build_system(config, program)

    if args.headless is not None:
        return run_headless(FrameRunner(cpu, config.cycles_per_frame), cpu, args.headless)

    from PySide6.QtWidgets import QApplication
    from .main_window import MainWindow

    app = QApplication(sys.argv[:1])
    main_win = MainWindow(cpu, config, title=f"Chip-8 - {os.path.basename(args.rom)}")
    main_win.show()
    main_win.start()
    app.exec()
    return main_win.exit_code

if __name__ == '__main__':
    sys.exit(main())
