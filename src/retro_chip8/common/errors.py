"""
ホスト側（ロード時）のエラー定義。

マシン実行中のフォールトは例外ではなくデータとして記録されます
（retro_chip8.arch.chip8.state.Fault を参照）。
"""

# @intent:responsibility プログラム領域(0x200-0xFFF)に収まらないROMを示します。
# @intent:rationale 切り詰めて起動するのではなく、起動そのものを拒否させるためValueErrorの派生とします。
class RomTooLargeError(ValueError):
    def __init__(self, size: int):
        super().__init__(f"ROM too big! ({size} bytes)")
        self.size = size
