# retro_chip8/ui/display_view.py
"""
64x32のモノクロフレームバッファを2色で描画するウィジェット。
"""
from typing import List

from PySide6.QtWidgets import QWidget
from PySide6.QtCore import QSize
from PySide6.QtGui import QPainter, QColor

from retro_chip8.arch.chip8.state import DISPLAY_WIDTH, DISPLAY_HEIGHT

# @intent:responsibility フレームバッファの内容を拡大して描画します。
class DisplayView(QWidget):
    def __init__(self, scale: int = 12, color_on: str = "#393E41", color_off: str = "#F6F7EB", parent=None):
        super().__init__(parent)
        self._scale = scale
        self._color_on = QColor(color_on)
        self._color_off = QColor(color_off)
        self._pixels: List[bool] = [False] * (DISPLAY_WIDTH * DISPLAY_HEIGHT)
        self.setMinimumSize(DISPLAY_WIDTH * 2, DISPLAY_HEIGHT * 2)

    def sizeHint(self) -> QSize:
        return QSize(DISPLAY_WIDTH * self._scale, DISPLAY_HEIGHT * self._scale)

    # @intent:responsibility 表示内容を差し替え、再描画を要求します。
    def set_pixels(self, pixels: List[bool]) -> None:
        self._pixels = pixels
        self.update()

    # @intent:rationale ウィンドウサイズに追従するよう、描画時にセルサイズを計算します。
    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._color_off)
        cell_w = self.width() / DISPLAY_WIDTH
        cell_h = self.height() / DISPLAY_HEIGHT
        for index, lit in enumerate(self._pixels):
            if lit:
                row, col = divmod(index, DISPLAY_WIDTH)
                painter.fillRect(
                    int(col * cell_w), int(row * cell_h),
                    int((col + 1) * cell_w) - int(col * cell_w),
                    int((row + 1) * cell_h) - int(row * cell_h),
                    self._color_on,
                )
        painter.end()
