# retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
表示、レジスタビュー、キー入力、フレームタイマーを束ね、CPUを駆動します。
"""
import logging

from PySide6.QtWidgets import QMainWindow, QDockWidget, QMessageBox
from PySide6.QtGui import QAction, QCloseEvent, QKeyEvent
from PySide6.QtCore import Qt, QTimer, Slot

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.config.models import HostConfig
from retro_chip8.host.frame import FrameRunner, frame_interval_ms
from .display_view import DisplayView
from .register_view import RegisterView
from .keymap import resolve_keymap
from .tone import TonePlayer

logger = logging.getLogger(__name__)

# @intent:responsibility アプリケーションのメインウィンドウを定義し、フレームループを回します。
class MainWindow(QMainWindow):
    """
    CHIP-8ホストのメインウィンドウクラス。
    """
    def __init__(self, cpu: Chip8Cpu, config: HostConfig, title: str = "Chip-8", parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)

        self._cpu = cpu
        self._config = config
        self._runner = FrameRunner(cpu, config.cycles_per_frame)
        self._keys = resolve_keymap(config.keymap)
        self.exit_code = 0

        self.display_view = DisplayView(config.scale, config.color_on, config.color_off, self)
        self.setCentralWidget(self.display_view)
        self.setFocusPolicy(Qt.StrongFocus)

        self._create_register_dock()
        self._create_menus()

        self._tone = TonePlayer(config.tone_hz, config.sample_rate, config.amplitude, config.timer_hz, self)

        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.PreciseTimer)
        self._timer.setInterval(frame_interval_ms(config.timer_hz))
        self._timer.timeout.connect(self._on_frame)

    def _create_register_dock(self):
        self.register_view = RegisterView()
        self.register_view.set_cpu(self._cpu)
        self.register_dock = QDockWidget("Registers", self)
        self.register_dock.setWidget(self.register_view)
        self.addDockWidget(Qt.RightDockWidgetArea, self.register_dock)
        self.register_dock.hide()

    def _create_menus(self):
        view_menu = self.menuBar().addMenu("View")
        toggle = self.register_dock.toggleViewAction()
        toggle.setShortcut("Ctrl+R")
        view_menu.addAction(toggle)

        self.pause_action = QAction("Pause", self)
        self.pause_action.setCheckable(True)
        self.pause_action.setShortcut("Ctrl+P")
        self.pause_action.toggled.connect(self._set_paused)
        view_menu.addAction(self.pause_action)

    def start(self) -> None:
        self._timer.start()

    @Slot(bool)
    def _set_paused(self, paused: bool) -> None:
        if paused:
            self._timer.stop()
            self.statusBar().showMessage("Paused")
        elif not self._cpu.is_halted:
            self._timer.start()
            self.statusBar().clearMessage()

    # @intent:responsibility 1フレーム分CPUを進め、画面・レジスタ・トーンを更新します。
    @Slot()
    def _on_frame(self) -> None:
        result = self._runner.run_frame()
        self.display_view.set_pixels(self._cpu.display)
        if self.register_dock.isVisible():
            self.register_view.update_registers()

        if result.fault is not None:
            self._halt_on_fault()
            return
        self._tone.feed(result.sound_on)

    # @intent:post-condition フォールト発生後はステップを止め、エラーを表示してウィンドウを閉じます。
    def _halt_on_fault(self) -> None:
        self._timer.stop()
        self.exit_code = 1
        message = f"Chip-8 Error: {self._cpu.format_fault()}"
        self.statusBar().showMessage(message)
        QMessageBox.critical(self, "Chip-8", message)
        self.close()

    def keyPressEvent(self, event: QKeyEvent) -> None:
        key = self._keys.get(event.key())
        if key is None or event.isAutoRepeat():
            super().keyPressEvent(event)
            return
        self._cpu.key_down(key)

    def keyReleaseEvent(self, event: QKeyEvent) -> None:
        key = self._keys.get(event.key())
        if key is None or event.isAutoRepeat():
            super().keyReleaseEvent(event)
            return
        self._cpu.key_up(key)

    def closeEvent(self, event: QCloseEvent) -> None:
        self._timer.stop()
        self._tone.stop()
        super().closeEvent(event)
