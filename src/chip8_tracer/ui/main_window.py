# chip8_tracer/ui/main_window.py
"""
メインウィンドウの実装。
画面表示・レジスタ表示を保持し、QTimerでフレームドライバを駆動します。
"""
from dataclasses import replace
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QDockWidget, QFileDialog
from PySide6.QtGui import QAction, QCloseEvent, QKeyEvent
from PySide6.QtCore import Qt, QTimer, Slot

from chip8_tracer.common.errors import Chip8Fault
from chip8_tracer.config.builder import SystemBuilder
from chip8_tracer.config.models import SystemConfig
from chip8_tracer.debugger.debugger import Debugger
from chip8_tracer.io.keypad import Keypad
from chip8_tracer.runtime.driver import FrameDriver
from .display_view import DisplayView
from .register_view import RegisterView
from .keys import host_key_name


# @intent:responsibility アプリケーションのメインウィンドウを定義し、UIとバックエンドを接続します。
class MainWindow(QMainWindow):
    def __init__(self, config: Optional[SystemConfig] = None, rom_path: Optional[str] = None, parent=None):
        super().__init__(parent)
        self._config = config or SystemConfig()
        self.setWindowTitle("CHIP-8 Core Tracer")

        self.keypad = Keypad(self._config.key_map)
        display = self._config.display
        self.display_view = DisplayView(display.scale, display.foreground, display.background, self)
        self.setCentralWidget(self.display_view)

        self.register_view = RegisterView()
        dock = QDockWidget("Registers", self)
        dock.setWidget(self.register_view)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, dock)

        self._timer = QTimer(self)
        self._timer.setInterval(self._config.timing.frame_interval_ms)
        self._timer.timeout.connect(self.advance_frame)

        self._create_actions()
        try:
            self._setup_backend(rom_path)
        except Chip8Fault as fault:
            # 読み込めないROMは外して空のマシンで起動する
            self._config = replace(self._config, rom=None)
            self._setup_backend(None)
            self._report_fault(fault)

    # @intent:responsibility 設定からCPUとバスを組み立て、ドライバに入力源と表示先を接続します。
    def _setup_backend(self, rom_path: Optional[str]) -> None:
        self.cpu, self.bus = SystemBuilder().build_system(self._config, rom_path)
        self.driver = FrameDriver(
            self.cpu,
            self._config.timing.cycles_per_frame,
            key_source=self.keypad,
            frame_sink=self.display_view,
        )
        self.debugger = Debugger(self.cpu)
        self.keypad.release_all()
        self.register_view.set_cpu(self.cpu)
        self.cpu.get_state().should_redraw = True
        self._refresh_display()

    def _create_actions(self) -> None:
        file_menu = self.menuBar().addMenu("File")
        self.load_rom_action = QAction("Load ROM...", self)
        self.load_rom_action.setShortcut("Ctrl+O")
        self.load_rom_action.triggered.connect(self._load_rom)
        file_menu.addAction(self.load_rom_action)

        toolbar = self.addToolBar("Run")
        self.run_action = QAction("Run", self)
        self.run_action.setCheckable(True)
        self.run_action.toggled.connect(self._on_run_toggled)
        toolbar.addAction(self.run_action)

        self.step_action = QAction("Step", self)
        self.step_action.triggered.connect(self.step_instruction)
        toolbar.addAction(self.step_action)

        self.step_back_action = QAction("Step Back", self)
        self.step_back_action.triggered.connect(self.step_back)
        toolbar.addAction(self.step_back_action)

    def is_running(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        self.run_action.setChecked(True)

    def pause(self) -> None:
        self.run_action.setChecked(False)

    @Slot(bool)
    def _on_run_toggled(self, checked: bool) -> None:
        if checked:
            self._timer.start()
            self.statusBar().showMessage("Running")
        else:
            self._timer.stop()
            self.statusBar().showMessage(f"Paused at PC {self.cpu.get_state().pc:#05x}")
        self.step_action.setEnabled(not checked)
        self.step_back_action.setEnabled(not checked)

    # @intent:responsibility 1フレーム分を実行します。フォールト時は実行を止めてステータスバーに表示します。
    @Slot()
    def advance_frame(self) -> None:
        try:
            self.driver.run_frame()
        except Chip8Fault as fault:
            self._report_fault(fault)
        self.debugger.clear_history()
        self.register_view.update_registers()

    # @intent:responsibility 1命令だけ実行します（停止中のデバッグ用）。
    @Slot()
    def step_instruction(self) -> None:
        self.cpu.set_key_states(self.keypad.key_states())
        try:
            snapshot = self.debugger.step_instruction()
        except Chip8Fault as fault:
            self._report_fault(fault)
            return
        self._refresh_display()
        self.register_view.update_registers()
        self.statusBar().showMessage(snapshot.metadata.symbol_info or "")

    # @intent:responsibility 直前の1命令を取り消します（Stepで進めた分のみ）。
    @Slot()
    def step_back(self) -> None:
        snapshot = self.debugger.step_back()
        self.cpu.get_state().should_redraw = True
        self._refresh_display()
        self.register_view.update_registers()
        if snapshot is None:
            self.statusBar().showMessage("Reached start of history.")
        else:
            self.statusBar().showMessage(f"Back to PC {self.cpu.get_state().pc:#05x}")

    def _report_fault(self, fault: Chip8Fault) -> None:
        self.pause()
        self.statusBar().showMessage(f"{type(fault).__name__}: {fault}")

    def _refresh_display(self) -> None:
        pixels = self.cpu.export_frame(self.display_view.encode_pixel)
        if pixels is not None:
            self.display_view.present(pixels)

    @Slot()
    def _load_rom(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Load ROM", "", "CHIP-8 ROM (*.ch8 *.c8);;All Files (*)")
        if not path:
            return
        self.load_rom(path)

    # @intent:responsibility ROMを読み込み直して実行を開始します。失敗した場合は現在のマシンをそのまま残します。
    def load_rom(self, path: str) -> None:
        self.pause()
        try:
            self._setup_backend(path)
        except Chip8Fault as fault:
            self._report_fault(fault)
            return
        self.setWindowTitle(f"CHIP-8 Core Tracer - {path}")
        self.start()

    def keyPressEvent(self, event: QKeyEvent) -> None:
        name = host_key_name(event.key())
        if not event.isAutoRepeat() and name is not None and self.keypad.press_host_key(name):
            return
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent) -> None:
        name = host_key_name(event.key())
        if not event.isAutoRepeat() and name is not None and self.keypad.release_host_key(name):
            return
        super().keyReleaseEvent(event)

    def closeEvent(self, event: QCloseEvent) -> None:
        self._timer.stop()
        super().closeEvent(event)
