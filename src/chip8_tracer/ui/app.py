# chip8_tracer/ui/app.py
"""
Qtアプリケーションのエントリポイント。
アプリケーションを初期化し、メインウィンドウを起動します。
"""
import argparse
import sys
from PySide6.QtWidgets import QApplication

from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.models import SystemConfig
from .main_window import MainWindow

def main():
    parser = argparse.ArgumentParser(prog="chip8-tracer", description="CHIP-8 emulator with a register view.")
    parser.add_argument("rom", nargs="?", help="path to the ROM image")
    parser.add_argument("--config", help="YAML configuration file")
    args, qt_args = parser.parse_known_args()

    config = ConfigLoader().load_from_file(args.config) if args.config else SystemConfig()

    app = QApplication([sys.argv[0]] + qt_args)
    main_win = MainWindow(config, args.rom)
    main_win.show()
    if args.rom or config.rom:
        main_win.start()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
