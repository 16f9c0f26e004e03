import os
import sys
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QColor

from chip8_tracer.ui.display_view import DisplayView
from tests.arch.chip8.helpers import build_cpu, write_program

class TestDisplayView(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def test_minimum_size_follows_scale(self):
        view = DisplayView(scale=4)
        self.assertEqual(view.minimumWidth(), 256)
        self.assertEqual(view.minimumHeight(), 128)

    def test_encode_pixel_uses_configured_colors(self):
        view = DisplayView(foreground="#33FF66", background="#101010")
        self.assertEqual(view.encode_pixel(1), QColor("#33FF66").rgb())
        self.assertEqual(view.encode_pixel(0), QColor("#101010").rgb())

    def test_present_exported_frame(self):
        """CPUが書き出したフレームがそのままQImageに反映されることを検証します。"""
        cpu, bus = build_cpu()
        write_program(bus, [0x6002, 0xD015])  # x=2 に "0" を描画
        cpu.step()
        cpu.step()

        view = DisplayView()
        view.present(cpu.export_frame(view.encode_pixel))

        image = view.image()
        self.assertEqual(image.pixelColor(2, 0), QColor("#FFFFFF"))
        self.assertEqual(image.pixelColor(3, 1), QColor("#000000"))
        self.assertEqual(image.pixelColor(5, 1), QColor("#FFFFFF"))
        self.assertEqual(image.pixelColor(0, 0), QColor("#000000"))

if __name__ == '__main__':
    unittest.main()
