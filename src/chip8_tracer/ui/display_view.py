# chip8_tracer/ui/display_view.py
"""
64x32のフレームバッファを拡大表示するウィジェット。
"""
from typing import List

from PySide6.QtWidgets import QWidget
from PySide6.QtGui import QColor, QImage, QPainter
from PySide6.QtCore import Qt

from chip8_tracer.arch.chip8.state import SCREEN_WIDTH, SCREEN_HEIGHT

# @intent:responsibility FrameSinkとして、受け取ったフレームをQImageに書き込み、拡大して描画します。
class DisplayView(QWidget):
    """
    CHIP-8の画面を表示するウィジェット。
    ピクセル表現は QImage (Format_RGB32) の画素値 0xFFRRGGBB です。
    """
    def __init__(self, scale: int = 10, foreground: str = "#FFFFFF", background: str = "#000000", parent=None):
        super().__init__(parent)
        self._lit = QColor(foreground).rgb()
        self._unlit = QColor(background).rgb()
        self._image = QImage(SCREEN_WIDTH, SCREEN_HEIGHT, QImage.Format.Format_RGB32)
        self._image.fill(QColor(background))
        self.setMinimumSize(SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale)
        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent)

    def encode_pixel(self, cell: int) -> int:
        return self._lit if cell else self._unlit

    def present(self, pixels: List[int]) -> None:
        for index, value in enumerate(pixels):
            self._image.setPixel(index % SCREEN_WIDTH, index // SCREEN_WIDTH, value)
        self.update()

    def image(self) -> QImage:
        return self._image

    # 最近傍で拡大する (平滑化しない)
    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, False)
        painter.drawImage(self.rect(), self._image)
        painter.end()
