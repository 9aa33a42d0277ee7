# twisty_cube/render/net_view.py
from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QColor, QPainter, QPaintEvent, QPen
from PySide6.QtWidgets import QWidget

from twisty_cube.core.pieces import Face, Piece, Sticker, face_stickers

# Posición (columna, fila) de cada cara en la cruz desplegada:
#        U
#     L  F  R  B
#        D
NET_LAYOUT: Dict[Face, Tuple[int, int]] = {
    "U": (1, 0),
    "L": (0, 1),
    "F": (1, 1),
    "R": (2, 1),
    "B": (3, 1),
    "D": (1, 2),
}


class NetView(QWidget):
    """Vista 2D del cubo desplegado (cruz), dibujada con QPainter.

    Solo lee fotos inmutables de las piezas (`set_pieces`); no guarda
    referencias al estado mutable del cubo.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._pieces: Tuple[Piece, ...] = ()
        self._size: int = 3
        self.gap: float = 6.0
        self.setMinimumSize(360, 280)

    def set_pieces(self, pieces: Sequence[Piece], size: int) -> None:
        """Actualiza la foto de piezas y redibuja.

        Args:
            pieces: Piezas del cubo (por ejemplo `CubeSnapshot.pieces`).
            size: Lado del cubo.
        """
        self._pieces = tuple(pieces)
        self._size = size
        self.update()

    def paintEvent(self, event: QPaintEvent) -> None:
        """Dibuja las 6 caras."""
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), QColor(26, 26, 31))

        if not self._pieces:
            painter.end()
            return

        face_px = min((self.width() - 5 * self.gap) / 4.0, (self.height() - 4 * self.gap) / 3.0)
        cell = face_px / self._size
        pen = QPen(QColor(0, 0, 0))
        pen.setWidthF(1.5)
        painter.setPen(pen)

        for face, (col, row) in NET_LAYOUT.items():
            ox = self.gap + col * (face_px + self.gap)
            oy = self.gap + row * (face_px + self.gap)
            grid = face_stickers(self._pieces, self._size, face)
            for r, line in enumerate(grid):
                for c, sticker in enumerate(line):
                    rect = QRectF(ox + c * cell, oy + r * cell, cell, cell)
                    painter.setBrush(self._qcolor(sticker))
                    painter.drawRect(rect)

            painter.drawText(QRectF(ox, oy, face_px, face_px), Qt.AlignCenter, face)

        painter.end()

    @staticmethod
    def _qcolor(sticker: Sticker) -> QColor:
        """Convierte un color del modelo a QColor (el fondo se dibuja negro)."""
        if sticker is None:
            return QColor(0, 0, 0)
        color = QColor(sticker)
        if not color.isValid():
            return QColor(204, 204, 204)
        return color
