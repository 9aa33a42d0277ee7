# twisty_cube/app/main_window.py
from __future__ import annotations

from typing import List, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QKeyEvent
from PySide6.QtWidgets import (
    QComboBox,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from twisty_cube.app.session import CubeSession
from twisty_cube.app.timer import format_time
from twisty_cube.config import SUPPORTED_SIZES
from twisty_cube.core.rotation import CLOCKWISE, COUNTERCLOCKWISE
from twisty_cube.logic.catalog import PATTERNS, THEMES
from twisty_cube.render.net_view import NetView

FACE_ORDER: List[str] = ["U", "D", "F", "B", "L", "R"]


class MainWindow(QMainWindow):
    """Ventana principal: controles del cubo + vista desplegada.

    Solo consume la `CubeSession`: manda comandos y redibuja a partir de
    `snapshot()` cuando la sesión avisa un cambio.
    """

    def __init__(self, session: Optional[CubeSession] = None) -> None:
        """Crea la UI y conecta señales de la sesión."""
        super().__init__()
        self.setWindowTitle("Twisty Cube - PySide6")

        self.session: CubeSession = session if session is not None else CubeSession(parent=self)
        self.net_view: NetView = NetView(self)

        root = QWidget()
        root_layout = QHBoxLayout(root)
        root_layout.addWidget(self.net_view, 1)

        panel = QWidget()
        panel_layout = QVBoxLayout(panel)
        panel.setFixedWidth(320)

        # Estadísticas
        row_stats = QHBoxLayout()
        self.lbl_time = QLabel(format_time(0.0))
        self.lbl_moves = QLabel("Movimientos: 0")
        self.btn_timer = QPushButton("Start")
        self.btn_reset_timer = QPushButton("Reset timer")
        row_stats.addWidget(self.lbl_time)
        row_stats.addWidget(self.lbl_moves)
        panel_layout.addLayout(row_stats)
        row_timer = QHBoxLayout()
        row_timer.addWidget(self.btn_timer)
        row_timer.addWidget(self.btn_reset_timer)
        panel_layout.addLayout(row_timer)

        # Botones de cara (horario / antihorario)
        panel_layout.addWidget(QLabel("Caras (Shift = antihorario)"))
        grid = QGridLayout()
        for col, face in enumerate(FACE_ORDER):
            btn_cw = QPushButton(face)
            btn_ccw = QPushButton(face + "'")
            btn_cw.clicked.connect(lambda _=False, f=face: self.session.rotate_face(f, CLOCKWISE))
            btn_ccw.clicked.connect(lambda _=False, f=face: self.session.rotate_face(f, COUNTERCLOCKWISE))
            grid.addWidget(btn_cw, 0, col)
            grid.addWidget(btn_ccw, 1, col)
        panel_layout.addLayout(grid)

        # Personalización
        self.cmb_size = QComboBox()
        for s in SUPPORTED_SIZES:
            self.cmb_size.addItem(f"{s}×{s}", s)
        self.cmb_size.setCurrentIndex(self.cmb_size.findData(self.session.size))

        self.cmb_theme = QComboBox()
        self.cmb_theme.addItems(list(THEMES))
        self.cmb_theme.setCurrentText(self.session.theme)

        self.cmb_pattern = QComboBox()
        self.cmb_pattern.addItems(list(PATTERNS))

        panel_layout.addWidget(QLabel("Tamaño"))
        panel_layout.addWidget(self.cmb_size)
        panel_layout.addWidget(QLabel("Tema"))
        panel_layout.addWidget(self.cmb_theme)
        panel_layout.addWidget(QLabel("Patrón"))
        panel_layout.addWidget(self.cmb_pattern)

        # Historial
        panel_layout.addWidget(QLabel("Historial de movimientos"))
        self.list_history = QListWidget()
        panel_layout.addWidget(self.list_history, 1)

        row_main = QHBoxLayout()
        self.btn_undo = QPushButton("Undo")
        self.btn_reset = QPushButton("Reset")
        self.btn_scramble = QPushButton("Scramble")
        row_main.addWidget(self.btn_undo)
        row_main.addWidget(self.btn_reset)
        row_main.addWidget(self.btn_scramble)
        panel_layout.addLayout(row_main)

        # Asistente (guionado)
        panel_layout.addWidget(QLabel("Asistente"))
        row_assist = QHBoxLayout()
        self.btn_hint = QPushButton("Pista")
        self.btn_auto = QPushButton("Auto-play")
        row_assist.addWidget(self.btn_hint)
        row_assist.addWidget(self.btn_auto)
        panel_layout.addLayout(row_assist)
        self.lbl_hint = QLabel("")
        self.lbl_hint.setWordWrap(True)
        panel_layout.addWidget(self.lbl_hint)

        root_layout.addWidget(panel)
        self.setCentralWidget(root)

        # --- Conexiones ---
        self.btn_timer.clicked.connect(self.session.toggle_timer)
        self.btn_reset_timer.clicked.connect(self.session.reset_timer)
        self.btn_undo.clicked.connect(self.session.undo)
        self.btn_reset.clicked.connect(self.session.reset_cube)
        self.btn_scramble.clicked.connect(lambda: self.session.scramble())
        self.btn_hint.clicked.connect(self.session.get_hint)
        self.btn_auto.clicked.connect(self.on_toggle_auto_play)

        self.cmb_size.currentIndexChanged.connect(
            lambda _i: self.session.change_cube_size(self.cmb_size.currentData())
        )
        self.cmb_theme.currentTextChanged.connect(self.session.change_color_theme)
        self.cmb_pattern.activated.connect(
            lambda _i: self.session.apply_pattern(self.cmb_pattern.currentText())
        )

        self.session.state_changed.connect(self.refresh)
        self.session.hint_changed.connect(self.lbl_hint.setText)
        self.session.auto_play_changed.connect(self._on_auto_play_changed)
        self.session.timer.tick.connect(lambda secs: self.lbl_time.setText(format_time(secs)))

        self.btn_undo.setShortcut("Ctrl+Z")
        self.setFocusPolicy(Qt.StrongFocus)

        self.refresh()

    # -------------------
    # Helpers UI
    # -------------------
    def refresh(self) -> None:
        """Redibuja todo a partir de una foto de la sesión."""
        snap = self.session.snapshot()
        self.net_view.set_pieces(snap.pieces, snap.size)

        self.lbl_moves.setText(f"Movimientos: {snap.move_count}")
        self.lbl_time.setText(format_time(snap.elapsed))
        self.btn_timer.setText("Pause" if snap.timer_running else "Start")

        self.list_history.clear()
        self.list_history.addItems(list(snap.history))
        self.list_history.scrollToBottom()
        self.btn_undo.setEnabled(bool(snap.history) and not snap.rotating)

    def on_toggle_auto_play(self) -> None:
        if self.session.auto_playing:
            self.session.stop_auto_play()
        else:
            self.session.start_auto_play()

    def _on_auto_play_changed(self, running: bool) -> None:
        self.btn_auto.setText("Detener auto-play" if running else "Auto-play")

    # -------------------
    # Teclado
    # -------------------
    def keyPressEvent(self, event: QKeyEvent) -> None:
        """Teclas: U D F B L R (Shift = antihorario), Espacio = cronómetro.

        Args:
            event: Evento de teclado de Qt.
        """
        face = event.text().upper()
        if face in FACE_ORDER and not (event.modifiers() & Qt.ControlModifier):
            shift = bool(event.modifiers() & Qt.ShiftModifier)
            self.session.rotate_face(face, COUNTERCLOCKWISE if shift else CLOCKWISE)
            event.accept()
            return

        if event.key() == Qt.Key_Space:
            self.session.toggle_timer()
            event.accept()
            return

        super().keyPressEvent(event)

    def closeEvent(self, event: QCloseEvent) -> None:
        """Al cerrar: cancela auto-play y todos los pasos planificados."""
        self.session.stop_auto_play()
        self.session.scheduler.cancel_all()
        event.accept()
