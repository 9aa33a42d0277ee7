# twisty_cube/app/session.py
from __future__ import annotations

import logging
import time
from typing import Any, NamedTuple, Optional, Sequence, Tuple, Union

from PySide6.QtCore import QObject, Signal

from twisty_cube.app.scheduler import StepScheduler
from twisty_cube.app.sequencer import MoveSequencer
from twisty_cube.app.timer import Clock, SessionTimer
from twisty_cube.config import (
    AUTO_PLAY_DELAY_MS,
    DEFAULT_SIZE,
    DEFAULT_THEME,
    SCRAMBLE_LENGTH,
    SETTLE_MS,
    STEP_MS,
    SUPPORTED_SIZES,
)
from twisty_cube.core.pieces import Piece, PieceStore
from twisty_cube.core.rotation import CLOCKWISE
from twisty_cube.logic.catalog import (
    THEMES,
    Palette,
    algorithm_steps,
    get_palette,
    get_pattern,
    is_valid_palette,
    resolve_palette,
)
from twisty_cube.logic.scramble import generate_scramble

logger = logging.getLogger(__name__)

CUSTOM_THEME = "custom"
Theme = Union[str, Sequence[str]]


class CubeSnapshot(NamedTuple):
    """Foto inmutable del estado de la sesión, para el render/UI."""

    size: int
    theme: str
    palette: Palette
    pieces: Tuple[Piece, ...]
    history: Tuple[str, ...]
    move_count: int
    elapsed: float
    timer_running: bool
    hint: str
    rotating: bool
    playing: bool
    auto_playing: bool
    auto_play_step: int


class CubeSession(QObject):
    """Superficie de comandos del cubo para la UI (botones, teclado, render).

    Agrupa el `MoveSequencer`, el cronómetro y el catálogo de temas/patrones.
    Las entradas inválidas (cara, tema, patrón o tamaño desconocidos) no
    lanzan excepciones: se ignoran o se reemplazan por el valor por defecto.

    Las pistas y el auto-play recorren una lista fija de algoritmos; no
    analizan el estado del cubo.

    Signals:
        state_changed(): Cambió algo visible (piezas, historial, latch, ...).
        hint_changed(str): Nuevo texto de pista.
        auto_play_changed(bool): Se inició o terminó el auto-play.
    """

    state_changed = Signal()
    hint_changed = Signal(str)
    auto_play_changed = Signal(bool)

    def __init__(
        self,
        size: int = DEFAULT_SIZE,
        theme: Theme = DEFAULT_THEME,
        scheduler: Optional[StepScheduler] = None,
        clock: Clock = time.monotonic,
        animated: bool = True,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.scheduler = scheduler if scheduler is not None else StepScheduler(self)
        self.timer: SessionTimer = SessionTimer(self.scheduler, clock, parent=self)

        self.size: int = self._validate_size(size)
        self.theme, self.palette = self._resolve_theme(theme)

        self.sequencer: MoveSequencer = MoveSequencer(
            self._build_store(),
            self.scheduler,
            self.timer,
            settle_ms=SETTLE_MS if animated else 0,
            step_ms=STEP_MS,
            parent=self,
        )
        self.sequencer.history_changed.connect(self._emit_state)
        self.sequencer.rotating_changed.connect(self._emit_state)
        self.sequencer.playback_finished.connect(self._on_playback_finished)

        self._hint: str = ""
        self._auto_playing: bool = False
        self._auto_step: int = 0
        self._auto_handle: Optional[int] = None

    # --------------------------
    # Estado (solo lectura)
    # --------------------------
    @property
    def store(self) -> PieceStore:
        return self.sequencer.store

    @property
    def hint(self) -> str:
        return self._hint

    @property
    def auto_playing(self) -> bool:
        return self._auto_playing

    @property
    def auto_play_step(self) -> int:
        return self._auto_step

    def snapshot(self) -> CubeSnapshot:
        """Devuelve una copia inmutable del estado actual."""
        seq = self.sequencer
        return CubeSnapshot(
            size=self.size,
            theme=self.theme,
            palette=self.palette,
            pieces=seq.store.snapshot(),
            history=seq.history,
            move_count=seq.move_count,
            elapsed=self.timer.elapsed,
            timer_running=self.timer.running,
            hint=self._hint,
            rotating=seq.rotating,
            playing=seq.playing,
            auto_playing=self._auto_playing,
            auto_play_step=self._auto_step,
        )

    # --------------------------
    # Movimientos
    # --------------------------
    def rotate_face(self, face: str, direction: str = CLOCKWISE) -> bool:
        """Gira una cara. Devuelve False si se descartó (latch o entrada inválida)."""
        if isinstance(face, str):
            face = face.strip().upper()
        return self.sequencer.apply_move(face, direction)

    def undo(self) -> bool:
        return self.sequencer.undo()

    def play_algorithm(self, sequence: str) -> int:
        return self.sequencer.play_algorithm(sequence)

    def scramble(self, n: int = SCRAMBLE_LENGTH, seed: Optional[int] = None) -> str:
        """Mezcla el cubo con `n` movimientos aleatorios.

        Returns:
            La secuencia usada ("" si `n` no es válido).
        """
        try:
            seq = generate_scramble(n, seed)
        except ValueError as exc:
            logger.warning("Scramble ignorado: %s", exc)
            return ""
        self.sequencer.play_algorithm(seq)
        return seq

    # --------------------------
    # Reconstrucción del cubo
    # --------------------------
    def reset_cube(self) -> None:
        """Vuelve al cubo resuelto: nuevas piezas, historial y cronómetro en cero."""
        self.stop_auto_play()
        self.sequencer.load(self._build_store())
        self.timer.reset()
        self._emit_state()

    def change_cube_size(self, size: int) -> None:
        self.size = self._validate_size(size)
        self.reset_cube()

    def change_color_theme(self, theme: Theme) -> None:
        self.theme, self.palette = self._resolve_theme(theme)
        self.reset_cube()

    def apply_pattern(self, name: str) -> None:
        """Resetea el cubo y reproduce el patrón `name` (queda resuelto si no tiene movimientos)."""
        seq = get_pattern(name)
        self.reset_cube()
        if seq:
            self.sequencer.play_algorithm(seq)

    # --------------------------
    # Cronómetro
    # --------------------------
    def toggle_timer(self) -> None:
        self.timer.toggle()
        self._emit_state()

    def reset_timer(self) -> None:
        """Detiene el cronómetro y pone en cero tiempo y contador."""
        self.timer.reset()
        self.sequencer.reset_counter()

    # --------------------------
    # Pistas / auto-play (guionado)
    # --------------------------
    def get_hint(self) -> str:
        """Texto del algoritmo correspondiente al paso actual del recorrido."""
        steps = algorithm_steps()
        name, seq = steps[self._auto_step % len(steps)]
        self._hint = f"{name}: {seq}"
        self.hint_changed.emit(self._hint)
        return self._hint

    def start_auto_play(self) -> bool:
        """Reproduce los algoritmos del catálogo uno tras otro.

        Cada algoritmo arranca `AUTO_PLAY_DELAY_MS` después de terminar el
        anterior.

        Returns:
            False si ya estaba en marcha.
        """
        if self._auto_playing:
            return False
        self._auto_playing = True
        self._auto_step = 0
        self._auto_handle = self.scheduler.call_later(AUTO_PLAY_DELAY_MS, self._auto_play_tick)
        self.auto_play_changed.emit(True)
        self._emit_state()
        return True

    def stop_auto_play(self) -> bool:
        """Detiene el auto-play y cancela los pasos ya planificados.

        Returns:
            False si no estaba en marcha.
        """
        if not self._auto_playing:
            return False
        self.scheduler.cancel(self._auto_handle)
        self._auto_handle = None
        self.sequencer.stop_playback()
        self._auto_playing = False
        self.auto_play_changed.emit(False)
        self._emit_state()
        return True

    def _auto_play_tick(self) -> None:
        self._auto_handle = None
        if not self._auto_playing:
            return

        steps = algorithm_steps()
        if self._auto_step >= len(steps):
            self._finish_auto_play()
            return

        name, seq = steps[self._auto_step]
        self._auto_step += 1
        logger.info("Auto-play paso %d/%d: %s", self._auto_step, len(steps), name)
        self.sequencer.play_algorithm(seq)

    def _on_playback_finished(self) -> None:
        if not self._auto_playing or self._auto_handle is not None:
            return
        if self._auto_step >= len(algorithm_steps()):
            self._finish_auto_play()
            return
        self._auto_handle = self.scheduler.call_later(AUTO_PLAY_DELAY_MS, self._auto_play_tick)

    def _finish_auto_play(self) -> None:
        self._auto_playing = False
        self._auto_step = 0
        self.auto_play_changed.emit(False)
        self._emit_state()

    # --------------------------
    # Helpers
    # --------------------------
    def _build_store(self) -> PieceStore:
        return PieceStore.initialize(self.size, self.palette)

    def _emit_state(self, *_args: object) -> None:
        self.state_changed.emit()

    @staticmethod
    def _validate_size(size: Any) -> int:
        try:
            value = int(size)
        except (TypeError, ValueError):
            value = -1
        if value not in SUPPORTED_SIZES:
            logger.warning("Tamaño no soportado %r, se usa %d", size, DEFAULT_SIZE)
            return DEFAULT_SIZE
        return value

    @staticmethod
    def _resolve_theme(theme: Theme) -> Tuple[str, Palette]:
        if isinstance(theme, str):
            name = theme if theme in THEMES else DEFAULT_THEME
            return name, get_palette(theme)

        if is_valid_palette(theme):
            return CUSTOM_THEME, resolve_palette(theme)
        return DEFAULT_THEME, resolve_palette(theme)
