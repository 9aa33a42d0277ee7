# twisty_cube/app/sequencer.py
from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional, Tuple, cast

from PySide6.QtCore import QObject, Signal

from twisty_cube.app.scheduler import StepScheduler
from twisty_cube.app.timer import SessionTimer
from twisty_cube.config import SETTLE_MS, STEP_MS
from twisty_cube.core.pieces import PieceStore
from twisty_cube.core.rotation import DIRECTIONS, Direction, rotate
from twisty_cube.logic.moves import VALID_FACES, Move, parse_sequence, parse_token, to_notation

logger = logging.getLogger(__name__)


class MoveSequencer(QObject):
    """Aplica movimientos al cubo, lleva el historial y reproduce algoritmos.

    Coordina:
    - El latch de rotación: mientras un giro "se asienta" (`settle_ms`) se
      rechaza cualquier otro giro o undo. El latch se libera solo, con un paso
      del `StepScheduler`.
    - El historial (notación) y el contador de movimientos.
    - La reproducción de secuencias, un movimiento por paso, separados por
      `step_ms`. Un paso que encuentra el latch tomado (por un giro del
      usuario o un undo) espera a que se libere; nunca se descarta.

    Con `settle_ms <= 0` no hay latch y las secuencias se aplican al instante.

    Signals:
        move_applied(str): Notación del movimiento registrado en el historial.
        history_changed(): Cambió el historial o el contador.
        rotating_changed(bool): Se tomó o liberó el latch.
        playback_finished(): Terminó la cola de reproducción.
    """

    move_applied = Signal(str)
    history_changed = Signal()
    rotating_changed = Signal(bool)
    playback_finished = Signal()

    def __init__(
        self,
        store: PieceStore,
        scheduler: StepScheduler,
        timer: Optional[SessionTimer] = None,
        settle_ms: int = SETTLE_MS,
        step_ms: int = STEP_MS,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._store: PieceStore = store
        self._scheduler = scheduler
        self._timer: Optional[SessionTimer] = timer
        self.settle_ms: int = settle_ms
        self.step_ms: int = step_ms

        self._history: List[str] = []
        self._move_count: int = 0

        self._rotating: bool = False
        self._settle_handle: Optional[int] = None

        self._queue: Deque[Move] = deque()
        self._step_handle: Optional[int] = None
        # La cola espera a que se libere el latch antes del próximo paso
        self._resume_on_release: bool = False

    # --------------------------
    # Estado (solo lectura)
    # --------------------------
    @property
    def store(self) -> PieceStore:
        return self._store

    @property
    def history(self) -> Tuple[str, ...]:
        return tuple(self._history)

    @property
    def move_count(self) -> int:
        return self._move_count

    @property
    def rotating(self) -> bool:
        return self._rotating

    @property
    def playing(self) -> bool:
        return bool(self._queue) or self._step_handle is not None

    # --------------------------
    # Public API
    # --------------------------
    def load(self, store: PieceStore) -> None:
        """Reemplaza el cubo por uno recién construido y limpia el historial.

        Cancela la reproducción pendiente y libera el latch.

        Args:
            store: Piezas nuevas (ya inicializadas).
        """
        self.stop_playback()
        self._scheduler.cancel(self._settle_handle)
        self._settle_handle = None
        self._set_rotating(False)

        self._store = store
        self._history.clear()
        self._move_count = 0
        self.history_changed.emit()

    def reset_counter(self) -> None:
        """Pone el contador de movimientos en cero (el historial se conserva)."""
        self._move_count = 0
        self.history_changed.emit()

    def apply_move(self, face: str, direction: str) -> bool:
        """Aplica un giro de cara y lo registra en el historial.

        Se rechaza (sin modificar nada) si hay un giro en curso o si la cara o
        el sentido no son válidos. El primer movimiento de la sesión inicia el
        cronómetro si está detenido.

        Args:
            face: Cara ("U", "D", "F", "B", "L", "R").
            direction: "clockwise" o "counterclockwise".

        Returns:
            True si el movimiento se aplicó.
        """
        if self._rotating:
            logger.debug("Giro %s %s descartado: rotación en curso", face, direction)
            return False
        valid = isinstance(face, str) and isinstance(direction, str)
        if not valid or face not in VALID_FACES or direction not in DIRECTIONS:
            logger.warning("Movimiento ignorado: cara=%r sentido=%r", face, direction)
            return False

        if self._move_count == 0 and self._timer is not None and not self._timer.running:
            self._timer.start()

        self._turn(face, direction)

        notation = to_notation(face, cast(Direction, direction))
        self._history.append(notation)
        self._move_count += 1

        self.move_applied.emit(notation)
        self.history_changed.emit()
        return True

    def undo(self) -> bool:
        """Revierte el último movimiento del historial.

        Aplica el giro inverso (tomando el latch), quita del historial el
        movimiento deshecho y resta 1 al contador. El giro compensatorio no se
        registra.

        Returns:
            True si se deshizo un movimiento; False si no hay historial o hay
            un giro en curso.
        """
        if self._rotating or not self._history:
            return False

        last = self._history[-1]
        inv = parse_token(last)[0].inverse()
        self._turn(inv.face, inv.direction)

        self._history.pop()
        self._move_count = max(0, self._move_count - 1)
        self.history_changed.emit()
        return True

    def play_algorithm(self, sequence: str) -> int:
        """Reproduce una secuencia de movimientos ("R U R' U'").

        Los tokens inválidos se descartan. Si ya hay una reproducción en curso,
        los movimientos se agregan al final de la misma cola.

        Args:
            sequence: Movimientos separados por espacios.

        Returns:
            Cantidad de movimientos encolados (o aplicados, en modo instantáneo).
        """
        moves = parse_sequence(sequence, strict=False)
        if not moves:
            if not self.playing:
                self.playback_finished.emit()
            return 0

        if self.settle_ms <= 0:
            for m in moves:
                self.apply_move(m.face, m.direction)
            self.playback_finished.emit()
            return len(moves)

        self._queue.extend(moves)
        if self._step_handle is None and not self._resume_on_release:
            self._step_handle = self._scheduler.call_later(0, self._play_step)
        return len(moves)

    def stop_playback(self) -> bool:
        """Cancela la reproducción: el paso ya planificado no llega a ejecutarse.

        Returns:
            True si había algo pendiente.
        """
        was_playing = self.playing
        self._scheduler.cancel(self._step_handle)
        self._step_handle = None
        self._resume_on_release = False
        self._queue.clear()
        return was_playing

    # --------------------------
    # Internos
    # --------------------------
    def _turn(self, face: str, direction: str) -> None:
        rotate(self._store, face, direction)
        self._hold_latch()

    def _hold_latch(self) -> None:
        if self.settle_ms <= 0:
            return
        self._set_rotating(True)
        self._settle_handle = self._scheduler.call_later(self.settle_ms, self._release_latch)

    def _release_latch(self) -> None:
        self._settle_handle = None
        self._set_rotating(False)
        if self._resume_on_release and self._step_handle is None:
            self._resume_on_release = False
            self._step_handle = self._scheduler.call_later(0, self._play_step)

    def _set_rotating(self, value: bool) -> None:
        if self._rotating == value:
            return
        self._rotating = value
        self.rotating_changed.emit(value)

    def _play_step(self) -> None:
        self._step_handle = None
        if not self._queue:
            return
        if self._rotating:
            self._resume_on_release = True
            return

        move = self._queue.popleft()
        self.apply_move(move.face, move.direction)

        if self._queue:
            self._step_handle = self._scheduler.call_later(self.step_ms, self._play_step)
        else:
            self.playback_finished.emit()
