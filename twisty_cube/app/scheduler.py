# twisty_cube/app/scheduler.py
from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

from PySide6.QtCore import QObject, QTimer

Callback = Callable[[], None]


class StepScheduler(QObject):
    """Planificador de pasos diferidos sobre el event loop de Qt.

    Cada llamada a `call_later`/`call_every` crea su propio `QTimer` y devuelve
    un handle entero. `cancel(handle)` detiene el timer, así que un paso
    cancelado nunca se ejecuta (no depende de revisar un flag al dispararse).
    """

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._timers: Dict[int, Tuple[QTimer, Callback, bool]] = {}
        self._next_handle: int = 1

    # --------------------------
    # Public API
    # --------------------------
    def call_later(self, delay_ms: int, callback: Callback) -> int:
        """Ejecuta `callback` una vez, luego de `delay_ms` milisegundos.

        Args:
            delay_ms: Demora en milisegundos (0 = próxima vuelta del event loop).
            callback: Función sin argumentos.

        Returns:
            Handle para cancelar el paso.
        """
        return self._start(delay_ms, callback, repeat=False)

    def call_every(self, interval_ms: int, callback: Callback) -> int:
        """Ejecuta `callback` cada `interval_ms` milisegundos hasta cancelarlo."""
        return self._start(interval_ms, callback, repeat=True)

    def cancel(self, handle: Optional[int]) -> bool:
        """Cancela un paso pendiente.

        Args:
            handle: Handle devuelto por `call_later`/`call_every` (None se ignora).

        Returns:
            True si había algo pendiente con ese handle.
        """
        if handle is None:
            return False
        entry = self._timers.pop(handle, None)
        if entry is None:
            return False
        timer = entry[0]
        timer.stop()
        timer.deleteLater()
        return True

    def cancel_all(self) -> None:
        """Cancela todos los pasos pendientes."""
        for handle in list(self._timers):
            self.cancel(handle)

    def pending(self) -> int:
        """Cantidad de pasos pendientes (incluye repetitivos)."""
        return len(self._timers)

    # --------------------------
    # Internos
    # --------------------------
    def _start(self, delay_ms: int, callback: Callback, repeat: bool) -> int:
        handle = self._next_handle
        self._next_handle += 1

        timer = QTimer(self)
        timer.setSingleShot(not repeat)
        timer.setInterval(max(0, int(delay_ms)))
        timer.timeout.connect(lambda h=handle: self._fire(h))

        self._timers[handle] = (timer, callback, repeat)
        timer.start()
        return handle

    def _fire(self, handle: int) -> None:
        entry = self._timers.get(handle)
        if entry is None:
            return  # cancelado

        timer, callback, repeat = entry
        if not repeat:
            del self._timers[handle]
            timer.deleteLater()
        callback()
