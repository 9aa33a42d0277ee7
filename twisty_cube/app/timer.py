# twisty_cube/app/timer.py
from __future__ import annotations

import time
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal

from twisty_cube.app.scheduler import StepScheduler
from twisty_cube.config import TIMER_INTERVAL_MS

Clock = Callable[[], float]


def format_time(seconds: float) -> str:
    """Formatea segundos como "MM:SS.cc"."""
    total = int(round(seconds * 100))
    minutes, rest = divmod(total, 6000)
    secs, centis = divmod(rest, 100)
    return f"{minutes:02d}:{secs:02d}.{centis:02d}"


class SessionTimer(QObject):
    """Cronómetro de la sesión.

    Acumula tiempo con un tick periódico propio (independiente del latch de
    rotación), de modo que sigue contando aunque haya un giro en curso.

    Signals:
        tick(float): Segundos acumulados, emitido en cada tick.
        running_changed(bool): Se emite al iniciar/pausar.
    """

    tick = Signal(float)
    running_changed = Signal(bool)

    def __init__(
        self,
        scheduler: StepScheduler,
        clock: Clock = time.monotonic,
        interval_ms: int = TIMER_INTERVAL_MS,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._scheduler = scheduler
        self._clock: Clock = clock
        self._interval_ms: int = interval_ms

        self._elapsed: float = 0.0
        self._last: float = 0.0
        self._handle: Optional[int] = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    @property
    def elapsed(self) -> float:
        """Segundos acumulados, incluyendo la fracción desde el último tick."""
        if self.running:
            return self._elapsed + (self._clock() - self._last)
        return self._elapsed

    def start(self) -> None:
        if self.running:
            return
        self._last = self._clock()
        self._handle = self._scheduler.call_every(self._interval_ms, self._on_tick)
        self.running_changed.emit(True)

    def pause(self) -> None:
        if not self.running:
            return
        self._accumulate()
        self._scheduler.cancel(self._handle)
        self._handle = None
        self.running_changed.emit(False)

    def toggle(self) -> None:
        if self.running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        """Detiene el cronómetro y vuelve a cero."""
        self.pause()
        self._elapsed = 0.0
        self.tick.emit(0.0)

    def _accumulate(self) -> None:
        now = self._clock()
        self._elapsed += now - self._last
        self._last = now

    def _on_tick(self) -> None:
        self._accumulate()
        self.tick.emit(self._elapsed)
