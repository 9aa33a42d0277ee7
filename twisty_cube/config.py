# twisty_cube/config.py
from __future__ import annotations

import os
from typing import Tuple


def _env_int(name: str, default: int) -> int:
    """Lee un entero desde una variable de entorno.

    Args:
        name: Nombre de la variable.
        default: Valor usado si la variable no existe o no es un entero.

    Returns:
        El entero leído o `default`.
    """
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Tamaños de cubo soportados (NxN)
SUPPORTED_SIZES: Tuple[int, ...] = (2, 3, 4)
DEFAULT_SIZE: int = 3
DEFAULT_THEME: str = "classic"

# Tiempos en milisegundos
SETTLE_MS: int = _env_int("TWISTY_CUBE_SETTLE_MS", 500)
STEP_MS: int = _env_int("TWISTY_CUBE_STEP_MS", 600)  # un poco más que SETTLE_MS
AUTO_PLAY_DELAY_MS: int = _env_int("TWISTY_CUBE_AUTO_PLAY_DELAY_MS", 2000)
TIMER_INTERVAL_MS: int = _env_int("TWISTY_CUBE_TIMER_INTERVAL_MS", 100)

SCRAMBLE_LENGTH: int = 25

LOG_LEVEL: str = os.environ.get("TWISTY_CUBE_LOG_LEVEL", "INFO").upper()
