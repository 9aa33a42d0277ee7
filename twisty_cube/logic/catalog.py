# twisty_cube/logic/catalog.py
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple, Union

from twisty_cube.config import DEFAULT_THEME

logger = logging.getLogger(__name__)

Palette = Tuple[str, ...]

# Orden de la paleta: [down, right, front, left, back, up]
THEMES: Dict[str, Palette] = {
    "classic": ("white", "red", "blue", "orange", "green", "yellow"),
    "pastel": ("#f5f5f5", "#ffcccb", "#add8e6", "#ffdab9", "#98fb98", "#fffacd"),
    "neon": ("#ffffff", "#ff0066", "#00ccff", "#ff9900", "#00ff66", "#ffff00"),
    "grayscale": ("#ffffff", "#cccccc", "#999999", "#666666", "#333333", "#111111"),
}

DEFAULT_PALETTE: Palette = THEMES[DEFAULT_THEME]

# Patrones: se aplican sobre el cubo resuelto
PATTERNS: Dict[str, str] = {
    "solved": "",
    "checkerboard": "R L U D F B R L U D F B",
    "flower": "F R U B L F R U B L",
    "cube_in_cube": "F L F U' R U F F L L U' R' D' B B R R U'",
}

# Algoritmos del "asistente": se reproducen en este orden (no es un solver)
ALGORITHMS: Dict[str, str] = {
    "white_cross": "F R U R' U' F'",
    "first_layer_corner": "R U R' U'",
    "second_layer": "U R U' R' U' F' U F",
    "yellow_cross": "F R U R' U' F'",
    "yellow_corners": "R U R' U R U U R'",
    "final_corners": "R' F R' B B R F' R' B B R R",
}


def get_palette(name: str) -> Palette:
    """Busca la paleta de un tema; si no existe devuelve la clásica."""
    palette = THEMES.get(name)
    if palette is None:
        logger.warning("Tema desconocido %r, se usa %r", name, DEFAULT_THEME)
        return DEFAULT_PALETTE
    return palette


def is_valid_palette(colors: object) -> bool:
    """Indica si `colors` es una secuencia de 6 colores (strings no vacíos)."""
    if isinstance(colors, str) or not isinstance(colors, (list, tuple)):
        return False
    return len(colors) == len(DEFAULT_PALETTE) and all(isinstance(c, str) and c for c in colors)


def resolve_palette(theme: Union[str, Sequence[str], None]) -> Palette:
    """Acepta un nombre de tema o una lista explícita de 6 colores.

    Args:
        theme: Nombre de tema, secuencia de colores o None.

    Returns:
        Una paleta válida (la clásica si `theme` no sirve).
    """
    if theme is None:
        return DEFAULT_PALETTE
    if isinstance(theme, str):
        return get_palette(theme)

    if not is_valid_palette(theme):
        logger.warning("Paleta inválida %r, se usa %r", theme, DEFAULT_THEME)
        return DEFAULT_PALETTE
    return tuple(theme)


def get_pattern(name: str) -> str:
    """Secuencia del patrón `name` ("" si no existe o no tiene movimientos)."""
    seq: Optional[str] = PATTERNS.get(name)
    if seq is None:
        logger.warning("Patrón desconocido: %r", name)
        return ""
    return seq


def algorithm_steps() -> List[Tuple[str, str]]:
    """Pasos (nombre, secuencia) del recorrido guionado de pistas/auto-play."""
    return list(ALGORITHMS.items())
