# twisty_cube/logic/scramble.py
from __future__ import annotations

import random
from typing import List, Optional

from twisty_cube.core.rotation import DIRECTIONS
from twisty_cube.logic.moves import to_notation

FACES: List[str] = ["U", "D", "L", "R", "F", "B"]


def generate_scramble(n: int, seed: Optional[int] = None) -> str:
    """Genera una secuencia de mezcla (scramble) aleatoria para el cubo.

    Se evita repetir la misma cara en movimientos consecutivos (por ejemplo
    "U U'"), lo que produce scrambles más variados. Solo se usan cuartos de
    vuelta ("R" o "R'") para que cada token sea un único giro.

    Args:
        n: Cantidad de movimientos a generar.
        seed: Semilla opcional para obtener resultados reproducibles.

    Returns:
        Un string con movimientos separados por espacios, por ejemplo "R U' F L ...".

    Raises:
        ValueError: Si `n` es menor o igual a 0.
    """
    if n <= 0:
        raise ValueError("n debe ser mayor que 0.")

    rng = random.Random(seed)

    seq: List[str] = []
    last_face: Optional[str] = None

    for _ in range(n):
        candidates = [f for f in FACES if f != last_face]
        face = rng.choice(candidates)
        last_face = face

        direction = rng.choice(DIRECTIONS)
        seq.append(to_notation(face, direction))

    return " ".join(seq)
