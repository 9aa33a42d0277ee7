# twisty_cube/logic/moves.py
from __future__ import annotations

import logging
from typing import List, NamedTuple, Set

from twisty_cube.core.rotation import CLOCKWISE, COUNTERCLOCKWISE, Direction, opposite

logger = logging.getLogger(__name__)

VALID_FACES: Set[str] = {"U", "D", "L", "R", "F", "B"}
VALID_SUFFIX: Set[str] = {"", "'", "2"}
PRIME = "'"


class Move(NamedTuple):
    """Movimiento de una cara: (cara, sentido)."""

    face: str
    direction: Direction

    @property
    def notation(self) -> str:
        return to_notation(self.face, self.direction)

    def inverse(self) -> "Move":
        return Move(self.face, opposite(self.direction))


def to_notation(face: str, direction: Direction) -> str:
    """Convierte (cara, sentido) a notación: "R" horario, "R'" antihorario."""
    return face + (PRIME if direction == COUNTERCLOCKWISE else "")


def normalize_token(tok: str) -> str:
    """Normaliza un token de movimiento a un formato estándar.

    Reglas principales:
    - Elimina espacios y convierte comilla tipográfica (’ o ‘) a comilla simple (').
    - Acepta una cara con sufijo opcional: "" (ej: "R"), "'" (ej: "R'") o "2" (ej: "R2").
    - Corrige el caso típico "D2'" -> "D2" (el inverso de un 180° es el mismo).

    Args:
        tok: Token de movimiento (por ejemplo: "R", "U'", "F2", "D2'").

    Returns:
        Token normalizado (por ejemplo: "D2'" -> "D2").

    Raises:
        ValueError: Si la cara no es válida o si el sufijo no es válido.
    """
    tok = tok.strip().replace("’", "'").replace("‘", "'")
    if not tok:
        return ""

    base = tok[0]
    suf = tok[1:]

    if base not in VALID_FACES:
        raise ValueError(f"Movimiento inválido: {tok}")

    if suf == "2'":
        suf = "2"

    if suf not in VALID_SUFFIX:
        raise ValueError(f"Sufijo inválido en: {tok}")

    return base + suf


def parse_token(tok: str) -> List[Move]:
    """Convierte un token en la lista de cuartos de vuelta que representa.

    "R" -> [R horario], "R'" -> [R antihorario], "R2" -> [R, R].

    Args:
        tok: Token de movimiento.

    Returns:
        Lista de `Move` (vacía si el token está vacío).

    Raises:
        ValueError: Si el token es inválido.
    """
    tok = normalize_token(tok)
    if not tok:
        return []

    face, suf = tok[0], tok[1:]
    if suf == PRIME:
        return [Move(face, COUNTERCLOCKWISE)]
    if suf == "2":
        return [Move(face, CLOCKWISE), Move(face, CLOCKWISE)]
    return [Move(face, CLOCKWISE)]


def parse_sequence(text: str, strict: bool = True) -> List[Move]:
    """Convierte una secuencia escrita como texto en una lista de movimientos.

    La entrada separa movimientos por espacios. Por ejemplo:
        "R U R' U'" -> [R, U, R', U']

    Args:
        text: Secuencia de movimientos.
        strict: Si True, un token inválido lanza `ValueError`; si False, se
            descarta con un warning y se sigue con el resto.

    Returns:
        Lista de `Move` en el mismo orden.

    Raises:
        ValueError: Si algún token es inválido y `strict` es True.
    """
    out: List[Move] = []
    for t in text.split():
        try:
            out.extend(parse_token(t))
        except ValueError:
            if strict:
                raise
            logger.warning("Token de movimiento ignorado: %r", t)
    return out


def format_sequence(moves: List[Move]) -> str:
    """Convierte una lista de `Move` a texto separado por espacios."""
    return " ".join(m.notation for m in moves)


def inverse_sequence(text: str) -> str:
    """Secuencia inversa: orden invertido y cada movimiento en sentido contrario.

    Ejemplo: "R U R' U'" -> "U R U' R'".

    Raises:
        ValueError: Si algún token es inválido.
    """
    moves = parse_sequence(text)
    return format_sequence([m.inverse() for m in reversed(moves)])
