# twisty_cube/core/rotation.py
from __future__ import annotations

from typing import Dict, Literal, Sequence, Tuple, cast

from twisty_cube.core.pieces import (
    BACK,
    DOWN,
    FACE_LAYER,
    FRONT,
    LEFT,
    RIGHT,
    UP,
    Axis,
    Face,
    Piece,
    PieceStore,
    Sticker,
    Vec3i,
)

Direction = Literal["clockwise", "counterclockwise"]

CLOCKWISE: Direction = "clockwise"
COUNTERCLOCKWISE: Direction = "counterclockwise"
DIRECTIONS: Tuple[Direction, ...] = (CLOCKWISE, COUNTERCLOCKWISE)

# 4-ciclos de slots por eje y sentido: el color en cycle[i] pasa a cycle[i + 1].
SLOT_CYCLES: Dict[Tuple[Axis, Direction], Tuple[int, int, int, int]] = {
    ("x", CLOCKWISE): (DOWN, FRONT, UP, BACK),
    ("x", COUNTERCLOCKWISE): (DOWN, BACK, UP, FRONT),
    ("y", CLOCKWISE): (RIGHT, FRONT, LEFT, BACK),
    ("y", COUNTERCLOCKWISE): (RIGHT, BACK, LEFT, FRONT),
    ("z", CLOCKWISE): (DOWN, RIGHT, UP, LEFT),
    ("z", COUNTERCLOCKWISE): (DOWN, LEFT, UP, RIGHT),
}

# Plano que rota en cada eje: índices (a, b) de las coordenadas no fijas.
ROTATION_PLANE: Dict[Axis, Tuple[int, int]] = {"x": (1, 2), "y": (0, 2), "z": (0, 1)}

# Signo del cuarto de vuelta horario: (a, b) -> (s*b, -s*a)
# x: (y, z) -> (z, -y) | y: (x, z) -> (-z, x) | z: (x, y) -> (y, -x)
CLOCKWISE_SIGN: Dict[Axis, int] = {"x": 1, "y": -1, "z": 1}


def opposite(direction: Direction) -> Direction:
    """Devuelve el sentido contrario."""
    return COUNTERCLOCKWISE if direction == CLOCKWISE else CLOCKWISE


def rotate_position(pos: Vec3i, axis: Axis, direction: Direction) -> Vec3i:
    """Rota una posición 90° alrededor de `axis`.

    Args:
        pos: Posición (x, y, z).
        axis: Eje de rotación.
        direction: Sentido del giro.

    Returns:
        La posición rotada.
    """
    ia, ib = ROTATION_PLANE[axis]
    s = CLOCKWISE_SIGN[axis]
    if direction != CLOCKWISE:
        s = -s

    out = list(pos)
    a, b = pos[ia], pos[ib]
    out[ia] = s * b
    out[ib] = -s * a
    return (out[0], out[1], out[2])


def permute_slots(colors: Sequence[Sticker], axis: Axis, direction: Direction) -> Tuple[Sticker, ...]:
    """Aplica el 4-ciclo de slots de un eje/sentido a un arreglo de colores.

    Los dos slots alineados con el eje no cambian.

    Args:
        colors: 6 stickers de la pieza.
        axis: Eje de rotación.
        direction: Sentido del giro.

    Returns:
        Nueva tupla de 6 colores.
    """
    cycle = SLOT_CYCLES[(axis, direction)]
    out = list(colors)
    for i, src in enumerate(cycle):
        dst = cycle[(i + 1) % len(cycle)]
        out[dst] = colors[src]
    return tuple(out)


def turn_piece(piece: Piece, axis: Axis, direction: Direction) -> Piece:
    """Gira una pieza 90°: posición y colores."""
    return Piece(
        rotate_position(piece.position, axis, direction),
        permute_slots(piece.colors, axis, direction),
    )


def rotate(store: PieceStore, face: str, direction: str) -> Tuple[int, ...]:
    """Gira una capa exterior del cubo (modifica `store` en el lugar).

    Solo se tocan las piezas cuya coordenada en el eje de la cara coincide con
    la capa escalada (`±range`); el resto queda igual.

    Args:
        store: Piezas del cubo.
        face: Cara a girar ("U", "D", "F", "B", "L", "R").
        direction: "clockwise" o "counterclockwise".

    Returns:
        Índices de las piezas giradas. Vacío si la cara o el sentido no son
        válidos (en ese caso no se modifica nada).
    """
    if not isinstance(face, str) or not isinstance(direction, str):
        return ()
    if face not in FACE_LAYER or direction not in DIRECTIONS:
        return ()

    axis, signed_layer = FACE_LAYER[cast(Face, face)]
    turn: Direction = cast(Direction, direction)

    turned = store.layer_indices(axis, store.layer_value(signed_layer))
    for idx in turned:
        store.pieces[idx] = turn_piece(store.pieces[idx], axis, turn)
    return tuple(turned)
