# twisty_cube/core/pieces.py
from __future__ import annotations

from typing import Dict, Iterator, List, Literal, NamedTuple, Optional, Sequence, Tuple

Face = Literal["U", "D", "L", "R", "F", "B"]
Axis = Literal["x", "y", "z"]
Color = str  # Nombre CSS o hex: "white", "#ffcccb", ...
Sticker = Optional[Color]
Vec3i = Tuple[int, int, int]
PieceHash = Tuple[Tuple[Vec3i, Tuple[Sticker, ...]], ...]

# Color de las caras internas (sin sticker). Ningún color de paleta es None.
BACKGROUND: Sticker = None

# Slots del arreglo de colores de cada pieza
DOWN, RIGHT, FRONT, LEFT, BACK, UP = range(6)
SLOT_COUNT = 6
OPPOSITE_SLOT: Dict[int, int] = {DOWN: UP, UP: DOWN, RIGHT: LEFT, LEFT: RIGHT, FRONT: BACK, BACK: FRONT}

AXIS_INDEX: Dict[Axis, int] = {"x": 0, "y": 1, "z": 2}

# Cara -> (eje, capa con signo). La capa se escala por `range` del cubo.
FACE_LAYER: Dict[Face, Tuple[Axis, int]] = {
    "U": ("y", -1),
    "D": ("y", 1),
    "F": ("z", -1),
    "B": ("z", 1),
    "L": ("x", -1),
    "R": ("x", 1),
}

# Slot que muestra el sticker visible de cada cara
FACE_SLOT: Dict[Face, int] = {"U": DOWN, "D": UP, "F": FRONT, "B": BACK, "L": LEFT, "R": RIGHT}

# Ejes (fila, columna) con los que se arma la grilla de una cara
FACE_GRID_AXES: Dict[Face, Tuple[Axis, Axis]] = {
    "U": ("z", "x"),
    "D": ("z", "x"),
    "F": ("y", "x"),
    "B": ("y", "x"),
    "L": ("y", "z"),
    "R": ("y", "z"),
}


class Piece(NamedTuple):
    """Pieza (sub-cubo) de la superficie del cubo.

    Attributes:
        position: Coordenadas enteras (x, y, z) en el reticulado del cubo.
        colors: 6 stickers en el orden [down, right, front, left, back, up].
    """

    position: Vec3i
    colors: Tuple[Sticker, ...]


def layer_range(size: int) -> int:
    """Devuelve la coordenada máxima (`range`) para un cubo de lado `size`."""
    return size // 2


def lattice_coords(size: int) -> List[int]:
    """Coordenadas válidas sobre un eje para un cubo de lado `size`.

    En tamaños impares se usa `-range..range`. En tamaños pares se omite el 0,
    así cada eje tiene exactamente `size` coordenadas (por ejemplo 2 -> [-1, 1]).

    Args:
        size: Lado del cubo.

    Returns:
        Lista ordenada de coordenadas.
    """
    r = layer_range(size)
    coords = list(range(-r, r + 1))
    if size % 2 == 0:
        coords.remove(0)
    return coords


def _surface_colors(pos: Vec3i, r: int, palette: Sequence[Color]) -> Tuple[Sticker, ...]:
    x, y, z = pos

    def pick(value: int, neg: Color, pos_: Color) -> Sticker:
        if value == -r:
            return neg
        if value == r:
            return pos_
        return BACKGROUND

    down = pick(y, palette[0], palette[5])
    right = pick(x, palette[3], palette[1])
    front = pick(z, palette[2], palette[4])

    # left/back/up son el espejo de right/front/down
    return (down, right, front, right, front, down)


class PieceStore:
    """Colección ordenada de las piezas de superficie de un cubo NxN.

    La colección se reconstruye entera (`initialize`) ante reset, cambio de
    tamaño, de tema o de patrón; entre reconstrucciones solo el motor de
    rotación la modifica, reemplazando piezas en su mismo índice.
    """

    def __init__(self, size: int, palette: Sequence[Color], pieces: List[Piece]) -> None:
        self.size: int = size
        self.range: int = layer_range(size)
        self.palette: Tuple[Color, ...] = tuple(palette)
        self.pieces: List[Piece] = pieces

    @classmethod
    def initialize(cls, size: int, palette: Sequence[Color]) -> "PieceStore":
        """Construye el cubo resuelto para un tamaño y una paleta.

        Args:
            size: Lado del cubo (>= 1).
            palette: 6 colores en el orden [down, right, front, left, back, up].

        Returns:
            Un `PieceStore` nuevo con solo las piezas de superficie.

        Raises:
            ValueError: Si `size` es menor que 1 o la paleta no tiene 6 colores.
        """
        if size < 1:
            raise ValueError(f"Tamaño de cubo inválido: {size}")
        if len(palette) != SLOT_COUNT:
            raise ValueError(f"La paleta debe tener {SLOT_COUNT} colores, tiene {len(palette)}")
        if any(c is BACKGROUND for c in palette):
            raise ValueError("La paleta no puede contener el color de fondo")

        r = layer_range(size)
        coords = lattice_coords(size)
        pieces: List[Piece] = []

        for x in coords:
            for y in coords:
                for z in coords:
                    # Piezas internas: no se ven, no se modelan
                    if size > 1 and abs(x) < r and abs(y) < r and abs(z) < r:
                        continue
                    pos: Vec3i = (x, y, z)
                    pieces.append(Piece(pos, _surface_colors(pos, r, palette)))

        return cls(size, palette, pieces)

    def __len__(self) -> int:
        return len(self.pieces)

    def __iter__(self) -> Iterator[Piece]:
        return iter(self.pieces)

    def snapshot(self) -> Tuple[Piece, ...]:
        """Copia inmutable de la lista de piezas (para el render)."""
        return tuple(self.pieces)

    def to_hashable(self) -> PieceHash:
        """Convierte el estado a una tupla hasheable (posiciones + colores, en orden)."""
        return tuple((p.position, p.colors) for p in self.pieces)

    def layer_value(self, signed_layer: int) -> int:
        """Escala una capa con signo (-1/+1) a la coordenada real del cubo."""
        return signed_layer * self.range

    def layer_indices(self, axis: Axis, value: int) -> List[int]:
        """Índices de las piezas cuya coordenada en `axis` vale `value`."""
        i = AXIS_INDEX[axis]
        return [idx for idx, p in enumerate(self.pieces) if p.position[i] == value]

    def face_stickers(self, face: Face) -> List[List[Sticker]]:
        """Grilla NxN con los stickers visibles de una cara (ver `face_stickers`)."""
        return face_stickers(self.pieces, self.size, face)

    def is_solved(self) -> bool:
        """Indica si cada cara muestra un único color."""
        for face in FACE_LAYER:
            stickers = {s for row in self.face_stickers(face) for s in row}
            if len(stickers) != 1:
                return False
        return True


def initialize(size: int, palette: Sequence[Color]) -> PieceStore:
    """Atajo de `PieceStore.initialize`."""
    return PieceStore.initialize(size, palette)


def face_stickers(pieces: Sequence[Piece], size: int, face: Face) -> List[List[Sticker]]:
    """Grilla NxN con los stickers visibles de una cara.

    Sirve tanto para un `PieceStore` como para una foto (`snapshot()`).

    Args:
        pieces: Piezas del cubo.
        size: Lado del cubo.
        face: Cara ("U", "D", "L", "R", "F", "B").

    Returns:
        Lista de filas; cada fila es una lista de colores.

    Raises:
        ValueError: Si la cara no existe.
    """
    if face not in FACE_LAYER:
        raise ValueError(f"Cara inválida: {face}")

    axis, sign = FACE_LAYER[face]
    row_axis, col_axis = FACE_GRID_AXES[face]
    slot = FACE_SLOT[face]
    value = sign * layer_range(size)
    coords = lattice_coords(size)
    index_of = {c: i for i, c in enumerate(coords)}

    grid: List[List[Sticker]] = [[BACKGROUND] * len(coords) for _ in coords]
    for p in pieces:
        if p.position[AXIS_INDEX[axis]] != value:
            continue
        r = index_of[p.position[AXIS_INDEX[row_axis]]]
        c = index_of[p.position[AXIS_INDEX[col_axis]]]
        grid[r][c] = p.colors[slot]
    return grid
