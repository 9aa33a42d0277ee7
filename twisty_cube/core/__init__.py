from twisty_cube.core.pieces import BACKGROUND, Piece, PieceStore, initialize
from twisty_cube.core.rotation import CLOCKWISE, COUNTERCLOCKWISE, rotate

__all__ = [
    "BACKGROUND",
    "CLOCKWISE",
    "COUNTERCLOCKWISE",
    "Piece",
    "PieceStore",
    "initialize",
    "rotate",
]
