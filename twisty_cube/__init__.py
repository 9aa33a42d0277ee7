"""Modelo de cubo tipo Rubik NxN: piezas, giros de cara, historial y patrones."""

__version__ = "0.1.0"
