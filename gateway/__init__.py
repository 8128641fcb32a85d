# --------------------------------------------------------------
# File: __init__.py
# Description: Capa de transporte HTTP y orquestación del login contra la pasarela.
# --------------------------------------------------------------
"""Inicializa el paquete `gateway`, cliente del API que consume `metacrypt`."""

__all__ = [
    "auth",
    "client",
    "errors",
]
