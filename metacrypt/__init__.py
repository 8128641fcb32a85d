# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública del núcleo criptográfico de metacrypt.
# --------------------------------------------------------------
"""Inicializa el paquete `metacrypt` y documenta sus módulos principales."""

__all__ = [
    "config",
    "crypto_kdf",
    "crypto_sym",
    "errors",
    "keys",
    "log",
    "metadata",
    "models",
]
