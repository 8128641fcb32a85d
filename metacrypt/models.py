# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos comunes utilizados por la capa criptográfica.
# --------------------------------------------------------------
"""Modelos Pydantic que encapsulan estructuras de intercambio criptográfico."""

from pydantic import BaseModel, ConfigDict, Field


class DerivedSecrets(BaseModel):
    """Resultado transitorio de derivar las claves de una contraseña.

    Attributes:
        master_key (str): Primera mitad hexadecimal del PBKDF2, sin hash. Uso local.
        auth_key (str): SHA-512 hexadecimal de la segunda mitad. Se envía al servidor.

    """

    model_config = ConfigDict(frozen=True)

    # SECURITY: excluidos del repr para que nunca acaben en un log.
    master_key: str = Field(repr=False)
    auth_key: str = Field(repr=False)
