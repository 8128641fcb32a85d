# --------------------------------------------------------------
# File: keys.py
# Description: Objetos de valor de longitud fija para claves y nonces AES-GCM.
# --------------------------------------------------------------
"""Tipos `Key` y `Nonce`: material inmutable con longitud verificada al construir."""

from __future__ import annotations

import binascii
import hmac
import os
from typing import Any, Type, TypeVar, Union

from metacrypt.errors import InvalidKeyLength, InvalidNonceLength

_T = TypeVar("_T", bound="_FixedBytes")

KEY_SIZE = 32
NONCE_SIZE = 12


class _FixedBytes:
    """Contenedor inmutable de bytes con longitud exacta."""

    __slots__ = ("_data",)

    SIZE = 0
    _error = ValueError

    def __init__(self, data: bytes) -> None:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise self._error(f"Se esperaban bytes, no {type(data).__name__}.")
        raw = bytes(data)
        if len(raw) != self.SIZE:
            raise self._error(
                f"{type(self).__name__} requiere {self.SIZE} bytes, recibidos {len(raw)}."
            )
        object.__setattr__(self, "_data", raw)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} es inmutable.")

    @classmethod
    def generate(cls: Type[_T]) -> _T:
        """Crea una instancia nueva a partir del CSPRNG del sistema."""

        return cls(os.urandom(cls.SIZE))

    @classmethod
    def from_bytes(cls: Type[_T], data: Union[bytes, bytearray, memoryview]) -> _T:
        """Copia un fragmento externo, rechazando cualquier longitud distinta."""

        return cls(data)

    def __bytes__(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return self.SIZE

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return hmac.compare_digest(self._data, other._data)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._data))


class Key(_FixedBytes):
    """Clave simétrica AES-256 de exactamente 32 bytes.

    Nunca se muestra: `repr` y `str` ocultan el material.
    """

    __slots__ = ()

    SIZE = KEY_SIZE
    _error = InvalidKeyLength

    @classmethod
    def from_hex(cls, text: str) -> "Key":
        """Reconstruye una clave a partir de 64 caracteres hexadecimales.

        Args:
            text (str): Representación hexadecimal de la clave.

        Returns:
            Key: Clave de 32 bytes.

        Raises:
            InvalidKeyLength: Si el texto no es hexadecimal o no codifica 32 bytes.

        """
        try:
            raw = bytes.fromhex(text)
        except (TypeError, ValueError, binascii.Error) as exc:
            raise InvalidKeyLength("La clave hexadecimal no es válida.") from exc
        return cls(raw)

    def __repr__(self) -> str:
        return "Key(<oculta>)"

    __str__ = __repr__


class Nonce(_FixedBytes):
    """Nonce GCM de 96 bits; uno nuevo por cada operación de cifrado."""

    __slots__ = ()

    SIZE = NONCE_SIZE
    _error = InvalidNonceLength

    def __repr__(self) -> str:
        return f"Nonce({self._data.hex()})"
