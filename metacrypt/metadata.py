# --------------------------------------------------------------
# File: metadata.py
# Description: Sobre versionado "002" para cifrar y descifrar metadatos opacos.
# --------------------------------------------------------------
"""Códec de metadatos autenticados.

Formato del sobre, de izquierda a derecha::

    b"002" | 12 bytes de nonce en bruto | base64 estándar(ciphertext || tag)

El sobre se maneja siempre como bytes: el nonce es binario aleatorio y no
tiene por qué ser texto válido. Un sobre recibido como texto (p. ej. un campo
JSON) se convierte a bytes en UTF-8, igual que en la red.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Union

from pydantic import BaseModel, ConfigDict

from metacrypt.crypto_sym import TAG_SIZE, aes_gcm_decrypt_with_key, aes_gcm_encrypt_with_key
from metacrypt.errors import MalformedEnvelope, MalformedPlaintext, UnsupportedEnvelopeVersion
from metacrypt.keys import NONCE_SIZE, Key, Nonce

logger = logging.getLogger(__name__)

VERSION = b"002"
HEADER_SIZE = len(VERSION) + NONCE_SIZE


class EncryptedMetadataEnvelope(BaseModel):
    """Representación inmutable de un sobre de metadatos cifrado.

    Attributes:
        version (bytes): Etiqueta de formato, siempre `b"002"`.
        nonce (Nonce): Nonce usado en el cifrado.
        ciphertext (bytes): Ciphertext AES-GCM con la etiqueta de 16 bytes al final.

    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    version: bytes = VERSION
    nonce: Nonce
    ciphertext: bytes

    def to_bytes(self) -> bytes:
        """Serializa el sobre en su forma de transmisión."""

        return self.version + bytes(self.nonce) + base64.b64encode(self.ciphertext)

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray, memoryview, str]) -> "EncryptedMetadataEnvelope":
        """Analiza un sobre recibido respetando los desplazamientos fijos.

        Args:
            data (Union[bytes, bytearray, memoryview, str]): Sobre completo. El
                texto se codifica en UTF-8.

        Returns:
            EncryptedMetadataEnvelope: Sobre validado.

        Raises:
            MalformedEnvelope: Si mide menos de 15 bytes o el base64 no es válido.
            UnsupportedEnvelopeVersion: Si la versión no es `002`.

        """
        raw = _as_bytes(data)
        if len(raw) < HEADER_SIZE:
            raise MalformedEnvelope(
                f"Sobre demasiado corto: {len(raw)} bytes (mínimo {HEADER_SIZE})."
            )

        version = raw[: len(VERSION)]
        if version != VERSION:
            raise UnsupportedEnvelopeVersion(version)

        encoded = raw[HEADER_SIZE:]
        try:
            ciphertext = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise MalformedEnvelope("El segmento base64 del sobre no es válido.") from exc
        # Solo se acepta la codificación canónica: bits de relleno a cero y '=' correctos.
        if base64.b64encode(ciphertext) != encoded:
            raise MalformedEnvelope("El segmento base64 del sobre no es canónico.")
        if len(ciphertext) < TAG_SIZE:
            raise MalformedEnvelope("El sobre no contiene una etiqueta de autenticación completa.")

        return cls(
            version=version,
            nonce=Nonce.from_bytes(raw[len(VERSION) : HEADER_SIZE]),
            ciphertext=ciphertext,
        )


def _as_bytes(data: Union[bytes, bytearray, memoryview, str]) -> bytes:
    if isinstance(data, str):
        try:
            return data.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise MalformedEnvelope("El sobre en texto no es UTF-8 válido.") from exc
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise MalformedEnvelope(f"Tipo de sobre no soportado: {type(data).__name__}.")


def _as_key(key: Union[Key, bytes]) -> Key:
    return key if isinstance(key, Key) else Key.from_bytes(key)


def encrypt_metadata(plaintext: Union[str, bytes], key: Key) -> EncryptedMetadataEnvelope:
    """Cifra metadatos con AES-256-GCM y un nonce nuevo en cada llamada.

    Args:
        plaintext (Union[str, bytes]): Metadatos en claro; el texto se codifica en UTF-8.
        key (Key): Clave de 32 bytes.

    Returns:
        EncryptedMetadataEnvelope: Sobre con todo lo necesario para descifrar salvo la clave.

    Raises:
        EncryptionFailure: Si la primitiva AEAD falla.

    """

    data = plaintext.encode("utf-8") if isinstance(plaintext, str) else bytes(plaintext)
    ciphertext, nonce, tag = aes_gcm_encrypt_with_key(_as_key(key), data)
    logger.debug("[META] cifrado v%s claro=%d bytes", VERSION.decode("ascii"), len(data))
    return EncryptedMetadataEnvelope(version=VERSION, nonce=nonce, ciphertext=ciphertext + tag)


def decrypt_metadata_bytes(
    envelope: Union[EncryptedMetadataEnvelope, bytes, str], key: Key
) -> bytes:
    """Abre un sobre y devuelve el claro autenticado como bytes."""

    if not isinstance(envelope, EncryptedMetadataEnvelope):
        envelope = EncryptedMetadataEnvelope.from_bytes(envelope)
    elif envelope.version != VERSION:
        raise UnsupportedEnvelopeVersion(envelope.version)
    elif len(envelope.ciphertext) < TAG_SIZE:
        raise MalformedEnvelope("El sobre no contiene una etiqueta de autenticación completa.")
    return aes_gcm_decrypt_with_key(
        _as_key(key),
        envelope.nonce,
        envelope.ciphertext[:-TAG_SIZE],
        envelope.ciphertext[-TAG_SIZE:],
    )


def decrypt_metadata(envelope: Union[EncryptedMetadataEnvelope, bytes, str], key: Key) -> str:
    """Abre un sobre y devuelve los metadatos como texto UTF-8.

    Args:
        envelope (Union[EncryptedMetadataEnvelope, bytes, str]): Sobre tal como
            lo produjo `encrypt_metadata` o llegó por la red.
        key (Key): Clave de 32 bytes que se cree correcta.

    Returns:
        str: Metadatos en claro.

    Raises:
        MalformedEnvelope: Sobre truncado o base64 inválido.
        UnsupportedEnvelopeVersion: Versión distinta de `002`.
        AuthenticationFailure: Etiqueta GCM incorrecta.
        MalformedPlaintext: El claro no es UTF-8 válido.

    """

    plaintext = decrypt_metadata_bytes(envelope, key)
    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedPlaintext("Los metadatos descifrados no son UTF-8 válido.") from exc
