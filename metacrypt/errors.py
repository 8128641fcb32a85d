# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de excepciones del núcleo criptográfico.
# --------------------------------------------------------------
"""Excepciones que el núcleo propaga sin recuperación local."""


class MetacryptError(Exception):
    """Base de todos los errores emitidos por `metacrypt`."""


class InvalidConfiguration(MetacryptError):
    """Parámetros inválidos suministrados por el llamante (error de programación)."""


class InvalidIterationCount(InvalidConfiguration):
    """El número de iteraciones no es un entero positivo representable."""


class InvalidKeyLength(InvalidConfiguration):
    """El material de clave no mide exactamente 32 bytes."""


class InvalidNonceLength(InvalidConfiguration):
    """El nonce no mide exactamente 12 bytes."""


class DerivationFailure(MetacryptError):
    """Fallo interno de la primitiva PBKDF2. No se reintenta."""


class EncryptionFailure(MetacryptError):
    """Fallo interno de la primitiva AEAD durante el cifrado. No se reintenta."""


class DecryptionError(MetacryptError):
    """Base de los errores producidos al abrir un sobre de metadatos."""


class MalformedEnvelope(DecryptionError):
    """El sobre es demasiado corto o su segmento base64 no es válido."""


class MalformedPlaintext(DecryptionError):
    """El claro autenticado no es UTF-8 válido."""


class AuthenticationFailure(DecryptionError):
    """La etiqueta GCM no coincide: datos manipulados o clave incorrecta."""


class UnsupportedEnvelopeVersion(DecryptionError):
    """El sobre declara una versión de formato distinta de la soportada."""

    def __init__(self, version: bytes) -> None:
        self.version = version
        super().__init__(f"Versión de sobre no soportada: {version!r}")
