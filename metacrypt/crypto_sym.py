# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Primitivas AES-256-GCM para cifrado y descifrado simétrico seguro.
# --------------------------------------------------------------
"""Rutinas de cifrado simétrico que traducen los fallos de la primitiva."""

from typing import Optional, Tuple

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from metacrypt.errors import AuthenticationFailure, EncryptionFailure
from metacrypt.keys import Key, Nonce

TAG_SIZE = 16


def aes_gcm_encrypt_with_key(
    key: Key, plaintext: bytes, aad: Optional[bytes] = None
) -> Tuple[bytes, Nonce, bytes]:
    """Cifra datos con AES-256-GCM bajo un nonce aleatorio nuevo.

    Args:
        key (Key): Clave simétrica de 256 bits.
        plaintext (bytes): Datos a cifrar.
        aad (Optional[bytes]): Datos autenticados adicionales.

    Returns:
        Tuple[bytes, Nonce, bytes]: Ciphertext sin etiqueta, nonce y tag.

    Raises:
        EncryptionFailure: Si la primitiva AEAD rechaza la operación.

    """

    # El nonce se genera aquí y nunca lo decide el llamante.
    nonce = Nonce.generate()
    try:
        ct_full = AESGCM(bytes(key)).encrypt(bytes(nonce), plaintext, aad)
    except (OverflowError, ValueError, TypeError, MemoryError) as exc:
        raise EncryptionFailure("El cifrado AES-GCM ha fallado.") from exc
    return ct_full[:-TAG_SIZE], nonce, ct_full[-TAG_SIZE:]


def aes_gcm_decrypt_with_key(
    key: Key, nonce: Nonce, ciphertext: bytes, tag: bytes, aad: Optional[bytes] = None
) -> bytes:
    """Descifra datos con AES-256-GCM verificando la etiqueta.

    Args:
        key (Key): Clave simétrica que protege los datos.
        nonce (Nonce): Nonce de 96 bits usado al cifrar.
        ciphertext (bytes): Datos cifrados sin etiqueta.
        tag (bytes): Etiqueta de autenticación de 128 bits.
        aad (Optional[bytes]): Datos autenticados adicionales.

    Returns:
        bytes: Mensaje original en claro.

    Raises:
        AuthenticationFailure: Si la etiqueta no verifica. Nunca se devuelve claro parcial.

    """

    if len(tag) != TAG_SIZE:
        raise AuthenticationFailure("Etiqueta de autenticación incompleta.")
    try:
        return AESGCM(bytes(key)).decrypt(bytes(nonce), ciphertext + tag, aad)
    except InvalidTag as exc:
        raise AuthenticationFailure(
            "No se ha podido autenticar el cifrado (clave incorrecta o datos manipulados)."
        ) from exc
