# --------------------------------------------------------------
# File: crypto_kdf.py
# Description: Derivación PBKDF2-HMAC-SHA512 de la clave de autenticación y la clave maestra.
# --------------------------------------------------------------
"""Funciones de derivación de claves a partir de la contraseña del usuario."""

import hashlib
import logging

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from metacrypt.errors import DerivationFailure, InvalidConfiguration, InvalidIterationCount
from metacrypt.models import DerivedSecrets

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 200_000
DEFAULT_BIT_LENGTH = 512
MIN_BIT_LENGTH = 128
MAX_ITERATIONS = 2**32 - 1


def _validate(password: str, salt: str, iterations: int, output_bit_length: int) -> None:
    """Comprueba los parámetros antes de gastar CPU en la derivación."""

    if isinstance(iterations, bool) or not isinstance(iterations, int):
        raise InvalidIterationCount("Las iteraciones deben ser un entero.")
    if not 1 <= iterations <= MAX_ITERATIONS:
        raise InvalidIterationCount(f"Número de iteraciones fuera de rango: {iterations}.")
    if isinstance(output_bit_length, bool) or not isinstance(output_bit_length, int):
        raise InvalidConfiguration("La longitud de salida debe ser un entero.")
    # Múltiplo de 16 para que la mitad hexadecimal corresponda a bytes completos.
    if output_bit_length < MIN_BIT_LENGTH or output_bit_length % 16:
        raise InvalidConfiguration(
            f"Longitud de salida inválida: {output_bit_length} bits "
            f"(mínimo {MIN_BIT_LENGTH}, múltiplo de 16)."
        )
    if not isinstance(password, str) or not password:
        raise InvalidConfiguration("La contraseña es obligatoria.")
    if not isinstance(salt, str) or not salt:
        raise InvalidConfiguration("La salt es obligatoria.")


def derive_key_from_password(
    password: str,
    salt: str,
    iterations: int = DEFAULT_ITERATIONS,
    output_bit_length: int = DEFAULT_BIT_LENGTH,
) -> bytes:
    """Ejecuta PBKDF2-HMAC-SHA512 y devuelve los bytes derivados.

    Args:
        password (str): Contraseña del usuario.
        salt (str): Salt emitida por el servidor, sin modificar.
        iterations (int): Rondas de PBKDF2.
        output_bit_length (int): Longitud de la salida en bits.

    Returns:
        bytes: `output_bit_length / 8` bytes derivados.

    Raises:
        InvalidIterationCount: Si `iterations` no es un entero positivo de 32 bits.
        InvalidConfiguration: Si la longitud, la contraseña o la salt no son válidas.
        DerivationFailure: Si la primitiva falla internamente.

    """
    _validate(password, salt, iterations, output_bit_length)

    logger.debug("[KDF] PBKDF2-HMAC-SHA512 iter=%d bits=%d", iterations, output_bit_length)
    try:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA512(),
            length=output_bit_length // 8,
            salt=salt.encode("utf-8"),
            iterations=iterations,
        )
        return kdf.derive(password.encode("utf-8"))
    except (MemoryError, ValueError, OverflowError) as exc:
        raise DerivationFailure("La derivación PBKDF2 ha fallado.") from exc


def sha512_hex(text: str) -> str:
    """Devuelve el SHA-512 hexadecimal del texto codificado en UTF-8."""

    return hashlib.sha512(text.encode("utf-8")).hexdigest()


def derive_auth_and_master(
    password: str,
    salt: str,
    iterations: int = DEFAULT_ITERATIONS,
    output_bit_length: int = DEFAULT_BIT_LENGTH,
) -> DerivedSecrets:
    """Deriva la clave de autenticación y la clave maestra de una contraseña.

    La salida hexadecimal de PBKDF2 se parte por la mitad: la primera mitad es
    la clave maestra (no se transmite) y el SHA-512 del texto hexadecimal de la
    segunda mitad es la clave de autenticación que se envía en el login.

    Args:
        password (str): Contraseña del usuario.
        salt (str): Salt devuelta por `/v3/auth/info`.
        iterations (int): Rondas de PBKDF2; 200 000 en producción.
        output_bit_length (int): Bits derivados; 512 en producción.

    Returns:
        DerivedSecrets: Clave maestra y clave de autenticación en hexadecimal.

    """
    derived_hex = derive_key_from_password(password, salt, iterations, output_bit_length).hex()
    half = len(derived_hex) // 2
    return DerivedSecrets(
        master_key=derived_hex[:half],
        auth_key=sha512_hex(derived_hex[half:]),
    )
