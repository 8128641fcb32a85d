# --------------------------------------------------------------
# File: errors.py
# Description: Excepciones de la capa de transporte y del API remoto.
# --------------------------------------------------------------
"""Errores que el cliente de la pasarela devuelve a la orquestación."""

from typing import Optional


class GatewayError(Exception):
    """Base de los errores de la pasarela."""


class RequestError(GatewayError):
    """La petición no pudo enviarse, leerse o interpretarse.

    Attributes:
        method (str): Verbo HTTP de la petición fallida.
        path (str): Ruta del endpoint.

    """

    def __init__(self, message: str, method: str, path: str) -> None:
        self.method = method
        self.path = path
        super().__init__(f"RequestError: {message} ({method} {path})")


class ApiError(GatewayError):
    """El servidor respondió con `status: false`.

    Attributes:
        code (str): Código de error del API.
        message (str): Mensaje legible devuelto por el servidor.

    """

    def __init__(self, code: Optional[str], message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"{code}: {message}")


class TwoFactorRequired(ApiError):
    """La cuenta exige un código 2FA o el proporcionado no es válido."""


class UnsupportedAuthVersion(ApiError):
    """La cuenta usa una versión de autenticación que este cliente no implementa."""

    def __init__(self, version: int) -> None:
        self.version = version
        super().__init__("unsupported_auth_version", f"authVersion {version} no soportada.")
