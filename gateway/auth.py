# --------------------------------------------------------------
# File: auth.py
# Description: Orquestación del login: salt, derivación de claves y sesión.
# --------------------------------------------------------------
"""Funciones de negocio para autenticar al usuario contra la pasarela."""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gateway.client import ApiResponse, GatewayClient
from gateway.errors import ApiError, RequestError, TwoFactorRequired, UnsupportedAuthVersion
from metacrypt import config
from metacrypt.crypto_kdf import derive_auth_and_master

logger = logging.getLogger(__name__)

SUPPORTED_AUTH_VERSION = 2
NO_TWO_FACTOR = "XXXXXX"
TWO_FACTOR_CODES = {"enter_2fa", "wrong_two_factor_code"}


class AuthInfo(BaseModel):
    """Datos públicos de autenticación devueltos por `/v3/auth/info`."""

    model_config = ConfigDict(populate_by_name=True)

    auth_version: int = Field(alias="authVersion")
    email: str
    id: Optional[int] = None
    salt: str


class LoginSession(BaseModel):
    """Resultado de un login correcto.

    Attributes:
        email (str): Cuenta autenticada.
        api_key (str): Token bearer para las siguientes peticiones.
        master_key (str): Clave maestra local (hex); nunca se transmite.
        master_keys_envelope (Optional[str]): Claves maestras cifradas que
            devuelve el servidor, sin interpretar.

    """

    model_config = ConfigDict(frozen=True)

    email: str
    api_key: str = Field(repr=False)
    master_key: str = Field(repr=False)
    master_keys_envelope: Optional[str] = Field(default=None, repr=False)


def _require_ok(response: ApiResponse) -> ApiResponse:
    if response.status:
        return response
    if response.code in TWO_FACTOR_CODES:
        raise TwoFactorRequired(response.code, response.message)
    raise ApiError(response.code, response.message)


def fetch_auth_info(client: GatewayClient, email: str) -> AuthInfo:
    """Solicita la salt y la versión de autenticación de una cuenta.

    Args:
        client (GatewayClient): Cliente HTTP configurado.
        email (str): Correo de la cuenta.

    Returns:
        AuthInfo: Salt tal cual la emite el servidor y metadatos de la cuenta.

    """
    response = _require_ok(client.post("/v3/auth/info", {"email": email}))
    try:
        return AuthInfo.model_validate(response.data)
    except ValidationError as exc:
        raise RequestError("Respuesta de auth/info incompleta", "POST", "/v3/auth/info") from exc


def login(
    client: GatewayClient,
    email: str,
    password: str,
    two_factor_code: str = NO_TWO_FACTOR,
    *,
    iterations: Optional[int] = None,
    bit_length: Optional[int] = None,
) -> LoginSession:
    """Autentica al usuario y devuelve la sesión con su clave maestra local.

    Args:
        client (GatewayClient): Cliente HTTP configurado.
        email (str): Correo de la cuenta.
        password (str): Contraseña en claro; solo sale la clave derivada.
        two_factor_code (str): Código 2FA o `XXXXXX` si no está activo.
        iterations (Optional[int]): Rondas PBKDF2; por defecto `config.KDF_ITERATIONS`.
        bit_length (Optional[int]): Bits derivados; por defecto `config.KDF_BIT_LENGTH`.

    Returns:
        LoginSession: Token del API y clave maestra.

    Raises:
        UnsupportedAuthVersion: Si la cuenta no usa authVersion 2.
        TwoFactorRequired: Si falta el código 2FA o es incorrecto.
        ApiError: Para cualquier otro rechazo del servidor.

    """
    info = fetch_auth_info(client, email)
    if info.auth_version != SUPPORTED_AUTH_VERSION:
        raise UnsupportedAuthVersion(info.auth_version)

    # Operación deliberadamente lenta (cientos de miles de rondas).
    secrets = derive_auth_and_master(
        password,
        info.salt,
        config.KDF_ITERATIONS if iterations is None else iterations,
        config.KDF_BIT_LENGTH if bit_length is None else bit_length,
    )

    response = _require_ok(
        client.post(
            "/v3/login",
            {
                "email": email,
                "password": secrets.auth_key,
                "twoFactorCode": two_factor_code,
                "authVersion": info.auth_version,
            },
        )
    )
    data = response.data if isinstance(response.data, dict) else {}
    api_key = data.get("apiKey")
    if not api_key:
        raise RequestError("La respuesta de login no contiene apiKey", "POST", "/v3/login")

    try:
        session = LoginSession(
            email=email,
            api_key=api_key,
            master_key=secrets.master_key,
            master_keys_envelope=data.get("masterKeys"),
        )
    except ValidationError as exc:
        raise RequestError("Respuesta de login con formato inesperado", "POST", "/v3/login") from exc

    logger.info("[LOGIN] sesión iniciada para %s (authVersion=%d)", email, info.auth_version)
    return session


def fetch_base_folder(client: GatewayClient, api_key: Optional[str] = None) -> str:
    """Devuelve el UUID de la carpeta raíz del usuario autenticado."""

    response = _require_ok(client.get("/v3/user/baseFolder", api_key=api_key))
    data = response.data if isinstance(response.data, dict) else {}
    uuid = data.get("uuid")
    if not uuid:
        raise RequestError("La respuesta no contiene uuid", "GET", "/v3/user/baseFolder")
    return uuid
