# --------------------------------------------------------------
# File: client.py
# Description: Cliente HTTP de la pasarela con reintentos y selección aleatoria de URL.
# --------------------------------------------------------------
"""Colaborador de transporte: método, ruta, cuerpo opcional y token opcional."""

from __future__ import annotations

import json
import logging
import random
import time
from typing import Any, Dict, Iterable, Optional

import requests
from pydantic import BaseModel, ValidationError

from gateway.errors import RequestError
from metacrypt import config
from metacrypt.crypto_kdf import sha512_hex

logger = logging.getLogger(__name__)

USER_AGENT = "metacrypt-sdk"


class ApiResponse(BaseModel):
    """Sobre JSON que devuelve cualquier endpoint del API.

    Attributes:
        status (bool): `True` si la operación tuvo éxito.
        message (str): Mensaje legible del servidor.
        code (str): Código estable del resultado.
        data (Optional[Any]): Carga útil específica del endpoint.

    """

    status: bool
    message: str = ""
    code: str = ""
    data: Optional[Any] = None


class GatewayClient:
    """Cliente síncrono del API basado en `requests.Session`.

    Las URLs base se inyectan en el constructor; en cada intento se elige una
    al azar. Los fallos de transporte y las respuestas 5xx se reintentan.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        urls: Optional[Iterable[str]] = None,
        *,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = config.API_KEY if api_key is None else api_key
        self.urls = tuple(u.rstrip("/") for u in (config.GATEWAY_URLS if urls is None else urls))
        if not self.urls:
            raise ValueError("Se necesita al menos una URL de pasarela.")
        self.timeout = config.REQUEST_TIMEOUT if timeout is None else timeout
        self.max_retries = config.MAX_RETRIES if max_retries is None else max_retries
        self.retry_delay = config.RETRY_DELAY if retry_delay is None else retry_delay
        self.session = session or requests.Session()

    def __enter__(self) -> "GatewayClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def _headers(self, api_key: Optional[str], payload: Optional[str]) -> Dict[str, str]:
        headers = {
            "Accept": "application/json, text/plain, */*",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }
        token = self.api_key if api_key is None else api_key
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if payload is not None:
            headers["Checksum"] = sha512_hex(payload)
        return headers

    @staticmethod
    def _serialize(body: Any, method: str, path: str) -> Optional[str]:
        if body is None:
            return None
        if isinstance(body, BaseModel):
            body = body.model_dump(by_alias=True)
        try:
            return json.dumps(body, separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise RequestError("No se puede serializar el cuerpo de la petición", method, path) from exc

    @staticmethod
    def _parse(response: requests.Response, method: str, path: str) -> ApiResponse:
        try:
            payload = response.json()
        except ValueError as exc:
            raise RequestError(
                f"Respuesta no JSON (HTTP {response.status_code})", method, path
            ) from exc
        try:
            return ApiResponse.model_validate(payload)
        except ValidationError as exc:
            raise RequestError("Respuesta con formato inesperado", method, path) from exc

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        api_key: Optional[str] = None,
    ) -> ApiResponse:
        """Envía una petición y devuelve el sobre de respuesta ya interpretado.

        Args:
            method (str): Verbo HTTP (`GET`, `POST`...).
            path (str): Ruta del endpoint, p. ej. `/v3/auth/info`.
            body (Any): Cuerpo serializable a JSON o modelo Pydantic.
            api_key (Optional[str]): Token bearer que sustituye al del cliente.

        Returns:
            ApiResponse: Respuesta del servidor, incluso si `status` es `False`.

        Raises:
            RequestError: Si la petición no se puede enviar tras los reintentos
                o la respuesta no se puede interpretar.

        """
        method = method.upper()
        payload = self._serialize(body, method, path)
        headers = self._headers(api_key, payload)
        data = payload.encode("utf-8") if payload is not None else None

        last_exc: Optional[BaseException] = None
        attempts = self.max_retries + 1
        for attempt in range(1, attempts + 1):
            url = random.choice(self.urls) + path
            try:
                response = self.session.request(
                    method, url, data=data, headers=headers, timeout=self.timeout
                )
            except requests.RequestException as exc:
                last_exc = exc
                logger.warning("[HTTP] %s %s intento %d/%d: %s", method, url, attempt, attempts, exc)
            else:
                if response.status_code < 500:
                    logger.debug("[HTTP] %s %s -> %d", method, url, response.status_code)
                    return self._parse(response, method, path)
                last_exc = None
                logger.warning(
                    "[HTTP] %s %s intento %d/%d: HTTP %d",
                    method, url, attempt, attempts, response.status_code,
                )
            if attempt < attempts and self.retry_delay:
                time.sleep(self.retry_delay)

        raise RequestError("No se puede enviar la petición", method, path) from last_exc

    def get(self, path: str, api_key: Optional[str] = None) -> ApiResponse:
        return self.request("GET", path, api_key=api_key)

    def post(self, path: str, body: Any = None, api_key: Optional[str] = None) -> ApiResponse:
        return self.request("POST", path, body=body, api_key=api_key)
