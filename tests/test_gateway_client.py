# --------------------------------------------------------------
# File: test_gateway_client.py
# Description: Pruebas del cliente HTTP: cabeceras, reintentos y errores de transporte.
# --------------------------------------------------------------

import hashlib
import importlib

import pytest
import requests

from gateway.client import ApiResponse, GatewayClient
from gateway.errors import RequestError
from fakes import FakeResponse, FakeSession, fail, ok

URLS = ("https://a.example", "https://b.example")


def _client(session, **kwargs) -> GatewayClient:
    kwargs.setdefault("urls", URLS)
    kwargs.setdefault("retry_delay", 0)
    return GatewayClient(session=session, **kwargs)


def test_post_serializes_body_and_sets_headers():
    """Comprueba el cuerpo JSON compacto, el checksum y el token bearer.

    Returns:
        None: Se inspecciona la petición registrada por la sesión falsa.
    """
    session = FakeSession(ok({"x": 1}))
    client = _client(session, api_key="tok")

    response = client.post("/v3/auth/info", {"email": "a@b.com"})

    assert isinstance(response, ApiResponse)
    assert response.status and response.data == {"x": 1}
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] in {u + "/v3/auth/info" for u in URLS}
    assert call["data"] == b'{"email":"a@b.com"}'
    headers = call["headers"]
    assert headers["Authorization"] == "Bearer tok"
    assert headers["Content-Type"] == "application/json"
    assert headers["Accept"] == "application/json, text/plain, */*"
    assert headers["Checksum"] == hashlib.sha512(b'{"email":"a@b.com"}').hexdigest()


def test_get_without_body_or_token():
    """Una petición sin cuerpo ni token omite Checksum y Authorization.

    Returns:
        None: Las cabeceras se revisan en la llamada registrada.
    """
    session = FakeSession(ok({"uuid": "u"}))
    client = _client(session, api_key="")
    client.get("/v3/user/baseFolder")
    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["data"] is None
    assert "Authorization" not in call["headers"]
    assert "Checksum" not in call["headers"]


def test_per_request_api_key_overrides_client_key():
    """El token pasado en la llamada sustituye al del cliente.

    Returns:
        None: Se comprueba la cabecera Authorization.
    """
    session = FakeSession(ok())
    _client(session, api_key="cliente").request("get", "/x", api_key="llamada")
    assert session.calls[0]["method"] == "GET"
    assert session.calls[0]["headers"]["Authorization"] == "Bearer llamada"


def test_status_false_is_returned_not_raised():
    """Las respuestas con status false se devuelven para que decida el llamante.

    Returns:
        None: El código del API se conserva.
    """
    session = FakeSession(fail("email_not_found", status_code=400))
    response = _client(session).post("/v3/auth/info", {"email": "x"})
    assert response.status is False
    assert response.code == "email_not_found"


def test_retries_transport_errors_then_succeeds():
    """Los errores de conexión y los 5xx se reintentan hasta el límite.

    Returns:
        None: La tercera petición tiene éxito.
    """
    session = FakeSession(
        requests.ConnectionError("caída"),
        FakeResponse({"status": False}, status_code=503),
        ok({"done": True}),
    )
    response = _client(session, max_retries=2).get("/v3/health")
    assert response.data == {"done": True}
    assert len(session.calls) == 3


def test_gives_up_after_max_retries():
    """Tras agotar los reintentos se lanza `RequestError` encadenado.

    Returns:
        None: Se revisa la causa, el método y la ruta.
    """
    session = FakeSession(*[requests.Timeout("lento") for _ in range(3)])
    with pytest.raises(RequestError) as info:
        _client(session, max_retries=2).post("/v3/login", {"a": 1})
    assert len(session.calls) == 3
    assert info.value.method == "POST"
    assert info.value.path == "/v3/login"
    assert isinstance(info.value.__cause__, requests.Timeout)


def test_retry_sleeps_between_attempts(monkeypatch):
    """Se espera `retry_delay` segundos entre intentos, no tras el último.

    Returns:
        None: Se cuentan las llamadas a time.sleep.
    """
    import gateway.client as client_module

    sleeps = []
    monkeypatch.setattr(client_module.time, "sleep", sleeps.append)
    session = FakeSession(requests.ConnectionError(), requests.ConnectionError())
    with pytest.raises(RequestError):
        _client(session, max_retries=1, retry_delay=0.5).get("/x")
    assert sleeps == [0.5]


def test_non_json_response_is_request_error():
    """Una respuesta que no es JSON no se reintenta y produce `RequestError`.

    Returns:
        None: Solo se registra una llamada.
    """
    session = FakeSession(FakeResponse(text="<html>bad gateway</html>", status_code=404))
    with pytest.raises(RequestError):
        _client(session, max_retries=3).get("/x")
    assert len(session.calls) == 1


def test_unexpected_shape_is_request_error():
    """Un JSON sin el campo status se considera formato inesperado.

    Returns:
        None: Se espera `RequestError`.
    """
    session = FakeSession(FakeResponse({"message": "sin status"}))
    with pytest.raises(RequestError):
        _client(session).get("/x")


def test_unserializable_body_is_request_error():
    """Un cuerpo no serializable falla antes de enviar nada.

    Returns:
        None: La sesión no registra llamadas.
    """
    session = FakeSession()
    with pytest.raises(RequestError):
        _client(session).post("/x", {"bad": object()})
    assert session.calls == []


def test_requires_at_least_one_url():
    """El cliente necesita una lista de URLs no vacía.

    Returns:
        None: Se espera `ValueError`.
    """
    with pytest.raises(ValueError):
        GatewayClient(urls=[], session=FakeSession())


def test_defaults_come_from_environment(monkeypatch):
    """Las URLs, el token y los reintentos se leen de METACRYPT_*.

    Returns:
        None: Se recarga la configuración tras fijar el entorno.
    """
    monkeypatch.setenv("METACRYPT_GATEWAY_URLS", "https://one.example/, https://two.example")
    monkeypatch.setenv("METACRYPT_API_KEY", "env-token")
    monkeypatch.setenv("METACRYPT_MAX_RETRIES", "7")
    monkeypatch.setenv("METACRYPT_TIMEOUT", "2.5")
    import metacrypt.config as config_module

    importlib.reload(config_module)
    client = GatewayClient(session=FakeSession())
    assert client.urls == ("https://one.example", "https://two.example")
    assert client.api_key == "env-token"
    assert client.max_retries == 7
    assert client.timeout == 2.5


def test_context_manager_closes_session():
    """Salir del bloque `with` cierra la sesión subyacente.

    Returns:
        None: Se consulta el indicador de la sesión falsa.
    """
    session = FakeSession()
    with _client(session):
        pass
    assert session.closed
