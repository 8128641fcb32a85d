# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas para aislar la configuración y cargar vectores.
# --------------------------------------------------------------

import importlib
import json
import os
from pathlib import Path
from typing import Any, Dict, Iterator

import pytest

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch) -> Iterator[None]:
    """Elimina las variables METACRYPT_* y recarga metacrypt.config para cada prueba.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.

    Returns:
        Iterator[None]: Control del fixture autouse durante la ejecución de cada test.
    """
    for name in list(os.environ):
        if name.startswith("METACRYPT_"):
            monkeypatch.delenv(name)

    import metacrypt.config as config_module

    importlib.reload(config_module)
    yield


@pytest.fixture(scope="session")
def test_inputs() -> Dict[str, Any]:
    """Carga los vectores de referencia registrados con OpenSSL.

    Returns:
        Dict[str, Any]: Contraseña, salt y claves esperadas.
    """
    with open(DATA_DIR / "test_inputs.json", "r", encoding="utf-8") as handler:
        return json.load(handler)
