# --------------------------------------------------------------
# File: log.py
# Description: Configuración centralizada del registro de eventos.
# --------------------------------------------------------------
"""Configura el logger raíz del paquete sin exponer material secreto."""

import logging
import sys
from typing import Optional, Union

from metacrypt import config

LOGGER_NAME = "metacrypt"


def setup_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Configura el logger `metacrypt` con un único manejador de consola.

    Args:
        level (Optional[Union[int, str]]): Nivel deseado; por defecto
            `config.LOG_LEVEL`.

    Returns:
        logging.Logger: Logger del paquete listo para usar.

    """
    if level is None:
        level = config.LOG_LEVEL
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Evita duplicar manejadores si se llama más de una vez (p. ej. Streamlit).
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
    return logger
