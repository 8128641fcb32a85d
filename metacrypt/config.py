# --------------------------------------------------------------
# File: config.py
# Description: Parámetros configurables por entorno para el núcleo y la pasarela.
# --------------------------------------------------------------
import os

from dotenv import load_dotenv

load_dotenv()

# Derivación PBKDF2-HMAC-SHA512 usada en el login (authVersion 2).
KDF_ITERATIONS = int(os.getenv("METACRYPT_KDF_ITERATIONS", "200000"))
KDF_BIT_LENGTH = int(os.getenv("METACRYPT_KDF_BITS", "512"))

LOG_LEVEL = os.getenv("METACRYPT_LOG_LEVEL", "INFO").upper()

DEFAULT_GATEWAY_URLS = (
    "https://gateway.filen.io",
    "https://gateway.filen.net",
    "https://gateway.filen-1.net",
    "https://gateway.filen-2.net",
    "https://gateway.filen-3.net",
    "https://gateway.filen-4.net",
    "https://gateway.filen-5.net",
    "https://gateway.filen-6.net",
)

_urls = os.getenv("METACRYPT_GATEWAY_URLS", "")
GATEWAY_URLS = tuple(u.strip().rstrip("/") for u in _urls.split(",") if u.strip()) or DEFAULT_GATEWAY_URLS

API_KEY = os.getenv("METACRYPT_API_KEY", "")
REQUEST_TIMEOUT = float(os.getenv("METACRYPT_TIMEOUT", "10"))
MAX_RETRIES = int(os.getenv("METACRYPT_MAX_RETRIES", "3"))
RETRY_DELAY = float(os.getenv("METACRYPT_RETRY_DELAY", "1.0"))
