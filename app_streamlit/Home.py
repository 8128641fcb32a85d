# --------------------------------------------------------------
# File: Home.py
# Description: Define la página principal de Streamlit con el resumen del flujo.
# --------------------------------------------------------------

import streamlit as st

from metacrypt.log import setup_logging

setup_logging()

# Configura los metadatos de la página principal de la aplicación.
st.set_page_config(page_title="metacrypt", page_icon="🔐", layout="centered")

st.title("🔐 metacrypt")
st.write(
    "Derivación PBKDF2-HMAC-SHA512 de la clave de autenticación y la clave maestra, "
    "y sobres AES-256-GCM versión `002` para metadatos."
)
st.info("Ve a **Login** para obtener la clave maestra o a **Metadatos** para cifrar y descifrar sobres.")
