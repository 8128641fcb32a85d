# --------------------------------------------------------------
# File: 2_Metadatos.py
# Description: Cifra y descifra sobres de metadatos "002" desde Streamlit.
# --------------------------------------------------------------

import streamlit as st

from metacrypt.errors import MetacryptError, UnsupportedEnvelopeVersion
from metacrypt.keys import Key
from metacrypt.metadata import decrypt_metadata, encrypt_metadata

st.title("🗝️ Metadatos")

key_hex = st.text_input(
    "Clave AES-256 (64 caracteres hex)",
    key="meta_key",
    help="Deja el campo vacío para generar una clave aleatoria.",
)
if not key_hex:
    key_hex = st.session_state.setdefault("meta_random_key", bytes(Key.generate()).hex())
    st.caption(f"Clave generada: `{key_hex}`")

try:
    key = Key.from_hex(key_hex)
except MetacryptError as exc:
    st.error(str(exc))
    st.stop()

tab_enc, tab_dec = st.tabs(["Cifrar", "Descifrar"])

with tab_enc:
    plaintext = st.text_area("Metadatos en claro", key="meta_plain")
    if st.button("Cifrar", key="btn_encrypt"):
        envelope = encrypt_metadata(plaintext, key)
        # El nonce es binario: se muestra el sobre en hexadecimal.
        st.code(envelope.to_bytes().hex())
        st.caption(f"nonce={bytes(envelope.nonce).hex()} ct_len={len(envelope.ciphertext)} bytes")

with tab_dec:
    envelope_hex = st.text_area("Sobre en hexadecimal", key="meta_envelope")
    if st.button("Descifrar", key="btn_decrypt"):
        try:
            st.success(decrypt_metadata(bytes.fromhex(envelope_hex.strip()), key))
        except ValueError:
            st.error("El sobre no es hexadecimal válido.")
        except UnsupportedEnvelopeVersion:
            st.warning("Versión de sobre desconocida: actualiza el SDK.")
        except MetacryptError as exc:
            st.error(f"Error descifrando: {exc}")
