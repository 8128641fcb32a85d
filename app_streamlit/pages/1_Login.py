# --------------------------------------------------------------
# File: 1_Login.py
# Description: Implementa la vista de autenticación contra la pasarela en Streamlit.
# --------------------------------------------------------------

import streamlit as st

from gateway import auth
from gateway.client import GatewayClient
from gateway.errors import GatewayError, TwoFactorRequired
from metacrypt.errors import MetacryptError

st.title("👤 Login")

email = st.text_input("Email", key="log_email")
password = st.text_input("Contraseña", type="password", key="log_pass")
two_factor = st.text_input("Código 2FA (opcional)", key="log_2fa", max_chars=6)

if st.button("Iniciar sesión", key="btn_login", disabled=not (email and password)):
    with GatewayClient() as client:
        try:
            with st.spinner("Derivando claves (PBKDF2, 200 000 rondas)..."):
                session = auth.login(client, email, password, two_factor or auth.NO_TWO_FACTOR)
            base_folder = auth.fetch_base_folder(client, api_key=session.api_key)
        except TwoFactorRequired:
            st.warning("La cuenta requiere un código 2FA válido.")
        except (GatewayError, MetacryptError) as exc:
            st.error(f"No se ha podido iniciar sesión: {exc}")
        else:
            # SECURITY: la clave maestra solo vive en la sesión de Streamlit.
            st.session_state["login_session"] = session
            st.success("Sesión iniciada.")
            st.code(f"[LOGIN] authVersion=2 PBKDF2-HMAC-SHA512\n[LOGIN] carpeta raíz={base_folder}")
