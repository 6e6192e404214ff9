# screens/auth.py
from __future__ import annotations
import streamlit as st

from core.models import AuthMode
from core.session import SessionGuard


def render(guard: SessionGuard):
    """Login / Register modal; the rest of the app is hidden while it is open."""
    st.markdown(
        """
        <style>
            [data-testid="stSidebar"] {
                display: none;
            }
        </style>
        """,
        unsafe_allow_html=True,
    )

    is_login = guard.mode is AuthMode.LOGIN
    title = "Login" if is_login else "Register"
    st.title(title)
    with st.form(f"auth_form_{guard.mode.value}"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button(title, type="primary", use_container_width=True)

    if submitted:
        outcome = guard.submit(email, password)
        if outcome.ok:
            st.rerun()
        elif outcome.skipped:
            st.warning("Email and password are required.")
        else:
            st.error(outcome.error)

    toggle_label = "Create an account" if is_login else "Already have an account? Login"
    if st.button(toggle_label, key="auth_toggle_mode"):
        guard.toggle_mode()
        st.rerun()
