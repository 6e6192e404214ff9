# core/runtime.py
"""Per-browser-session singletons, kept in st.session_state across reruns."""

from __future__ import annotations
from http.cookies import SimpleCookie
import streamlit as st

from core.api import SchoolApiClient
from core.credentials import CookieCredentials
from core.log import configure_logging
from core.router import SectionRouter
from core.session import SessionGuard
from core.settings import Settings, load_settings
from core.store import RecordsCache


def ensure_settings() -> Settings:
    if "settings" not in st.session_state:
        settings = load_settings()
        configure_logging(settings.app.log_level)
        st.session_state["settings"] = settings
    return st.session_state["settings"]


def ensure_api() -> SchoolApiClient:
    if "api" not in st.session_state:
        settings = ensure_settings()
        # one cookie jar per browser session, like the signed-in user
        jar = st.session_state.setdefault("cookies", SimpleCookie())
        credentials = CookieCredentials(jar, settings.auth.cookie_name)
        st.session_state["api"] = SchoolApiClient(
            settings.api.base_url, credentials, timeout=settings.api.timeout_seconds
        )
    return st.session_state["api"]


def ensure_guard() -> SessionGuard:
    if "guard" not in st.session_state:
        api = ensure_api()
        st.session_state["guard"] = SessionGuard(api, api.credentials)
    return st.session_state["guard"]


def ensure_cache() -> RecordsCache:
    if "records" not in st.session_state:
        settings = ensure_settings()
        st.session_state["records"] = RecordsCache(ensure_api(), server_upsert=settings.grades.server_upsert)
    return st.session_state["records"]


def ensure_router() -> SectionRouter:
    if "router" not in st.session_state:
        st.session_state["router"] = SectionRouter()
    return st.session_state["router"]
