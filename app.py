# app.py
from __future__ import annotations
import streamlit as st

from core.nav_registry import ROUTES, ROUTE_INDEX
from core.router import Phase, discard_view_state
from core.runtime import ensure_cache, ensure_guard, ensure_router, ensure_settings
from screens.auth import render as render_auth


def _render_nav(router):
    with st.sidebar:
        st.title("Options")
        for route in ROUTES:
            active = router.visible is route.section
            if st.button(
                f"{route.icon} {route.label}",
                key=f"nav_{route.section.value}",
                type="primary" if active else "secondary",
                use_container_width=True,
            ):
                router.select(route.section)
                st.rerun()


def _advance(router, cache):
    """Run the lifecycle one step; each intermediate phase gets its own frame."""
    if router.phase is Phase.CLOSING:
        st.caption("Select an option to view content.")
        unmounted = router.closed()
        discard_view_state(st.session_state, unmounted)
        st.rerun()
    if router.phase is Phase.OPENING:
        mounted = router.opened()
        ROUTE_INDEX[mounted].on_mount(cache)


def main():
    try:
        settings = ensure_settings()
    except Exception as e:
        st.error("Settings could not be loaded. See details below.")
        with st.expander("Diagnostics"):
            st.exception(e)
        st.stop()

    try:
        st.set_page_config(page_title=settings.app.name, layout="wide")
    except Exception:
        pass

    guard = ensure_guard()
    if guard.modal_open or not guard.authenticated:
        guard.modal_open = True
        render_auth(guard)
        return

    cache = ensure_cache()
    router = ensure_router()

    _, right = st.columns([0.85, 0.15])
    with right:
        if st.button("Logout", key="logout_top"):
            # cached records are kept on purpose; only the credential goes
            guard.logout()
            st.rerun()

    _render_nav(router)
    _advance(router, cache)

    section = router.visible
    if section is None:
        st.caption("Select an option to view content.")
        return
    ROUTE_INDEX[section].render(cache, router)


if __name__ == "__main__":
    main()
