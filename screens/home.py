# screens/home.py
from __future__ import annotations
import streamlit as st

from core.models import Section
from core.router import SectionRouter, view_key
from core.store import RecordsCache


def on_mount(cache: RecordsCache) -> None:
    pass


def render(cache: RecordsCache, router: SectionRouter):
    st.header("🎓 School Records")
    st.write("Manage students, subjects, grades and subject assignments.")
    if st.button("Go to Students ➜", key=view_key(Section.HOME, "go_students"), type="primary"):
        router.select(Section.STUDENTS)
        st.rerun()
