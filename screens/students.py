# screens/students.py
from __future__ import annotations
import streamlit as st

from core.gradebook import students_frame
from core.models import Section
from core.router import view_key
from core.store import RecordsCache


def _k(s: str) -> str:
    return view_key(Section.STUDENTS, s)


def _close_dialog():
    for name in ("dialog", "selected"):
        st.session_state.pop(_k(name), None)


def on_mount(cache: RecordsCache) -> None:
    cache.refresh_students()


def _render_add(cache: RecordsCache):
    with st.form(_k("add_form")):
        st.subheader("Add Student")
        first = st.text_input("First Name")
        last = st.text_input("Last Name")
        email = st.text_input("Email")
        c1, c2 = st.columns(2)
        submitted = c1.form_submit_button("Add Student", type="primary")
        cancelled = c2.form_submit_button("Close")
    if cancelled:
        _close_dialog()
        st.rerun()
    if submitted:
        # failures are logged by the cache; the dialog simply stays open
        if cache.add_student(first, last, email).ok:
            _close_dialog()
            st.rerun()


def _render_edit(cache: RecordsCache, student_id: int):
    student = cache.students.get(student_id)
    if student is None:
        _close_dialog()
        return
    with st.form(_k("edit_form")):
        st.subheader(f"Edit {student.full_name}")
        first = st.text_input("First Name", value=student.first_name)
        last = st.text_input("Last Name", value=student.last_name)
        email = st.text_input("Email", value=student.email)
        c1, c2 = st.columns(2)
        submitted = c1.form_submit_button("Save Changes", type="primary")
        cancelled = c2.form_submit_button("Close")
    if cancelled:
        _close_dialog()
        st.rerun()
    if submitted and cache.edit_student(student_id, first, last, email).ok:
        _close_dialog()
        st.rerun()


def _render_delete(cache: RecordsCache, student_id: int):
    student = cache.students.get(student_id)
    if student is None:
        _close_dialog()
        return
    st.warning(f"Delete {student.full_name}? Their grades are not removed.")
    c1, c2 = st.columns(2)
    if c1.button("Delete", key=_k("confirm_delete"), type="primary"):
        if cache.delete_student(student_id).ok:
            _close_dialog()
            st.rerun()
    if c2.button("Cancel", key=_k("cancel_delete")):
        _close_dialog()
        st.rerun()


def render(cache: RecordsCache, router=None):
    head, action = st.columns([0.7, 0.3])
    head.header("Students")
    if action.button("Add Student", key=_k("open_add")):
        st.session_state[_k("dialog")] = "add"
        st.session_state.pop(_k("selected"), None)

    if len(cache.students) == 0:
        st.info("No students yet.")
    else:
        st.dataframe(students_frame(cache), hide_index=True, use_container_width=True)

        labels = {s.id: f"{s.full_name} ({s.email})" for s in cache.students}
        picked = st.selectbox(
            "Student", list(labels.keys()), format_func=labels.get, key=_k("pick")
        )
        c1, c2 = st.columns(2)
        if c1.button("Edit", key=_k("open_edit")):
            st.session_state[_k("dialog")] = "edit"
            st.session_state[_k("selected")] = picked
        if c2.button("Delete", key=_k("open_delete")):
            st.session_state[_k("dialog")] = "delete"
            st.session_state[_k("selected")] = picked

    dialog = st.session_state.get(_k("dialog"))
    selected = st.session_state.get(_k("selected"))
    if dialog == "add":
        _render_add(cache)
    elif dialog == "edit" and selected is not None:
        _render_edit(cache, selected)
    elif dialog == "delete" and selected is not None:
        _render_delete(cache, selected)
