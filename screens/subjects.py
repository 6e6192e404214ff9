# screens/subjects.py
from __future__ import annotations
import streamlit as st

from core.assign import AssignmentDraft
from core.gradebook import assigned_names
from core.models import Section
from core.router import view_key
from core.store import RecordsCache


def _k(s: str) -> str:
    return view_key(Section.SUBJECTS, s)


def _close_dialog():
    for name in ("dialog", "selected", "draft"):
        st.session_state.pop(_k(name), None)


def on_mount(cache: RecordsCache) -> None:
    # the assign dialog lists every student, so both collections are needed
    cache.refresh_subjects()
    cache.refresh_students()


def open_assign(cache: RecordsCache, subject_id: int) -> AssignmentDraft:
    draft = AssignmentDraft(subject_id, cache.assigned_to(subject_id))
    st.session_state[_k("dialog")] = "assign"
    st.session_state[_k("selected")] = subject_id
    st.session_state[_k("draft")] = draft
    st.session_state[_k("gen")] = st.session_state.get(_k("gen"), 0) + 1
    return draft


def _toggle_all(draft: AssignmentDraft, student_ids):
    draft.toggle_select_all(student_ids)
    # new checkbox keys so every box re-reads the draft
    st.session_state[_k("gen")] = st.session_state.get(_k("gen"), 0) + 1


def _render_assign(cache: RecordsCache, subject_id: int):
    subject = cache.subjects.get(subject_id)
    draft: AssignmentDraft = st.session_state.get(_k("draft"))
    if subject is None or draft is None:
        _close_dialog()
        return
    gen = st.session_state.get(_k("gen"), 0)
    student_ids = cache.students.ids()

    st.subheader(f"Assign {subject.name}")
    st.checkbox(
        "Select all",
        value=draft.select_all,
        key=_k(f"all_{gen}"),
        on_change=_toggle_all,
        args=(draft, student_ids),
    )
    for student in cache.students:
        st.checkbox(
            student.full_name,
            value=draft.is_selected(student.id),
            key=_k(f"chk_{gen}_{student.id}"),
            on_change=draft.toggle_student,
            args=(student.id,),
        )

    c1, c2 = st.columns(2)
    if c1.button("Assign Subject", key=_k("confirm_assign"), type="primary"):
        if cache.assign_subject(subject_id, draft.selected).ok:
            _close_dialog()
            st.rerun()
    if c2.button("Close", key=_k("cancel_assign")):
        _close_dialog()
        st.rerun()


def _render_add(cache: RecordsCache):
    with st.form(_k("add_form")):
        st.subheader("Add Subject")
        name = st.text_input("Subject Name")
        c1, c2 = st.columns(2)
        submitted = c1.form_submit_button("Add Subject", type="primary")
        cancelled = c2.form_submit_button("Close")
    if cancelled:
        _close_dialog()
        st.rerun()
    if submitted and cache.add_subject(name).ok:
        _close_dialog()
        st.rerun()


def _render_edit(cache: RecordsCache, subject_id: int):
    subject = cache.subjects.get(subject_id)
    if subject is None:
        _close_dialog()
        return
    with st.form(_k("edit_form")):
        st.subheader("Edit Subject")
        name = st.text_input("Subject Name", value=subject.name)
        c1, c2 = st.columns(2)
        submitted = c1.form_submit_button("Save Changes", type="primary")
        cancelled = c2.form_submit_button("Close")
    if cancelled:
        _close_dialog()
        st.rerun()
    if submitted and cache.edit_subject(subject_id, name).ok:
        _close_dialog()
        st.rerun()


def _render_delete(cache: RecordsCache, subject_id: int):
    subject = cache.subjects.get(subject_id)
    if subject is None:
        _close_dialog()
        return
    st.warning(f"Delete {subject.name}?")
    c1, c2 = st.columns(2)
    if c1.button("Delete", key=_k("confirm_delete"), type="primary"):
        if cache.delete_subject(subject_id).ok:
            _close_dialog()
            st.rerun()
    if c2.button("Cancel", key=_k("cancel_delete")):
        _close_dialog()
        st.rerun()


def render(cache: RecordsCache, router=None):
    head, action = st.columns([0.7, 0.3])
    head.header("Subjects")
    if action.button("Add Subject", key=_k("open_add")):
        _close_dialog()
        st.session_state[_k("dialog")] = "add"

    if len(cache.subjects) == 0:
        st.info("No subjects yet.")

    for subject in cache.subjects:
        with st.container(border=True):
            title, b1, b2, b3 = st.columns([0.55, 0.15, 0.15, 0.15])
            title.markdown(f"**{subject.name}**")
            if b1.button("Assign", key=_k(f"assign_{subject.id}")):
                open_assign(cache, subject.id)
            if b2.button("Edit", key=_k(f"edit_{subject.id}")):
                _close_dialog()
                st.session_state[_k("dialog")] = "edit"
                st.session_state[_k("selected")] = subject.id
            if b3.button("Delete", key=_k(f"delete_{subject.id}")):
                _close_dialog()
                st.session_state[_k("dialog")] = "delete"
                st.session_state[_k("selected")] = subject.id
            names = assigned_names(cache, subject)
            st.caption(", ".join(names) if names else "No students assigned")

    dialog = st.session_state.get(_k("dialog"))
    selected = st.session_state.get(_k("selected"))
    if dialog == "add":
        _render_add(cache)
    elif dialog == "assign" and selected is not None:
        _render_assign(cache, selected)
    elif dialog == "edit" and selected is not None:
        _render_edit(cache, selected)
    elif dialog == "delete" and selected is not None:
        _render_delete(cache, selected)
