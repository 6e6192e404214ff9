# screens/grades.py
from __future__ import annotations
import streamlit as st

from core.gradebook import cycle_index, subject_at, subject_grades_frame, subject_roster
from core.models import Section
from core.router import view_key
from core.store import RecordsCache


def _k(s: str) -> str:
    return view_key(Section.GRADES, s)


def on_mount(cache: RecordsCache) -> None:
    cache.refresh_students()
    cache.refresh_subjects()
    cache.refresh_grades()


def _subject_table(cache: RecordsCache, subject_id: int):
    frame = subject_grades_frame(cache, subject_id)
    if frame.empty:
        st.caption("No students assigned or graded.")
    else:
        st.dataframe(frame, hide_index=True, use_container_width=True)


def _render_editor(cache: RecordsCache):
    subjects = {s.id: s.name for s in cache.subjects}
    if not subjects:
        return
    st.subheader("Edit Grade")
    subject_id = st.selectbox("Subject", list(subjects.keys()), format_func=subjects.get, key=_k("edit_subject"))
    roster = subject_roster(cache, subject_id)
    students = {s.id: s.full_name for s in cache.students if s.id in roster}
    if not students:
        st.caption("Assign students to this subject first.")
        return
    student_id = st.selectbox("Student", list(students.keys()), format_func=students.get, key=_k("edit_student"))

    existing = cache.grade_for(student_id, subject_id)
    value = st.number_input(
        "Grade",
        value=float(existing.grade) if existing else None,
        step=1.0,
        key=_k(f"value_{subject_id}_{student_id}"),
    )

    c1, c2 = st.columns(2)
    if c1.button("Save Changes", key=_k("save"), type="primary"):
        outcome = cache.save_grade(student_id, subject_id, value)
        if outcome.ok:
            st.rerun()
        elif outcome.error:
            st.error(outcome.error)
    if existing is not None and c2.button("Remove Grade", key=_k("remove")):
        outcome = cache.remove_grade(existing.id)
        if outcome.ok:
            st.rerun()
        else:
            st.error(outcome.error)


def render(cache: RecordsCache, router=None):
    head, toggle = st.columns([0.7, 0.3])
    head.header("Grades")
    detailed = st.session_state.get(_k("detailed"), False)
    if toggle.button("Overview" if detailed else "Detailed View", key=_k("toggle_view")):
        detailed = not detailed
        st.session_state[_k("detailed")] = detailed

    if len(cache.subjects) == 0:
        st.info("No subjects available.")
        return

    if detailed:
        index = st.session_state.get(_k("index"), 0)
        prev_col, title_col, next_col = st.columns([0.2, 0.6, 0.2])
        if prev_col.button("Previous", key=_k("prev")):
            index = cycle_index(index, -1, len(cache.subjects))
        if next_col.button("Next", key=_k("next")):
            index = cycle_index(index, 1, len(cache.subjects))
        st.session_state[_k("index")] = index
        subject = subject_at(cache, index)
        title_col.subheader(subject.name)
        _subject_table(cache, subject.id)
    else:
        for subject in cache.subjects:
            st.markdown(f"### {subject.name}")
            _subject_table(cache, subject.id)

    st.divider()
    _render_editor(cache)
