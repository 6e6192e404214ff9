# core/gradebook.py
"""Table builders for the Students, Subjects and Grades views."""

from __future__ import annotations
from typing import List, Optional
import pandas as pd

from core.models import Subject
from core.store import RecordsCache

NO_GRADE = "No grade"


def students_frame(cache: RecordsCache) -> pd.DataFrame:
    rows = [
        {"ID": s.id, "First name": s.first_name, "Last name": s.last_name, "Email": s.email}
        for s in cache.students
    ]
    return pd.DataFrame(rows, columns=["ID", "First name", "Last name", "Email"])


def assigned_names(cache: RecordsCache, subject: Subject) -> List[str]:
    """Names of students assigned to a subject, skipping ids no longer loaded."""
    ids = cache.assigned_to(subject.id)
    return [s.full_name for s in cache.students if s.id in ids]


def subject_roster(cache: RecordsCache, subject_id: int) -> List[int]:
    """Student ids shown under a subject: assigned or already graded, in list order."""
    assigned = cache.assigned_to(subject_id)
    graded = {g.student_id for g in cache.grades if g.subject_id == subject_id}
    return [s.id for s in cache.students if s.id in assigned or s.id in graded]


def subject_grades_frame(cache: RecordsCache, subject_id: int) -> pd.DataFrame:
    rows = []
    for student_id in subject_roster(cache, subject_id):
        student = cache.students.get(student_id)
        grade = cache.grade_for(student_id, subject_id)
        rows.append({
            "Student ID": student_id,
            "Student": student.full_name if student else f"#{student_id}",
            "Grade": str(grade.grade) if grade else NO_GRADE,
        })
    return pd.DataFrame(rows, columns=["Student ID", "Student", "Grade"])


def cycle_index(current: int, step: int, count: int) -> int:
    """Previous/Next subject navigation, wrapping at both ends."""
    if count <= 0:
        return 0
    return (current + step) % count


def subject_at(cache: RecordsCache, index: int) -> Optional[Subject]:
    subjects = cache.subjects.items
    if not subjects:
        return None
    return subjects[index % len(subjects)]
