# core/assign.py
from __future__ import annotations
from typing import Iterable, Optional, Set


class AssignmentDraft:
    """Checkbox state of the "assign students" dialog for one subject.

    `select_all` is the checkbox's own state: it flips only when the
    select-all box itself is toggled, never when single students are.
    """

    def __init__(self, subject_id: int, assigned: Optional[Iterable[int]] = None):
        self.subject_id = subject_id
        self.selected: Set[int] = set(assigned or ())
        self.select_all = False

    def is_selected(self, student_id: int) -> bool:
        return student_id in self.selected

    def toggle_student(self, student_id: int) -> None:
        if student_id in self.selected:
            self.selected.discard(student_id)
        else:
            self.selected.add(student_id)

    def toggle_select_all(self, student_ids: Iterable[int]) -> None:
        everyone = set(student_ids)
        if not self.select_all:
            # checking the box always means everyone
            self.selected = everyone
            self.select_all = True
        elif everyone and everyone <= self.selected:
            self.selected = set()
            self.select_all = False
        else:
            self.selected = everyone
