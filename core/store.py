# core/store.py
"""
Shared in-memory cache of students, subjects, grades and subject assignments.

One RecordsCache instance is owned by the browser session and handed to
whichever view is mounted. Local collections change only after the API
confirms a call: refreshes replace a collection wholesale, creates append the
server record, updates replace the record with the same id, deletes remove it.
A failed call is logged and leaves the cache exactly as it was.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Set, TypeVar

from core.api import ApiError, SchoolApiClient
from core.models import Grade, Student, Subject

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Outcome:
    """Result of a cache action, for the view to act on."""
    ok: bool
    record: Any = None
    error: Optional[str] = None
    skipped: bool = False

    @classmethod
    def missing_fields(cls) -> "Outcome":
        return cls(ok=False, skipped=True)


def _present(*values: Any) -> bool:
    for v in values:
        if v is None:
            return False
        if isinstance(v, str) and not v.strip():
            return False
    return True


class EntityStore(Generic[T]):
    """Ordered collection of records keyed by their `id`."""

    def __init__(self):
        self._items: List[T] = []

    def __iter__(self):
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> List[T]:
        return list(self._items)

    def ids(self) -> List[int]:
        return [r.id for r in self._items]

    def get(self, record_id: int) -> Optional[T]:
        return next((r for r in self._items if r.id == record_id), None)

    def find(self, predicate: Callable[[T], bool]) -> Optional[T]:
        return next((r for r in self._items if predicate(r)), None)

    def replace_all(self, records: Iterable[T]) -> None:
        self._items = list(records)

    def append(self, record: T) -> None:
        self._items.append(record)

    def replace(self, record_id: int, record: T) -> None:
        self._items = [record if r.id == record_id else r for r in self._items]

    def upsert(self, record: T) -> None:
        if self.get(record.id) is None:
            self.append(record)
        else:
            self.replace(record.id, record)

    def remove(self, record_id: int) -> None:
        self._items = [r for r in self._items if r.id != record_id]


class RecordsCache:
    def __init__(self, api: SchoolApiClient, server_upsert: bool = False):
        self.api = api
        self.server_upsert = server_upsert
        self.students: EntityStore[Student] = EntityStore()
        self.subjects: EntityStore[Subject] = EntityStore()
        self.grades: EntityStore[Grade] = EntityStore()
        self.assignments: Dict[int, Set[int]] = {}

    def _call(self, action: str, fn: Callable[[], Any]) -> Outcome:
        try:
            result = fn()
        except ApiError as e:
            logger.error("Failed to %s: %s", action, e.message)
            return Outcome(ok=False, error=e.message)
        return Outcome(ok=True, record=result)

    # ------------------------------------------------------------------
    # fetches
    # ------------------------------------------------------------------

    def refresh_students(self) -> Outcome:
        outcome = self._call("fetch students", self.api.list_students)
        if outcome.ok:
            self.students.replace_all(outcome.record)
            logger.info("Loaded %d students", len(self.students))
        return outcome

    def refresh_subjects(self) -> Outcome:
        outcome = self._call("fetch subjects", self.api.list_subjects)
        if outcome.ok:
            self.subjects.replace_all(outcome.record)
            # an embedded roster wins over the last assign; without one the entry is kept
            for subject in self.subjects:
                if subject.students is not None:
                    self.assignments[subject.id] = {s.id for s in subject.students}
            logger.info("Loaded %d subjects", len(self.subjects))
        return outcome

    def refresh_grades(self) -> Outcome:
        outcome = self._call("fetch grades", self.api.list_grades)
        if outcome.ok:
            self.grades.replace_all(outcome.record)
            logger.info("Loaded %d grades", len(self.grades))
        return outcome

    # ------------------------------------------------------------------
    # students
    # ------------------------------------------------------------------

    def add_student(self, first_name: str, last_name: str, email: str) -> Outcome:
        if not _present(first_name, last_name, email):
            return Outcome.missing_fields()
        outcome = self._call(
            "add student",
            lambda: self.api.create_student(first_name.strip(), last_name.strip(), email.strip()),
        )
        if outcome.ok:
            self.students.append(outcome.record)
        return outcome

    def edit_student(self, student_id: Optional[int], first_name: str, last_name: str, email: str) -> Outcome:
        if not _present(student_id, first_name, last_name, email):
            return Outcome.missing_fields()
        outcome = self._call(
            "edit student",
            lambda: self.api.update_student(student_id, first_name.strip(), last_name.strip(), email.strip()),
        )
        if outcome.ok:
            self.students.replace(student_id, outcome.record)
        return outcome

    def delete_student(self, student_id: Optional[int]) -> Outcome:
        # grades and assignments referencing the student are left as they are
        if student_id is None:
            return Outcome.missing_fields()
        outcome = self._call("delete student", lambda: self.api.delete_student(student_id))
        if outcome.ok:
            self.students.remove(student_id)
        return outcome

    # ------------------------------------------------------------------
    # subjects
    # ------------------------------------------------------------------

    def add_subject(self, name: str) -> Outcome:
        if not _present(name):
            return Outcome.missing_fields()
        outcome = self._call("add subject", lambda: self.api.create_subject(name.strip()))
        if outcome.ok:
            self.subjects.append(outcome.record)
        return outcome

    def edit_subject(self, subject_id: Optional[int], name: str) -> Outcome:
        if not _present(subject_id, name):
            return Outcome.missing_fields()
        outcome = self._call("edit subject", lambda: self.api.update_subject(subject_id, name.strip()))
        if outcome.ok:
            self.subjects.replace(subject_id, outcome.record)
        return outcome

    def delete_subject(self, subject_id: Optional[int]) -> Outcome:
        if subject_id is None:
            return Outcome.missing_fields()
        outcome = self._call("delete subject", lambda: self.api.delete_subject(subject_id))
        if outcome.ok:
            self.subjects.remove(subject_id)
        return outcome

    def assigned_to(self, subject_id: int) -> Set[int]:
        return set(self.assignments.get(subject_id, set()))

    def assign_subject(self, subject_id: Optional[int], student_ids: Iterable[int]) -> Outcome:
        if subject_id is None:
            return Outcome.missing_fields()
        target = set(student_ids)
        outcome = self._call("assign students to subject", lambda: self.api.assign_subject(subject_id, target))
        if outcome.ok:
            self.assignments[subject_id] = target
            outcome.record = set(target)
        return outcome

    # ------------------------------------------------------------------
    # grades
    # ------------------------------------------------------------------

    def grade_for(self, student_id: int, subject_id: int) -> Optional[Grade]:
        """First cached grade for the pair; later duplicates are ignored."""
        return self.grades.find(lambda g: g.student_id == student_id and g.subject_id == subject_id)

    def save_grade(self, student_id: Optional[int], subject_id: Optional[int], value: Optional[float]) -> Outcome:
        if not _present(student_id, subject_id, value):
            return Outcome.missing_fields()

        if self.server_upsert:
            outcome = self._call("save grade", lambda: self.api.upsert_grade(student_id, subject_id, value))
            if outcome.ok:
                existing = self.grade_for(student_id, subject_id)
                if existing is not None and existing.id != outcome.record.id:
                    self.grades.remove(existing.id)
                self.grades.upsert(outcome.record)
            return outcome

        existing = self.grade_for(student_id, subject_id)
        if existing is not None:
            outcome = self._call("update grade", lambda: self.api.update_grade(existing.id, value))
            if outcome.ok:
                self.grades.replace(outcome.record.id, outcome.record)
        else:
            outcome = self._call("create grade", lambda: self.api.create_grade(student_id, subject_id, value))
            if outcome.ok:
                self.grades.append(outcome.record)
        return outcome

    def remove_grade(self, grade_id: Optional[int]) -> Outcome:
        if grade_id is None:
            return Outcome.missing_fields()
        outcome = self._call("remove grade", lambda: self.api.delete_grade(grade_id))
        if outcome.ok:
            self.grades.remove(grade_id)
        return outcome
