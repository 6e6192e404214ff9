# core/models.py
"""
Wire records exchanged with the school records API.

The API speaks camelCase; attributes are snake_case and aliases map between them.
"""

from __future__ import annotations
from enum import Enum
from typing import List, Optional, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Section(str, Enum):
    """Top-level views, mutually exclusive."""
    HOME = "home"
    STUDENTS = "students"
    SUBJECTS = "subjects"
    GRADES = "grades"


class AuthMode(str, Enum):
    LOGIN = "login"
    REGISTER = "register"


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Student(_Record):
    id: int
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Subject(_Record):
    id: int
    name: str
    # server-side denormalization, absent on some responses
    students: Optional[List[Student]] = None


class Grade(_Record):
    id: int
    student_id: int = Field(alias="studentId")
    subject_id: int = Field(alias="subjectId")
    grade: Union[int, float] = Field(validation_alias=AliasChoices("grade", "value"))
