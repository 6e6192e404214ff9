# core/api.py
"""
HTTP client for the school records API.

Every call either returns parsed records or raises ApiError; callers decide
whether a failure is only logged or also shown to the user.
"""

from __future__ import annotations
import logging
from typing import Any, Iterable, List, Optional
import httpx
from pydantic import ValidationError

from core.credentials import CookieCredentials
from core.models import AuthMode, Grade, Student, Subject

logger = logging.getLogger(__name__)

GENERIC_ERROR = "An error occurred. Please try again."

_AUTH_PATHS = {
    AuthMode.LOGIN: "/auth/login",
    AuthMode.REGISTER: "/auth/register",
}


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP error! status: {response.status_code}"


class SchoolApiClient:
    def __init__(
        self,
        base_url: str,
        credentials: CookieCredentials,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        kwargs: dict[str, Any] = {"base_url": base_url, "headers": {"Content-Type": "application/json"}}
        if timeout is not None:
            kwargs["timeout"] = timeout
        if transport is not None:
            kwargs["transport"] = transport
        self.credentials = credentials
        self._http = httpx.Client(**kwargs)

    def close(self) -> None:
        self._http.close()

    # ------------------------------------------------------------------
    # transport
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, body: Any = None, authorized: bool = True) -> Any:
        headers = self.credentials.bearer_header() if authorized else {}
        try:
            response = self._http.request(method, path, json=body, headers=headers)
        except httpx.HTTPError as e:
            raise ApiError(f"{method} {path} failed: {e}") from e
        if not response.is_success:
            raise ApiError(_error_message(response), response.status_code)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"{method} {path} returned invalid JSON", response.status_code) from e

    @staticmethod
    def _parse(model, payload: Any):
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise ApiError(f"Unexpected {model.__name__} payload: {e.error_count()} error(s)") from e

    def _parse_list(self, model, payload: Any) -> list:
        if not isinstance(payload, list):
            raise ApiError(f"Expected a list of {model.__name__} records")
        return [self._parse(model, item) for item in payload]

    # ------------------------------------------------------------------
    # auth
    # ------------------------------------------------------------------

    def authenticate(self, mode: AuthMode, email: str, password: str) -> str:
        """Returns the token issued by the login or register endpoint."""
        path = _AUTH_PATHS[AuthMode(mode)]
        try:
            response = self._http.post(path, json={"email": email, "password": password})
        except httpx.HTTPError as e:
            raise ApiError(GENERIC_ERROR) from e
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not response.is_success:
            message = body.get("error") if isinstance(body, dict) else None
            raise ApiError(message or GENERIC_ERROR, response.status_code)
        token = body.get("token") if isinstance(body, dict) else None
        if not token:
            raise ApiError(GENERIC_ERROR, response.status_code)
        return str(token)

    # ------------------------------------------------------------------
    # students
    # ------------------------------------------------------------------

    def list_students(self) -> List[Student]:
        return self._parse_list(Student, self._request("GET", "/students"))

    def create_student(self, first_name: str, last_name: str, email: str) -> Student:
        body = {"firstName": first_name, "lastName": last_name, "email": email}
        return self._parse(Student, self._request("POST", "/students/create", body))

    def update_student(self, student_id: int, first_name: str, last_name: str, email: str) -> Student:
        body = {"id": student_id, "firstName": first_name, "lastName": last_name, "email": email}
        return self._parse(Student, self._request("PUT", "/students/update", body))

    def delete_student(self, student_id: int) -> None:
        self._request("DELETE", "/students/delete", {"id": student_id})

    # ------------------------------------------------------------------
    # subjects
    # ------------------------------------------------------------------

    def list_subjects(self) -> List[Subject]:
        return self._parse_list(Subject, self._request("GET", "/subjects"))

    def create_subject(self, name: str) -> Subject:
        return self._parse(Subject, self._request("POST", "/subjects/create", {"name": name}))

    def update_subject(self, subject_id: int, name: str) -> Subject:
        return self._parse(Subject, self._request("PUT", "/subjects/update", {"id": subject_id, "name": name}))

    def delete_subject(self, subject_id: int) -> None:
        self._request("DELETE", "/subjects/delete", {"id": subject_id})

    def assign_subject(self, subject_id: int, student_ids: Iterable[int]) -> None:
        body = {"subjectId": subject_id, "studentIds": sorted(student_ids)}
        self._request("POST", "/subjects/assign", body)

    # ------------------------------------------------------------------
    # grades
    # ------------------------------------------------------------------

    def list_grades(self) -> List[Grade]:
        return self._parse_list(Grade, self._request("GET", "/grades"))

    def create_grade(self, student_id: int, subject_id: int, value: float) -> Grade:
        body = {"value": value, "studentId": student_id, "subjectId": subject_id}
        return self._parse(Grade, self._request("POST", "/grades/create", body))

    def update_grade(self, grade_id: int, value: float) -> Grade:
        return self._parse(Grade, self._request("PUT", "/grades/update", {"id": grade_id, "value": value}))

    def upsert_grade(self, student_id: int, subject_id: int, value: float) -> Grade:
        body = {"studentId": student_id, "subjectId": subject_id, "value": value}
        return self._parse(Grade, self._request("POST", "/grades/upsert", body))

    def delete_grade(self, grade_id: int) -> None:
        self._request("DELETE", "/grades/delete", {"id": grade_id})
