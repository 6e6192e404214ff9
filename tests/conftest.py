import json

import httpx
import pytest

from core.api import SchoolApiClient
from core.credentials import CookieCredentials
from core.store import RecordsCache


class FakeSchoolServer:
    """In-memory stand-in for the records API, served through httpx.MockTransport."""

    def __init__(self):
        self.students = {}
        self.subjects = {}
        self.grades = {}
        self.assignments = {}
        self.users = {}
        self.requests = []
        self.fail_paths = set()
        self._next_id = 1

    def _id(self):
        value = self._next_id
        self._next_id += 1
        return value

    # seeding helpers -------------------------------------------------

    def add_student(self, first, last, email=""):
        sid = self._id()
        self.students[sid] = {"id": sid, "firstName": first, "lastName": last, "email": email}
        return sid

    def add_subject(self, name, subject_id=None):
        sid = subject_id if subject_id is not None else self._id()
        self.subjects[sid] = {"id": sid, "name": name}
        return sid

    def add_grade(self, student_id, subject_id, value):
        gid = self._id()
        self.grades[gid] = {"id": gid, "studentId": student_id, "subjectId": subject_id, "grade": value}
        return gid

    def calls(self, method, path):
        return [r for r in self.requests if r["method"] == method and r["path"] == path]

    # transport -------------------------------------------------------

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        body = json.loads(request.content) if request.content else None
        self.requests.append({
            "method": request.method,
            "path": path,
            "body": body,
            "auth": request.headers.get("Authorization"),
        })
        if path in self.fail_paths:
            return httpx.Response(500, json={"error": "boom"})

        if path in ("/auth/login", "/auth/register"):
            return self._auth(path, body)
        if request.headers.get("Authorization") is None:
            return httpx.Response(401, json={"error": "Unauthorized"})

        route = (request.method, path)
        if route == ("GET", "/students"):
            return httpx.Response(200, json=list(self.students.values()))
        if route == ("GET", "/subjects"):
            return httpx.Response(200, json=list(self.subjects.values()))
        if route == ("GET", "/grades"):
            return httpx.Response(200, json=list(self.grades.values()))
        if route == ("POST", "/students/create"):
            sid = self.add_student(body["firstName"], body["lastName"], body["email"])
            return httpx.Response(201, json=self.students[sid])
        if route == ("PUT", "/students/update"):
            self.students[body["id"]] = dict(body)
            return httpx.Response(200, json=self.students[body["id"]])
        if route == ("DELETE", "/students/delete"):
            self.students.pop(body["id"], None)
            return httpx.Response(200, json={"message": "deleted"})
        if route == ("POST", "/subjects/create"):
            sid = self.add_subject(body["name"])
            return httpx.Response(201, json=self.subjects[sid])
        if route == ("PUT", "/subjects/update"):
            self.subjects[body["id"]] = {"id": body["id"], "name": body["name"]}
            return httpx.Response(200, json=self.subjects[body["id"]])
        if route == ("DELETE", "/subjects/delete"):
            self.subjects.pop(body["id"], None)
            return httpx.Response(200, json={"message": "deleted"})
        if route == ("POST", "/subjects/assign"):
            self.assignments[body["subjectId"]] = list(body["studentIds"])
            return httpx.Response(200, json={"message": "assigned"})
        if route == ("POST", "/grades/create"):
            gid = self.add_grade(body["studentId"], body["subjectId"], body["value"])
            return httpx.Response(201, json=self.grades[gid])
        if route == ("PUT", "/grades/update"):
            self.grades[body["id"]]["grade"] = body["value"]
            return httpx.Response(200, json=self.grades[body["id"]])
        if route == ("POST", "/grades/upsert"):
            for grade in self.grades.values():
                if grade["studentId"] == body["studentId"] and grade["subjectId"] == body["subjectId"]:
                    grade["grade"] = body["value"]
                    return httpx.Response(200, json=grade)
            gid = self.add_grade(body["studentId"], body["subjectId"], body["value"])
            return httpx.Response(201, json=self.grades[gid])
        if route == ("DELETE", "/grades/delete"):
            self.grades.pop(body["id"], None)
            return httpx.Response(200, json={"message": "deleted"})
        return httpx.Response(404, json={"error": "Not found"})

    def _auth(self, path, body):
        email, password = body["email"], body["password"]
        if path == "/auth/register":
            if email in self.users:
                return httpx.Response(409, json={"error": "User already exists"})
            self.users[email] = password
        elif self.users.get(email) != password:
            return httpx.Response(401, json={"error": "Invalid credentials"})
        return httpx.Response(200, json={"token": f"tok-{email}"})


@pytest.fixture()
def server():
    return FakeSchoolServer()


@pytest.fixture()
def credentials():
    return CookieCredentials(name="token")


@pytest.fixture()
def logged_in(credentials):
    credentials.store("secret-token")
    return credentials


@pytest.fixture()
def api(server, credentials):
    client = SchoolApiClient("http://school.test", credentials, transport=httpx.MockTransport(server.handler))
    yield client
    client.close()


@pytest.fixture()
def cache(api, logged_in):
    return RecordsCache(api)
