# core/credentials.py
"""
Bearer credential persistence.

The token lives in a single named cookie inside the client's own cookie jar.
The app keeps one jar per browser session in st.session_state, so a login or
logout in one session never reaches another. Absence of the cookie is the
only "logged out" signal; the value is opaque.
"""

from __future__ import annotations
from http.cookies import SimpleCookie
from typing import Optional


class CookieCredentials:
    def __init__(self, jar: Optional[SimpleCookie] = None, name: str = "token"):
        self.jar = jar if jar is not None else SimpleCookie()
        self.name = name

    def token(self) -> Optional[str]:
        """Read synchronously on every authorized call."""
        morsel = self.jar.get(self.name)
        if morsel is None or not morsel.value:
            return None
        return morsel.value

    def store(self, token: str) -> None:
        self.jar[self.name] = token
        self.jar[self.name]["path"] = "/"

    def clear(self) -> None:
        if self.name in self.jar:
            del self.jar[self.name]

    def bearer_header(self) -> dict:
        token = self.token()
        return {"Authorization": f"Bearer {token}"} if token else {}
