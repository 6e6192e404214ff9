# core/session.py
from __future__ import annotations
import logging

from core.api import ApiError, SchoolApiClient
from core.credentials import CookieCredentials
from core.models import AuthMode
from core.store import Outcome

logger = logging.getLogger(__name__)


class SessionGuard:
    """Login/register gate in front of the section UI.

    Authenticated means the credential cookie is present, nothing more.
    Logging out removes the cookie only; cached records stay in memory.
    """

    def __init__(self, api: SchoolApiClient, credentials: CookieCredentials):
        self.api = api
        self.credentials = credentials
        self.mode = AuthMode.LOGIN
        self.modal_open = not self.authenticated

    @property
    def authenticated(self) -> bool:
        return self.credentials.token() is not None

    def toggle_mode(self) -> AuthMode:
        self.mode = AuthMode.REGISTER if self.mode is AuthMode.LOGIN else AuthMode.LOGIN
        return self.mode

    def submit(self, email: str, password: str) -> Outcome:
        if not email or not email.strip() or not password:
            return Outcome.missing_fields()
        try:
            token = self.api.authenticate(self.mode, email.strip(), password)
        except ApiError as e:
            logger.error("%s failed for %s: %s", self.mode.value, email, e.message)
            return Outcome(ok=False, error=e.message)
        self.credentials.store(token)
        self.modal_open = False
        logger.info("%s succeeded for %s", self.mode.value, email)
        return Outcome(ok=True)

    def logout(self) -> None:
        self.credentials.clear()
        self.modal_open = True
        logger.info("Logged out")
