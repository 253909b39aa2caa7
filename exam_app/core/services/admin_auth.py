"""Service for the single-password admin login and its session tokens."""

from __future__ import annotations

import logging
import secrets

from exam_app.core.errors import AuthError

logger = logging.getLogger(__name__)


class AdminAuthenticator:
    """Issues opaque session tokens after a successful password check.

    Tokens live in memory only; restarting the server logs every admin out.
    """

    def __init__(self, password: str) -> None:
        if not password:
            raise ValueError("Admin password must not be empty.")
        self._password = password
        self._tokens: set[str] = set()

    def login(self, password: str | None) -> str:
        if not password or not secrets.compare_digest(password.encode("utf-8"), self._password.encode("utf-8")):
            logger.warning("Rejected admin login attempt")
            raise AuthError("Invalid password")
        token = secrets.token_urlsafe(32)
        self._tokens.add(token)
        logger.info("Admin logged in")
        return token

    def logout(self, token: str | None) -> None:
        if token:
            self._tokens.discard(token)

    def is_authenticated(self, token: str | None) -> bool:
        return bool(token) and token in self._tokens

    def require(self, token: str | None) -> None:
        if not self.is_authenticated(token):
            raise AuthError("Unauthorized")
