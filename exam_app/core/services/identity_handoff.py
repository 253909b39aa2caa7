"""Hand-over of the candidate identity from the login gate to the exam."""

from __future__ import annotations

import re

from exam_app.core.models import ExamIdentity

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_email_valid(email: str) -> bool:
    return bool(_EMAIL_PATTERN.match(str(email).lower()))


def validate_login(name: str, email: str) -> str | None:
    """Return a user-facing error for the login form, or None when valid."""
    if not name.strip():
        return "Name is required."
    if not email.strip():
        return "Email is required."
    if not is_email_valid(email.strip()):
        return "Please enter a valid email address."
    return None


class IdentityHandoff:
    """Session-scoped storage for the signed-in candidate.

    The login gate stores the identity, the exam session reads it on start
    and clears it once the exam is over.
    """

    def __init__(self) -> None:
        self._identity: ExamIdentity | None = None

    def store(self, user_name: str, email: str) -> ExamIdentity:
        self._identity = ExamIdentity(user_name=user_name.strip(), email=email.strip())
        return self._identity

    def load(self) -> ExamIdentity | None:
        return self._identity

    def clear(self) -> None:
        self._identity = None
