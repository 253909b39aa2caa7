"""Exception types raised by the exam services and clients."""

from __future__ import annotations


class ExamAppError(Exception):
    """Base class for all application errors."""


class QuestionValidationError(ExamAppError, ValueError):
    """Raised when a question payload fails validation."""


class SubmissionError(ExamAppError, ValueError):
    """Raised when an exam submission payload is malformed."""


class AuthError(ExamAppError):
    """Raised when admin credentials or the admin session are invalid."""


class QuestionNotFoundError(ExamAppError, LookupError):
    """Raised when no question exists for the requested id."""

    def __init__(self, question_id: int) -> None:
        super().__init__(f"Question {question_id} not found")
        self.question_id = question_id


class TransportError(ExamAppError):
    """Raised by the exam client when the server cannot be reached or answers badly."""
