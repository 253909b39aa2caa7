"""Runtime settings for the exam server, loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from exam_app.constants.exam_constants import (
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_DATA_DIR,
    DEFAULT_EXAM_DURATION_MINUTES,
    DEFAULT_MAX_WARNINGS,
    DEFAULT_WARNING_DEBOUNCE_MS,
    QUESTIONS_FILENAME,
    RESULTS_FILENAME,
)
from exam_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(slots=True)
class ExamSettings:
    """Server configuration.

    Exam duration, warning limit and webcam requirement differ between
    deployments, so they are settings rather than constants.
    """

    data_dir: Path = Path(DEFAULT_DATA_DIR)
    admin_password: str = DEFAULT_ADMIN_PASSWORD
    exam_duration_minutes: int = DEFAULT_EXAM_DURATION_MINUTES
    max_warnings: int = DEFAULT_MAX_WARNINGS
    warning_debounce_ms: int = DEFAULT_WARNING_DEBOUNCE_MS
    webcam_required: bool = True
    device_warning: bool = True
    question_limit: int | None = None
    reveal_answers: bool = False
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    def __post_init__(self) -> None:
        self.data_dir = Path(self.data_dir)
        if self.exam_duration_minutes <= 0:
            raise ValueError("Exam duration must be a positive number of minutes.")
        if self.max_warnings <= 0:
            raise ValueError("Maximum warnings must be a positive integer.")
        if self.warning_debounce_ms < 0:
            raise ValueError("Warning debounce must not be negative.")
        if self.question_limit is not None and self.question_limit <= 0:
            raise ValueError("Question limit must be a positive integer when set.")

    @property
    def questions_path(self) -> Path:
        return self.data_dir / QUESTIONS_FILENAME

    @property
    def results_path(self) -> Path:
        return self.data_dir / RESULTS_FILENAME

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> ExamSettings:
        """Build settings from the process environment (``.env`` files included)."""
        if environ is None:
            load_dotenv()
            environ = dict(os.environ)
        return cls(
            data_dir=Path(environ.get("EXAM_DATA_DIR", DEFAULT_DATA_DIR)),
            admin_password=environ.get("ADMIN_PASSWORD") or DEFAULT_ADMIN_PASSWORD,
            exam_duration_minutes=_int_env(environ, "EXAM_DURATION_MINUTES", DEFAULT_EXAM_DURATION_MINUTES),
            max_warnings=_int_env(environ, "EXAM_MAX_WARNINGS", DEFAULT_MAX_WARNINGS),
            warning_debounce_ms=_int_env(environ, "EXAM_WARNING_DEBOUNCE_MS", DEFAULT_WARNING_DEBOUNCE_MS),
            webcam_required=_bool_env(environ, "EXAM_WEBCAM_REQUIRED", True),
            device_warning=_bool_env(environ, "EXAM_DEVICE_WARNING", True),
            question_limit=_optional_int_env(environ, "EXAM_QUESTION_LIMIT"),
            reveal_answers=_bool_env(environ, "EXAM_REVEAL_ANSWERS", False),
            host=environ.get("HOST", DEFAULT_HOST),
            port=_int_env(environ, "PORT", DEFAULT_PORT),
        )

    def exam_config(self) -> dict[str, object]:
        """Settings published to exam clients."""
        return {
            "durationMinutes": self.exam_duration_minutes,
            "maxWarnings": self.max_warnings,
            "warningDebounceMs": self.warning_debounce_ms,
            "webcamRequired": self.webcam_required,
            "deviceWarning": self.device_warning,
            "questionLimit": self.question_limit,
        }


def _int_env(environ: dict[str, str], name: str, default: int) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _optional_int_env(environ: dict[str, str], name: str) -> int | None:
    raw = environ.get(name, "").strip()
    if not raw:
        return None
    return _int_env(environ, name, 0)


def _bool_env(environ: dict[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name, "").strip().lower()
    if not raw:
        return default
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")
