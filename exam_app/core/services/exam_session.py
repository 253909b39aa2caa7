"""State machine for a single candidate's exam attempt.

The session is UI-free: views feed it events (timer ticks, focus loss,
navigation, option clicks) and render whatever it reports back through an
``ExamSessionListener``. Network round-trips stay with the caller; the
session only produces the submission payload and accepts the outcome.

    INITIALIZING -> DEVICE_CHECK -> LOADING -> ACTIVE -> FINISHING -> FINISHED
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable

from exam_app.constants.exam_constants import (
    DEFAULT_EXAM_DURATION_MINUTES,
    DEFAULT_MAX_WARNINGS,
    DEFAULT_WARNING_DEBOUNCE_MS,
    OPTION_LETTERS,
)
from exam_app.core.device_check import DeviceProfile, is_supported_device
from exam_app.core.models import Answer, ExamIdentity, SanitizedQuestion, ScoreSummary
from exam_app.core.services.identity_handoff import IdentityHandoff

logger = logging.getLogger(__name__)

DEVICE_WARNING_REASON = "Attempted to start exam on mobile/small screen. Please use a laptop/desktop."
VISIBILITY_WARNING_REASON = "You switched tabs or minimized the window."
BLUR_WARNING_REASON = "Window lost focus (possible tab switch or app change)."
NO_QUESTIONS_NOTICE = "No questions configured. Please contact admin."
LOADING_FAILED_NOTICE = "Error loading questions. Please try again later."
WEBCAM_REQUIRED_NOTICE = "Webcam is required for this exam but is not available. Exam cannot start."
SUBMISSION_FAILED_NOTICE = "There was an error submitting your exam. Please contact the administrator."


class SessionState(Enum):
    INITIALIZING = auto()
    DEVICE_CHECK = auto()
    LOADING = auto()
    ACTIVE = auto()
    FINISHING = auto()
    FINISHED = auto()


class FinishReason(Enum):
    """Why the exam ended; the value is the message shown to the candidate."""

    SUBMITTED = "You submitted the test."
    TIME_UP = "Time is over. The test has been submitted automatically."
    RULE_VIOLATION = "Exam ended because you violated exam rules multiple times."
    WEBCAM_LOST = "Exam ended because the webcam stopped."

    @property
    def message(self) -> str:
        return self.value


@dataclass(slots=True)
class ExamConfig:
    """Per-deployment exam rules, as published by ``GET /api/exam/config``."""

    duration_minutes: int = DEFAULT_EXAM_DURATION_MINUTES
    max_warnings: int = DEFAULT_MAX_WARNINGS
    warning_debounce_ms: int = DEFAULT_WARNING_DEBOUNCE_MS
    webcam_required: bool = True
    device_warning: bool = True

    @property
    def duration_seconds(self) -> int:
        return self.duration_minutes * 60

    @classmethod
    def from_dict(cls, data: dict) -> ExamConfig:
        return cls(
            duration_minutes=int(data.get("durationMinutes", DEFAULT_EXAM_DURATION_MINUTES)),
            max_warnings=int(data.get("maxWarnings", DEFAULT_MAX_WARNINGS)),
            warning_debounce_ms=int(data.get("warningDebounceMs", DEFAULT_WARNING_DEBOUNCE_MS)),
            webcam_required=bool(data.get("webcamRequired", True)),
            device_warning=bool(data.get("deviceWarning", True)),
        )


@dataclass(slots=True)
class SubmissionPayload:
    """Body of ``POST /api/submit``."""

    user_name: str
    email: str
    answers: list[Answer]
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "userName": self.user_name,
            "email": self.email,
            "answers": [answer.to_dict() for answer in self.answers],
            "warnings": list(self.warnings),
        }


@dataclass(slots=True)
class SessionOutcome:
    """What the candidate sees once the exam is over."""

    reason: FinishReason
    score: ScoreSummary | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.score is not None

    @property
    def message(self) -> str:
        if self.score is None:
            return self.error or SUBMISSION_FAILED_NOTICE
        summary = (
            f"You answered {self.score.correct} out of {self.score.total} "
            f"questions correctly ({self.score.percentage:g}%)."
        )
        return f"{self.reason.message}\n\n{summary}"


class ExamSessionListener:
    """Receives session events. Views override the hooks they care about."""

    def on_state_changed(self, state: SessionState) -> None:
        pass

    def on_redirect_to_login(self) -> None:
        pass

    def on_notice(self, message: str) -> None:
        pass

    def on_timer(self, remaining_seconds: int) -> None:
        pass

    def on_warning(self, count: int, maximum: int, reason: str) -> None:
        pass

    def on_question_changed(self, index: int, question: SanitizedQuestion, selected: str | None) -> None:
        pass

    def on_finished(self, outcome: SessionOutcome) -> None:
        pass


def format_time(seconds: int) -> str:
    """Format a countdown as ``MM:SS``."""
    seconds = max(0, seconds)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


class ExamSession:
    """Owns the countdown, warnings, navigation and answer sheet of one attempt."""

    def __init__(
        self,
        config: ExamConfig,
        handoff: IdentityHandoff,
        listener: ExamSessionListener | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._handoff = handoff
        self._listener = listener or ExamSessionListener()
        self._clock = clock

        self._state = SessionState.INITIALIZING
        self._identity: ExamIdentity | None = None
        self._device_ok: bool = False
        self._device_warning_raised: bool = False

        self._questions: list[SanitizedQuestion] = []
        self._answers: list[Answer | None] = []
        self._current_index: int = 0
        self._remaining_seconds: int = config.duration_seconds

        self._warning_count: int = 0
        self._last_warning_at: float | None = None
        self._warnings: list[str] = []

        self._finish_reason: FinishReason | None = None
        self._outcome: SessionOutcome | None = None

    # --- Read-only state ---

    @property
    def config(self) -> ExamConfig:
        return self._config

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def identity(self) -> ExamIdentity | None:
        return self._identity

    @property
    def questions(self) -> list[SanitizedQuestion]:
        return list(self._questions)

    @property
    def answers(self) -> list[Answer | None]:
        return list(self._answers)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_question(self) -> SanitizedQuestion | None:
        if not self._questions:
            return None
        return self._questions[self._current_index]

    @property
    def remaining_seconds(self) -> int:
        return self._remaining_seconds

    @property
    def warning_count(self) -> int:
        return self._warning_count

    @property
    def warnings(self) -> list[str]:
        return list(self._warnings)

    @property
    def finish_reason(self) -> FinishReason | None:
        return self._finish_reason

    @property
    def outcome(self) -> SessionOutcome | None:
        return self._outcome

    def selected_option(self, index: int | None = None) -> str | None:
        position = self._current_index if index is None else index
        if not 0 <= position < len(self._answers):
            return None
        answer = self._answers[position]
        return answer.selected_option if answer else None

    # --- Start-up ---

    def initialize(self) -> bool:
        """Pick up the identity stored by the login gate."""
        self._require_state(SessionState.INITIALIZING)
        identity = self._handoff.load()
        if identity is None or not identity.user_name or not identity.email:
            logger.info("No candidate identity found; redirecting to login")
            self._listener.on_redirect_to_login()
            return False
        self._identity = identity
        self._set_state(SessionState.DEVICE_CHECK)
        return True

    def check_device(self, profile: DeviceProfile) -> bool:
        """Gate the exam on the device heuristic; may be repeated, e.g. after a resize."""
        self._require_state(SessionState.DEVICE_CHECK)
        self._device_ok = is_supported_device(profile)
        if not self._device_ok and self._config.device_warning and not self._device_warning_raised:
            self._device_warning_raised = True
            self._add_warning(DEVICE_WARNING_REASON)
        return self._device_ok

    def begin_loading(self) -> None:
        self._require_state(SessionState.DEVICE_CHECK)
        if not self._device_ok:
            raise RuntimeError("Device check has not passed.")
        self._set_state(SessionState.LOADING)

    def load_questions(self, questions: list[SanitizedQuestion]) -> bool:
        self._require_state(SessionState.LOADING)
        self._questions = list(questions)
        self._answers = [None] * len(self._questions)
        self._current_index = 0
        if not self._questions:
            self._listener.on_notice(NO_QUESTIONS_NOTICE)
            return False
        return True

    def fail_loading(self, message: str | None = None) -> None:
        self._require_state(SessionState.LOADING)
        logger.error("Loading questions failed: %s", message)
        self._listener.on_notice(LOADING_FAILED_NOTICE)

    def activate(self, webcam_available: bool = True) -> bool:
        """Start the exam once questions are loaded and the webcam gate passes."""
        self._require_state(SessionState.LOADING)
        if not self._questions:
            raise RuntimeError("Cannot start an exam without questions.")
        if self._config.webcam_required and not webcam_available:
            self._listener.on_notice(WEBCAM_REQUIRED_NOTICE)
            return False
        self._remaining_seconds = self._config.duration_seconds
        self._set_state(SessionState.ACTIVE)
        self._listener.on_timer(self._remaining_seconds)
        self._emit_question()
        # Warnings raised before the exam started still count towards the limit.
        if self._warning_count >= self._config.max_warnings:
            self.finish(FinishReason.RULE_VIOLATION)
        return True

    # --- Active exam ---

    def tick(self) -> None:
        """Advance the countdown by one second."""
        if self._state is not SessionState.ACTIVE:
            return
        self._remaining_seconds -= 1
        if self._remaining_seconds <= 0:
            self._remaining_seconds = 0
            self._listener.on_timer(0)
            self.finish(FinishReason.TIME_UP)
            return
        self._listener.on_timer(self._remaining_seconds)

    def register_suspicion(self, reason: str) -> bool:
        """Count a focus/visibility loss. Returns True when a warning was registered."""
        if self._state is not SessionState.ACTIVE:
            return False
        registered = self._add_warning(reason)
        if registered and self._warning_count >= self._config.max_warnings:
            self.finish(FinishReason.RULE_VIOLATION)
        return registered

    def webcam_lost(self) -> SubmissionPayload | None:
        """End a running exam whose required webcam stopped."""
        if self._state is not SessionState.ACTIVE or not self._config.webcam_required:
            return None
        logger.warning("Webcam stopped during the exam")
        return self.finish(FinishReason.WEBCAM_LOST)

    def go_previous(self) -> int:
        if self._state is SessionState.ACTIVE and self._current_index > 0:
            self._current_index -= 1
            self._emit_question()
        return self._current_index

    def go_next(self) -> int:
        if self._state is SessionState.ACTIVE and self._current_index < len(self._questions) - 1:
            self._current_index += 1
            self._emit_question()
        return self._current_index

    def select_option(self, letter: str) -> Answer:
        self._require_state(SessionState.ACTIVE)
        question = self._questions[self._current_index]
        normalized = str(letter).strip().upper()
        if normalized not in OPTION_LETTERS[: len(question.options)]:
            raise ValueError(f"Unknown option {letter!r}")
        answer = Answer(question_id=question.id, selected_option=normalized)
        self._answers[self._current_index] = answer
        return answer

    def request_submit(self, confirm: Callable[[], bool]) -> SubmissionPayload | None:
        """Finish on explicit request, but only after the candidate confirms."""
        if self._state is not SessionState.ACTIVE:
            return None
        if not confirm():
            return None
        return self.finish(FinishReason.SUBMITTED)

    # --- Finishing ---

    def finish(self, reason: FinishReason) -> SubmissionPayload | None:
        """Stop the exam and build the submission payload.

        Returns None when the session is already finishing or finished.
        """
        if self._state in (SessionState.FINISHING, SessionState.FINISHED):
            return None
        self._require_state(SessionState.ACTIVE)
        self._finish_reason = reason
        logger.info("Finishing exam: %s (warnings: %d)", reason.name, self._warning_count)
        self._set_state(SessionState.FINISHING)
        return self.build_payload()

    def build_payload(self) -> SubmissionPayload:
        identity = self._identity or ExamIdentity(user_name="", email="")
        return SubmissionPayload(
            user_name=identity.user_name,
            email=identity.email,
            answers=[answer for answer in self._answers if answer is not None],
            warnings=list(self._warnings),
        )

    def complete_submission(self, score: ScoreSummary) -> SessionOutcome:
        self._require_state(SessionState.FINISHING)
        assert self._finish_reason is not None
        return self._enter_finished(SessionOutcome(reason=self._finish_reason, score=score))

    def fail_submission(self, message: str | None = None) -> SessionOutcome:
        self._require_state(SessionState.FINISHING)
        assert self._finish_reason is not None
        logger.error("Submitting exam failed: %s", message)
        return self._enter_finished(
            SessionOutcome(reason=self._finish_reason, error=SUBMISSION_FAILED_NOTICE)
        )

    # --- Internals ---

    def _enter_finished(self, outcome: SessionOutcome) -> SessionOutcome:
        self._handoff.clear()
        self._outcome = outcome
        self._set_state(SessionState.FINISHED)
        self._listener.on_finished(outcome)
        return outcome

    def _add_warning(self, reason: str) -> bool:
        now = self._clock()
        # One alt-tab fires both visibility and blur handlers.
        if self._last_warning_at is not None:
            if (now - self._last_warning_at) * 1000 < self._config.warning_debounce_ms:
                return False
        self._last_warning_at = now
        self._warning_count += 1
        self._warnings.append(reason)
        logger.warning("Warning %d/%d: %s", self._warning_count, self._config.max_warnings, reason)
        self._listener.on_warning(self._warning_count, self._config.max_warnings, reason)
        return True

    def _emit_question(self) -> None:
        question = self._questions[self._current_index]
        self._listener.on_question_changed(self._current_index, question, self.selected_option())

    def _set_state(self, state: SessionState) -> None:
        self._state = state
        self._listener.on_state_changed(state)

    def _require_state(self, expected: SessionState) -> None:
        if self._state is not expected:
            raise RuntimeError(f"Exam session is {self._state.name}, expected {expected.name}.")
