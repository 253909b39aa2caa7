"""Business logic shared by the API routes: question bank, scoring and admin access."""

from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from threading import Lock

from exam_app.core.errors import SubmissionError
from exam_app.core.json_store import JsonDocument
from exam_app.core.models import Answer, Question, SanitizedQuestion, ScoreSummary
from exam_app.core.services.admin_auth import AdminAuthenticator
from exam_app.core.services.grading import grade_submission
from exam_app.core.services.question_repository import QuestionRepository
from exam_app.core.services.result_repository import ResultRepository
from exam_app.core.settings import ExamSettings

logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ExamManager:
    """Facade for exam services: question bank, results, grading and admin auth."""

    def __init__(self, settings: ExamSettings, rng: random.Random | None = None) -> None:
        self._lock = Lock()
        self._settings = settings

        # Services
        self._questions = QuestionRepository(JsonDocument(settings.questions_path), rng=rng)
        self._results = ResultRepository(JsonDocument(settings.results_path))
        self._auth = AdminAuthenticator(settings.admin_password)

    @property
    def settings(self) -> ExamSettings:
        return self._settings

    def prepare_storage(self) -> None:
        """Create the data files (seeding sample questions) when missing."""
        with self._lock:
            self._questions.ensure_seeded()
            self._results.ensure_created()

    # --- Exam-taker operations ---

    def get_exam_config(self) -> dict[str, object]:
        return self._settings.exam_config()

    def get_public_questions(self) -> list[SanitizedQuestion]:
        with self._lock:
            return self._questions.get_public_questions(limit=self._settings.question_limit)

    def submit_exam(
        self,
        user_name: str,
        email: str,
        answers: list[Answer],
        warnings: list[str] | None = None,
    ) -> ScoreSummary:
        """Grade a submission against the current bank and store the result."""
        if not user_name or not email:
            raise SubmissionError("Invalid payload")
        with self._lock:
            summary = grade_submission(self._questions.get_questions(), answers)
            self._results.append_result(
                user_name=user_name,
                email=email,
                summary=summary,
                submitted_at=_utc_timestamp(),
                warnings=warnings,
            )
        return summary

    # --- Admin authentication ---

    def admin_login(self, password: str | None) -> str:
        return self._auth.login(password)

    def admin_logout(self, token: str | None) -> None:
        self._auth.logout(token)

    def require_admin(self, token: str | None) -> None:
        self._auth.require(token)

    # --- Question bank (admin) ---

    def get_questions(self) -> list[Question]:
        with self._lock:
            return self._questions.get_questions()

    def add_question(self, question_text: object, options: object, correct: object) -> Question:
        with self._lock:
            return self._questions.add_question(question_text, options, correct)

    def update_question(self, question_id: int, question_text: object, options: object, correct: object) -> Question:
        with self._lock:
            return self._questions.update_question(question_id, question_text, options, correct)

    def delete_question(self, question_id: int) -> Question:
        with self._lock:
            return self._questions.delete_question(question_id)

    # --- Results (admin) ---

    def get_results(self) -> list[dict]:
        with self._lock:
            return self._results.get_results()
