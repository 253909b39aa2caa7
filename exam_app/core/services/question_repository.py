"""Service for managing the persisted question bank."""

from __future__ import annotations

import logging
import random

from exam_app.constants.exam_constants import OPTION_COUNT, OPTION_LETTERS, SAMPLE_QUESTIONS
from exam_app.core.errors import QuestionNotFoundError, QuestionValidationError
from exam_app.core.json_store import JsonDocument
from exam_app.core.models import Question, SanitizedQuestion

logger = logging.getLogger(__name__)


class QuestionRepository:
    """Manages the lifecycle and storage of exam questions."""

    def __init__(self, document: JsonDocument, rng: random.Random | None = None) -> None:
        self._document = document
        self._rng = rng or random.Random()
        self._highest_issued_id: int = 0

    def ensure_seeded(self) -> None:
        """Create the question file with the sample questions on first start."""
        if self._document.ensure(SAMPLE_QUESTIONS):
            logger.info("Seeded question bank with %d sample questions", len(SAMPLE_QUESTIONS))

    def get_questions(self) -> list[Question]:
        """Return all questions including their correct answers."""
        questions: list[Question] = []
        for entry in self._document.read():
            try:
                questions.append(Question.from_dict(entry))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed question entry: %r", entry)
        return questions

    def get_public_questions(self, limit: int | None = None) -> list[SanitizedQuestion]:
        """Return answer-stripped questions, optionally a shuffled subset of at most *limit*."""
        questions = self.get_questions()
        if limit is not None:
            self._rng.shuffle(questions)
            questions = questions[:limit]
        return [question.sanitized() for question in questions]

    def get_question_count(self) -> int:
        return len(self.get_questions())

    def get_question(self, question_id: int) -> Question:
        for question in self.get_questions():
            if question.id == question_id:
                return question
        raise QuestionNotFoundError(question_id)

    def add_question(self, question_text: object, options: object, correct: object) -> Question:
        questions = self.get_questions()
        text, cleaned_options, correct_letter = self._validate(question_text, options, correct)
        question = Question(
            id=self._next_question_id(questions),
            question=text,
            options=cleaned_options,
            correct=correct_letter,
        )
        questions.append(question)
        self._save(questions)
        logger.info("Created question %d", question.id)
        return question

    def update_question(
        self, question_id: int, question_text: object, options: object, correct: object
    ) -> Question:
        questions = self.get_questions()
        index = self._index_of(questions, question_id)
        text, cleaned_options, correct_letter = self._validate(question_text, options, correct)
        # Preserve the original ID
        updated = Question(id=question_id, question=text, options=cleaned_options, correct=correct_letter)
        questions[index] = updated
        self._save(questions)
        logger.info("Updated question %d", question_id)
        return updated

    def delete_question(self, question_id: int) -> Question:
        questions = self.get_questions()
        index = self._index_of(questions, question_id)
        removed = questions.pop(index)
        self._save(questions)
        logger.info("Deleted question %d", question_id)
        return removed

    def _save(self, questions: list[Question]) -> None:
        self._document.write([question.to_dict() for question in questions])

    def _next_question_id(self, questions: list[Question]) -> int:
        current_max = max((question.id for question in questions), default=0)
        self._highest_issued_id = max(self._highest_issued_id, current_max) + 1
        return self._highest_issued_id

    @staticmethod
    def _index_of(questions: list[Question], question_id: int) -> int:
        for index, question in enumerate(questions):
            if question.id == question_id:
                return index
        raise QuestionNotFoundError(question_id)

    @classmethod
    def _validate(cls, question_text: object, options: object, correct: object) -> tuple[str, list[str], str]:
        """Validate a question payload; text and options are kept exactly as given."""
        if not isinstance(question_text, str) or not question_text.strip():
            raise QuestionValidationError("Question text must not be empty.")
        cleaned_options = cls._validate_options(options)
        correct_letter = str(correct if correct is not None else "").strip().upper()
        if correct_letter not in OPTION_LETTERS:
            raise QuestionValidationError("Correct option must be one of A, B, C or D.")
        return question_text, cleaned_options, correct_letter

    @staticmethod
    def _validate_options(options: object) -> list[str]:
        if not isinstance(options, list) or len(options) != OPTION_COUNT:
            raise QuestionValidationError("Each question must have exactly four options.")
        if any(not isinstance(option, str) for option in options):
            raise QuestionValidationError("Options must be text.")
        return list(options)
