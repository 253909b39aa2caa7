"""Domain models for the exam application.

Models serialize to the camelCase JSON shape used both on disk and on the
wire, so the stores and the HTTP layer share one representation.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class Question:
    """Multiple-choice question with exactly four options and a correct letter."""

    id: int
    question: str
    options: list[str]
    correct: str

    @classmethod
    def from_dict(cls, data: dict) -> Question:
        return cls(
            id=int(data["id"]),
            question=str(data["question"]),
            options=[str(option) for option in data["options"]],
            correct=str(data["correct"]).upper(),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "question": self.question,
            "options": list(self.options),
            "correct": self.correct,
        }

    def sanitized(self) -> SanitizedQuestion:
        """Project the question without its correct answer."""
        return SanitizedQuestion(id=self.id, question=self.question, options=list(self.options))


@dataclass(slots=True)
class SanitizedQuestion:
    """Answer-stripped question; the only form sent to exam-takers."""

    id: int
    question: str
    options: list[str]

    @classmethod
    def from_dict(cls, data: dict) -> SanitizedQuestion:
        return cls(
            id=int(data["id"]),
            question=str(data["question"]),
            options=[str(option) for option in data["options"]],
        )

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "question": self.question, "options": list(self.options)}


@dataclass(slots=True)
class Answer:
    """Option selected by a candidate for one question."""

    question_id: int
    selected_option: str | None

    def to_dict(self) -> dict[str, object]:
        return {"questionId": self.question_id, "selectedOption": self.selected_option}


@dataclass(slots=True)
class GradedAnswer:
    """Per-question grading detail stored with a result."""

    question_id: int
    question: str
    options: list[str]
    selected_option: str | None
    correct_option: str
    is_correct: bool

    def to_dict(self) -> dict[str, object]:
        return {
            "questionId": self.question_id,
            "question": self.question,
            "options": list(self.options),
            "selectedOption": self.selected_option,
            "correctOption": self.correct_option,
            "isCorrect": self.is_correct,
        }


@dataclass(slots=True)
class ScoreSummary:
    """Outcome of grading one submission."""

    correct: int
    total: int
    percentage: float
    answers: list[GradedAnswer] = field(default_factory=list)

    def to_dict(self, include_answers: bool = False) -> dict[str, object]:
        payload: dict[str, object] = {
            "correct": self.correct,
            "total": self.total,
            "percentage": self.percentage,
        }
        if include_answers:
            payload["answers"] = [answer.to_dict() for answer in self.answers]
        return payload


@dataclass(slots=True)
class ResultRecord:
    """Persisted exam attempt."""

    id: int
    user_name: str
    email: str
    correct: int
    total: int
    percentage: float
    submitted_at: str
    warnings: list[str] = field(default_factory=list)
    answers: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "userName": self.user_name,
            "email": self.email,
            "correct": self.correct,
            "total": self.total,
            "percentage": self.percentage,
            "submittedAt": self.submitted_at,
            "warnings": list(self.warnings),
            "answers": list(self.answers),
        }


@dataclass(slots=True)
class ExamIdentity:
    """Candidate identity handed over from the login gate to the exam page."""

    user_name: str
    email: str
