"""Grading of submitted answer sheets against the question bank."""

from __future__ import annotations

from exam_app.core.models import Answer, GradedAnswer, Question, ScoreSummary


def calculate_percentage(correct: int, total: int) -> float:
    """Percentage rounded to two decimals; 0 for an empty bank."""
    if total == 0:
        return 0
    return round(correct / total * 100, 2)


def normalize_option(selected_option: object) -> str:
    if selected_option is None:
        return ""
    return str(selected_option).strip().upper()


def grade_submission(questions: list[Question], answers: list[Answer]) -> ScoreSummary:
    """Grade *answers* against the full question bank.

    ``total`` is always the size of the bank, so unanswered questions only
    lower the score. Answers for unknown question ids are ignored, and when
    a question id repeats the last answer wins.
    """
    known_ids = {question.id for question in questions}
    selections: dict[int, str | None] = {}
    for answer in answers:
        if answer.question_id in known_ids:
            selections[answer.question_id] = answer.selected_option

    graded: list[GradedAnswer] = []
    for question in questions:
        selected = selections.get(question.id)
        normalized = normalize_option(selected)
        graded.append(
            GradedAnswer(
                question_id=question.id,
                question=question.question,
                options=list(question.options),
                selected_option=normalized or None,
                correct_option=question.correct,
                is_correct=normalized == question.correct,
            )
        )

    correct = sum(1 for entry in graded if entry.is_correct)
    total = len(questions)
    return ScoreSummary(
        correct=correct,
        total=total,
        percentage=calculate_percentage(correct, total),
        answers=graded,
    )
