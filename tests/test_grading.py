from exam_app.core.models import Answer, Question
from exam_app.core.services.grading import calculate_percentage, grade_submission

OPTIONS = ["a", "b", "c", "d"]


def _bank():
    return [
        Question(id=1, question="Q1", options=OPTIONS, correct="A"),
        Question(id=2, question="Q2", options=OPTIONS, correct="B"),
        Question(id=3, question="Q3", options=OPTIONS, correct="C"),
    ]


def test_two_of_three_correct():
    summary = grade_submission(
        _bank(),
        [Answer(1, "A"), Answer(2, "B"), Answer(3, "D")],
    )

    assert (summary.correct, summary.total, summary.percentage) == (2, 3, 66.67)


def test_unanswered_questions_count_towards_total():
    summary = grade_submission(_bank(), [Answer(1, "A")])

    assert summary.total == 3
    assert summary.correct == 1
    assert [entry.selected_option for entry in summary.answers] == ["A", None, None]


def test_empty_bank_scores_zero():
    summary = grade_submission([], [Answer(1, "A")])

    assert (summary.correct, summary.total, summary.percentage) == (0, 0, 0)


def test_unknown_question_ids_are_ignored():
    summary = grade_submission(_bank(), [Answer(42, "A"), Answer(2, "B")])

    assert summary.correct == 1
    assert [entry.question_id for entry in summary.answers] == [1, 2, 3]


def test_repeated_question_id_uses_last_answer():
    summary = grade_submission(
        _bank(),
        [Answer(1, "A"), Answer(1, "A"), Answer(1, "C"), Answer(2, "B")],
    )

    assert summary.correct == 1
    assert summary.correct <= summary.total


def test_selected_option_is_case_insensitive():
    summary = grade_submission(_bank(), [Answer(1, " a ")])

    assert summary.correct == 1
    assert summary.answers[0].is_correct is True


def test_calculate_percentage_rounds_to_two_decimals():
    assert calculate_percentage(1, 3) == 33.33
    assert calculate_percentage(3, 3) == 100
    assert calculate_percentage(0, 0) == 0


def test_unknown_letter_counts_as_wrong():
    summary = grade_submission(_bank(), [Answer(1, "A"), Answer(2, "X"), Answer(3, "C")])

    assert (summary.correct, summary.total, summary.percentage) == (2, 3, 66.67)
