import random

import pytest

from exam_app.constants.exam_constants import SAMPLE_QUESTIONS
from exam_app.core.errors import QuestionNotFoundError, QuestionValidationError
from exam_app.core.json_store import JsonDocument
from exam_app.core.services.question_repository import QuestionRepository

OPTIONS = ["one", "two", "three", "four"]


@pytest.fixture
def repository(tmp_path):
    repo = QuestionRepository(JsonDocument(tmp_path / "questions.json"), rng=random.Random(3))
    repo.ensure_seeded()
    return repo


def test_first_start_seeds_sample_questions(repository):
    questions = repository.get_questions()

    assert [question.id for question in questions] == [1, 2, 3]
    assert [question.correct for question in questions] == ["A", "B", "C"]
    assert repository.get_question_count() == len(SAMPLE_QUESTIONS)


def test_seeding_does_not_overwrite_existing_bank(tmp_path):
    document = JsonDocument(tmp_path / "questions.json")
    document.write([{"id": 9, "question": "Kept?", "options": OPTIONS, "correct": "D"}])
    repo = QuestionRepository(document)

    repo.ensure_seeded()

    assert [question.id for question in repo.get_questions()] == [9]


def test_add_question_assigns_next_id_and_normalizes_letter(repository):
    question = repository.add_question("  What is 2 + 2?  ", OPTIONS, " d ")

    assert question.id == 4
    assert question.correct == "D"
    assert question.question == "  What is 2 + 2?  "
    assert repository.get_question(4).options == OPTIONS


def test_deleted_highest_id_is_not_reissued_in_same_process(repository):
    added = repository.add_question("Q", OPTIONS, "A")
    repository.delete_question(added.id)

    again = repository.add_question("Q2", OPTIONS, "B")

    assert again.id == added.id + 1


def test_add_rejects_wrong_number_of_options(repository):
    with pytest.raises(QuestionValidationError):
        repository.add_question("Q", ["a", "b", "c"], "A")

    assert repository.get_question_count() == 3


@pytest.mark.parametrize(
    "text, options, correct",
    [
        ("", OPTIONS, "A"),
        ("   ", OPTIONS, "A"),
        (None, OPTIONS, "A"),
        ("Q", "not a list", "A"),
        ("Q", ["a", "b", "c", 4], "A"),
        ("Q", OPTIONS, "E"),
        ("Q", OPTIONS, None),
    ],
)
def test_add_rejects_invalid_payloads(repository, text, options, correct):
    with pytest.raises(QuestionValidationError):
        repository.add_question(text, options, correct)


def test_update_replaces_fields_but_keeps_id(repository):
    updated = repository.update_question(2, "Changed", OPTIONS, "c")

    assert updated.id == 2
    assert repository.get_question(2).question == "Changed"
    assert repository.get_question(2).correct == "C"


def test_update_unknown_id_is_not_found_before_validation(repository):
    with pytest.raises(QuestionNotFoundError):
        repository.update_question(99, "", [], "Z")


def test_delete_unknown_id_leaves_bank_unchanged(repository):
    with pytest.raises(QuestionNotFoundError) as excinfo:
        repository.delete_question(42)

    assert excinfo.value.question_id == 42
    assert repository.get_question_count() == 3


def test_public_questions_hide_correct_answer(repository):
    public = repository.get_public_questions()

    assert [question.id for question in public] == [1, 2, 3]
    assert all(set(question.to_dict()) == {"id", "question", "options"} for question in public)


def test_public_questions_limit_returns_subset(repository):
    public = repository.get_public_questions(limit=2)

    assert len(public) == 2
    assert {question.id for question in public} <= {1, 2, 3}


def test_malformed_entries_are_skipped(tmp_path):
    document = JsonDocument(tmp_path / "questions.json")
    document.write([
        {"id": 1, "question": "Fine", "options": OPTIONS, "correct": "A"},
        {"question": "No id"},
    ])

    assert [question.id for question in QuestionRepository(document).get_questions()] == [1]
