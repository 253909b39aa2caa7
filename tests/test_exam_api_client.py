import json

import httpx
import pytest

from exam_app.client.exam_api_client import ExamApiClient
from exam_app.core.errors import TransportError
from exam_app.core.models import Answer
from exam_app.core.services.exam_session import SubmissionPayload


def _client(handler):
    return ExamApiClient("http://exam.test", transport=httpx.MockTransport(handler))


def test_fetch_config():
    def handler(request):
        assert request.url.path == "/api/exam/config"
        return httpx.Response(200, json={"durationMinutes": 5, "maxWarnings": 2, "webcamRequired": False})

    with _client(handler) as client:
        config = client.fetch_config()

    assert config.duration_seconds == 300
    assert config.max_warnings == 2
    assert config.webcam_required is False


def test_fetch_questions():
    def handler(request):
        return httpx.Response(200, json={"questions": [{"id": 1, "question": "Q", "options": ["a", "b", "c", "d"]}]})

    with _client(handler) as client:
        questions = client.fetch_questions()

    assert [question.id for question in questions] == [1]
    assert questions[0].options == ["a", "b", "c", "d"]


def test_submit_sends_camel_case_payload():
    captured = {}

    def handler(request):
        captured.update(json.loads(request.content))
        return httpx.Response(200, json={"correct": 1, "total": 3, "percentage": 33.33, "message": "ok"})

    payload = SubmissionPayload("Ana", "ana@example.com", [Answer(1, "A")], ["blur"])
    with _client(handler) as client:
        summary = client.submit(payload)

    assert captured == {
        "userName": "Ana",
        "email": "ana@example.com",
        "answers": [{"questionId": 1, "selectedOption": "A"}],
        "warnings": ["blur"],
    }
    assert (summary.correct, summary.total, summary.percentage) == (1, 3, 33.33)
    assert summary.answers == []


def test_submit_parses_revealed_answers():
    def handler(request):
        return httpx.Response(
            200,
            json={
                "correct": 0,
                "total": 1,
                "percentage": 0,
                "answers": [
                    {
                        "questionId": 1,
                        "question": "Q",
                        "options": ["a", "b", "c", "d"],
                        "selectedOption": None,
                        "correctOption": "B",
                        "isCorrect": False,
                    }
                ],
            },
        )

    with _client(handler) as client:
        summary = client.submit(SubmissionPayload("Ana", "ana@example.com", []))

    assert summary.answers[0].correct_option == "B"
    assert summary.answers[0].selected_option is None


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"detail": "boom"}),
        httpx.Response(200, content=b"not json"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, json={"questions": [{"id": 1}]}),
    ],
)
def test_bad_responses_raise_transport_error(response):
    with _client(lambda request: response) as client:
        with pytest.raises(TransportError):
            client.fetch_questions()


def test_connection_failure_raises_transport_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with _client(handler) as client:
        with pytest.raises(TransportError):
            client.fetch_config()


def test_malformed_config_raises_transport_error():
    def handler(request):
        return httpx.Response(200, json={"durationMinutes": None})

    with _client(handler) as client:
        with pytest.raises(TransportError):
            client.fetch_config()
