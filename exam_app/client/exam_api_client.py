"""HTTP client the desktop exam client uses to talk to the exam server."""

from __future__ import annotations

import logging

import httpx

from exam_app.constants.network_constants import CLIENT_TIMEOUT_SECONDS, DEFAULT_SERVER_URL
from exam_app.core.errors import TransportError
from exam_app.core.models import GradedAnswer, SanitizedQuestion, ScoreSummary
from exam_app.core.services.exam_session import ExamConfig, SubmissionPayload

logger = logging.getLogger(__name__)


class ExamApiClient:
    """Thin wrapper over the exam-taker endpoints.

    Every network, status or decoding failure surfaces as ``TransportError``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_SERVER_URL,
        *,
        timeout: float = CLIENT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> ExamApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch_config(self) -> ExamConfig:
        body = self._request("GET", "/api/exam/config")
        try:
            return ExamConfig.from_dict(body)
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportError(f"Malformed exam configuration: {exc}") from exc

    def fetch_questions(self) -> list[SanitizedQuestion]:
        body = self._request("GET", "/api/questions")
        try:
            return [SanitizedQuestion.from_dict(entry) for entry in body.get("questions") or []]
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportError(f"Malformed question list: {exc}") from exc

    def submit(self, payload: SubmissionPayload) -> ScoreSummary:
        body = self._request("POST", "/api/submit", json=payload.to_dict())
        try:
            return ScoreSummary(
                correct=int(body["correct"]),
                total=int(body["total"]),
                percentage=float(body["percentage"]),
                answers=[_graded_answer_from_dict(entry) for entry in body.get("answers") or []],
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportError(f"Malformed submission response: {exc}") from exc

    def _request(self, method: str, url: str, **kwargs: object) -> dict:
        try:
            response = self._client.request(method, url, **kwargs)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error("%s %s returned %s", method, url, exc.response.status_code)
            raise TransportError(f"Server answered {exc.response.status_code} for {url}") from exc
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise TransportError(f"Could not reach the exam server: {exc}") from exc
        except ValueError as exc:
            raise TransportError(f"Invalid JSON from {url}") from exc
        if not isinstance(body, dict):
            raise TransportError(f"Unexpected response body from {url}")
        return body


def _graded_answer_from_dict(data: dict) -> GradedAnswer:
    return GradedAnswer(
        question_id=int(data["questionId"]),
        question=str(data["question"]),
        options=[str(option) for option in data["options"]],
        selected_option=data.get("selectedOption"),
        correct_option=str(data["correctOption"]),
        is_correct=bool(data["isCorrect"]),
    )
