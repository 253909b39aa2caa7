"""Service for the append-only store of submitted exam results."""

from __future__ import annotations

import logging

from exam_app.core.json_store import JsonDocument
from exam_app.core.models import ResultRecord, ScoreSummary

logger = logging.getLogger(__name__)


class ResultRepository:
    """Appends graded attempts to the results document and lists them back."""

    def __init__(self, document: JsonDocument) -> None:
        self._document = document

    def ensure_created(self) -> None:
        self._document.ensure([])

    def get_results(self) -> list[dict]:
        return self._document.read()

    def append_result(
        self,
        user_name: str,
        email: str,
        summary: ScoreSummary,
        submitted_at: str,
        warnings: list[str] | None = None,
    ) -> ResultRecord:
        results = self._document.read()
        record = ResultRecord(
            id=len(results) + 1,
            user_name=user_name,
            email=email,
            correct=summary.correct,
            total=summary.total,
            percentage=summary.percentage,
            submitted_at=submitted_at,
            warnings=list(warnings or []),
            answers=[answer.to_dict() for answer in summary.answers],
        )
        results.append(record.to_dict())
        self._document.write(results)
        logger.info(
            "Stored result %d for %s: %d/%d (%.2f%%)",
            record.id,
            email,
            record.correct,
            record.total,
            record.percentage,
        )
        return record
