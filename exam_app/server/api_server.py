"""FastAPI server that exposes the exam and admin endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field
import uvicorn

from exam_app.constants.about import APP_ABOUT_TEXT, APP_NAME, APP_VERSION
from exam_app.constants.network_constants import ADMIN_COOKIE_NAME, ROBOTS_TAG
from exam_app.core.errors import AuthError, QuestionNotFoundError, QuestionValidationError, SubmissionError
from exam_app.core.exam_manager import ExamManager
from exam_app.core.models import Answer
from exam_app.server.pages import ADMIN_PAGE_HTML, EXAM_PAGE_HTML, LOGIN_PAGE_HTML

logger = logging.getLogger(__name__)

_ROBOTS_TXT = "User-agent: *\nDisallow: /"


class AnswerPayload(BaseModel):
    """One entry of a submitted answer sheet."""

    model_config = ConfigDict(populate_by_name=True)

    question_id: int | None = Field(default=None, alias="questionId")
    selected_option: str | None = Field(default=None, alias="selectedOption")


class SubmitPayload(BaseModel):
    """Payload schema for exam submissions."""

    model_config = ConfigDict(populate_by_name=True)

    user_name: str | None = Field(default=None, alias="userName")
    email: str | None = None
    answers: list[AnswerPayload] | None = None
    warnings: list[str] | None = None


class QuestionPayload(BaseModel):
    """Payload schema for creating or replacing a question.

    Fields are left untyped so the repository validates them after the id lookup.
    """

    question: Any = None
    options: Any = None
    correct: Any = None


class LoginPayload(BaseModel):
    password: str | None = None


def _get_exam_manager_dependency(exam_manager: ExamManager):
    def dependency() -> ExamManager:
        return exam_manager

    return dependency


def create_api_app(exam_manager: ExamManager) -> FastAPI:
    """Create a FastAPI application wired to the provided exam manager."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION, description=APP_ABOUT_TEXT)
    manager_dep = _get_exam_manager_dependency(exam_manager)

    @app.middleware("http")
    async def add_robots_header(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Robots-Tag"] = ROBOTS_TAG
        return response

    @app.exception_handler(RequestValidationError)
    async def invalid_payload_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected malformed request to %s", request.url.path)
        return JSONResponse(status_code=400, content={"detail": "Invalid payload"})

    def require_admin(request: Request, manager: ExamManager = Depends(manager_dep)) -> str | None:
        token = request.cookies.get(ADMIN_COOKIE_NAME)
        try:
            manager.require_admin(token)
        except AuthError as exc:
            raise HTTPException(status_code=401, detail=str(exc)) from exc
        return token

    # --- Pages ---

    @app.get("/", response_class=HTMLResponse)
    def serve_login_page() -> str:
        return LOGIN_PAGE_HTML

    @app.get("/exam.html", response_class=HTMLResponse)
    def serve_exam_page() -> str:
        return EXAM_PAGE_HTML

    @app.get("/admin.html", response_class=HTMLResponse)
    def serve_admin_page() -> str:
        return ADMIN_PAGE_HTML

    @app.get("/robots.txt", response_class=PlainTextResponse)
    def serve_robots() -> str:
        return _ROBOTS_TXT

    # --- Exam-taker API ---

    @app.get("/api/exam/config")
    def get_exam_config(manager: ExamManager = Depends(manager_dep)) -> dict[str, object]:
        return manager.get_exam_config()

    @app.get("/api/questions")
    def get_questions(manager: ExamManager = Depends(manager_dep)) -> dict[str, object]:
        questions = manager.get_public_questions()
        return {"questions": [question.to_dict() for question in questions]}

    @app.post("/api/submit")
    def submit_exam(
        payload: SubmitPayload,
        manager: ExamManager = Depends(manager_dep),
    ) -> dict[str, object]:
        if payload.answers is None:
            raise HTTPException(status_code=400, detail="Invalid payload")
        answers = [
            Answer(question_id=entry.question_id, selected_option=entry.selected_option)
            for entry in payload.answers
            if entry.question_id is not None
        ]
        try:
            summary = manager.submit_exam(
                payload.user_name or "",
                payload.email or "",
                answers,
                warnings=payload.warnings or [],
            )
        except SubmissionError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        body = summary.to_dict(include_answers=manager.settings.reveal_answers)
        body["message"] = "Exam submitted successfully"
        return body

    # --- Admin API ---

    @app.post("/api/admin/login")
    def admin_login(
        payload: LoginPayload,
        response: Response,
        manager: ExamManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            token = manager.admin_login(payload.password)
        except AuthError as exc:
            raise HTTPException(status_code=401, detail=str(exc)) from exc
        response.set_cookie(
            key=ADMIN_COOKIE_NAME,
            value=token,
            httponly=True,
            samesite="lax",
        )
        return {"success": True}

    @app.post("/api/admin/logout")
    def admin_logout(
        request: Request,
        response: Response,
        manager: ExamManager = Depends(manager_dep),
    ) -> dict[str, object]:
        manager.admin_logout(request.cookies.get(ADMIN_COOKIE_NAME))
        response.delete_cookie(ADMIN_COOKIE_NAME, httponly=True, samesite="lax")
        return {"success": True}

    @app.get("/api/admin/questions", dependencies=[Depends(require_admin)])
    def admin_list_questions(manager: ExamManager = Depends(manager_dep)) -> dict[str, object]:
        return {"questions": [question.to_dict() for question in manager.get_questions()]}

    @app.post("/api/admin/questions", status_code=201, dependencies=[Depends(require_admin)])
    def admin_create_question(
        payload: QuestionPayload,
        manager: ExamManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            question = manager.add_question(payload.question, payload.options, payload.correct)
        except QuestionValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"question": question.to_dict()}

    @app.put("/api/admin/questions/{question_id}", dependencies=[Depends(require_admin)])
    def admin_update_question(
        question_id: int,
        payload: QuestionPayload,
        manager: ExamManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            question = manager.update_question(question_id, payload.question, payload.options, payload.correct)
        except QuestionNotFoundError as exc:
            raise HTTPException(status_code=404, detail="Question not found") from exc
        except QuestionValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"question": question.to_dict()}

    @app.delete("/api/admin/questions/{question_id}", dependencies=[Depends(require_admin)])
    def admin_delete_question(
        question_id: int,
        manager: ExamManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            removed = manager.delete_question(question_id)
        except QuestionNotFoundError as exc:
            raise HTTPException(status_code=404, detail="Question not found") from exc
        return {"deleted": removed.to_dict()}

    @app.get("/api/admin/results", dependencies=[Depends(require_admin)])
    def admin_list_results(manager: ExamManager = Depends(manager_dep)) -> dict[str, object]:
        return {"results": manager.get_results()}

    return app


def run_api_server(exam_manager: ExamManager, host: str, port: int) -> None:
    """Serve the API in the foreground until interrupted."""
    app = create_api_app(exam_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)
    server.run()
