"""Server entry point for SecureExam."""

from __future__ import annotations

import argparse
from pathlib import Path

from exam_app.core.exam_manager import ExamManager
from exam_app.core.settings import ExamSettings
from exam_app.server.api_server import run_api_server
from exam_app.utils.logging_config import configure_logging


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="SecureExam server")
    parser.add_argument("--host", help="bind address (default: HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="port (default: PORT or 8000)")
    parser.add_argument("--data-dir", type=Path, help="directory holding questions.json and results.json")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Initialize logging and storage, then serve the API until interrupted."""
    args = _parse_args(argv)
    logger = configure_logging()

    settings = ExamSettings.from_env()
    if args.host:
        settings.host = args.host
    if args.port:
        settings.port = args.port
    if args.data_dir:
        settings.data_dir = args.data_dir

    exam_manager = ExamManager(settings)
    exam_manager.prepare_storage()
    logger.info("Secure exam app running on http://%s:%d/", settings.host, settings.port)
    run_api_server(exam_manager, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
