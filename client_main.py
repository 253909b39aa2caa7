"""Desktop exam client entry point for SecureExam."""

from __future__ import annotations

import argparse
import sys

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication

from exam_app.client.exam_api_client import ExamApiClient
from exam_app.constants.network_constants import DEFAULT_SERVER_URL
from exam_app.core.services.identity_handoff import IdentityHandoff
from exam_app.ui.exam_window import ExamWindow
from exam_app.ui.input_guard import InputGuard
from exam_app.ui.login_dialog import LoginDialog
from exam_app.utils.logging_config import configure_logging


def main() -> None:
    """Sign the candidate in, then run one exam attempt against the server."""
    parser = argparse.ArgumentParser(description="SecureExam desktop client")
    parser.add_argument("--server", default=DEFAULT_SERVER_URL, help="exam server base URL")
    args, qt_args = parser.parse_known_args()

    logger = configure_logging()
    logger.info("Starting exam client against %s", args.server)

    app = QApplication([sys.argv[0], *qt_args])
    guard = InputGuard(app)
    app.installEventFilter(guard)

    handoff = IdentityHandoff()
    if not LoginDialog(handoff).exec():
        sys.exit(0)

    with ExamApiClient(args.server) as api_client:
        window = ExamWindow(api_client=api_client, handoff=handoff)
        window.show()
        QTimer.singleShot(0, window.start_exam)
        exit_code = app.exec()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
