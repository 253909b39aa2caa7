"""Helper functions for common dialog patterns in the exam client."""

from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget

from exam_app.constants.ui_constants import CONFIRM_SUBMIT_MESSAGE


def confirm_submit(parent: QWidget) -> bool:
    """Ask the candidate to confirm an early submission.

    Returns:
        True if the candidate confirmed, False otherwise
    """
    reply = QMessageBox.question(
        parent,
        "Submit Test",
        CONFIRM_SUBMIT_MESSAGE,
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def show_error(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.critical(parent, title, message)


def show_warning(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.warning(parent, title, message)
