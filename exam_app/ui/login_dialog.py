"""Login gate collecting the candidate's name and e-mail."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from exam_app.constants.about import EXAM_RULES_TEXT
from exam_app.constants.ui_constants import LOGIN_DIALOG_TITLE
from exam_app.core.services.identity_handoff import IdentityHandoff, validate_login
from exam_app.styling.styles import Styles


class LoginDialog(QDialog):
    """Stores the identity in the handoff once the form validates."""

    def __init__(self, handoff: IdentityHandoff, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(LOGIN_DIALOG_TITLE)
        self.setModal(True)
        self.setMinimumWidth(420)
        self._handoff = handoff
        self._build_ui()
        self.setStyleSheet(Styles.get_main_window_style())

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        rules = QLabel(EXAM_RULES_TEXT, self)
        rules.setWordWrap(True)
        layout.addWidget(rules)

        layout.addWidget(QLabel("Full name", self))
        self.name_input = QLineEdit(self)
        layout.addWidget(self.name_input)

        layout.addWidget(QLabel("Email", self))
        self.email_input = QLineEdit(self)
        layout.addWidget(self.email_input)

        self.error_label = QLabel("", self)
        self.error_label.setStyleSheet(Styles.get_warning_style())
        layout.addWidget(self.error_label)

        button_row = QHBoxLayout()
        button_row.addStretch()
        self.cancel_button = QPushButton("Cancel", self)
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)

        self.start_button = QPushButton("Start Exam", self)
        self.start_button.setObjectName("primary")
        self.start_button.setDefault(True)
        self.start_button.clicked.connect(self._handle_start)
        button_row.addWidget(self.start_button)
        layout.addLayout(button_row)

    def _handle_start(self) -> None:
        name = self.name_input.text()
        email = self.email_input.text()
        error = validate_login(name, email)
        if error:
            self.error_label.setText(error)
            return
        self._handoff.store(name, email)
        self.accept()
