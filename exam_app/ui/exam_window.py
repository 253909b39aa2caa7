"""Qt main window running one proctored exam attempt.

The window is a thin view: it forwards ticks, focus changes, navigation and
option clicks to ``ExamSession`` and renders whatever the session reports.
"""

from __future__ import annotations

import logging
from enum import Enum, auto

from PySide6.QtCore import QEvent, Qt, QSysInfo, QTimer
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import (
    QButtonGroup,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QRadioButton,
    QStackedWidget,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from exam_app.client.exam_api_client import ExamApiClient
from exam_app.constants.about import APP_NAME, APP_VERSION
from exam_app.constants.exam_constants import OPTION_LETTERS, TIMER_TICK_MS
from exam_app.constants.ui_constants import (
    DEVICE_BLOCKED_MESSAGE,
    LOADING_MESSAGE,
    NEXT_BUTTON,
    PREV_BUTTON,
    PROGRESS_TEMPLATE,
    RETRY_DEVICE_BUTTON,
    SUBMIT_BUTTON,
    SUBMITTING_MESSAGE,
    TIMER_TEMPLATE,
    USER_INFO_TEMPLATE,
    WARNINGS_TEMPLATE,
    WINDOW_TITLE,
)
from exam_app.core.device_check import DeviceProfile
from exam_app.core.markdown_renderer import renderer
from exam_app.core.models import SanitizedQuestion
from exam_app.core.services.exam_session import (
    BLUR_WARNING_REASON,
    LOADING_FAILED_NOTICE,
    VISIBILITY_WARNING_REASON,
    ExamConfig,
    ExamSession,
    ExamSessionListener,
    SessionOutcome,
    SessionState,
    format_time,
)
from exam_app.core.services.identity_handoff import IdentityHandoff
from exam_app.styling.styles import Styles
from exam_app.ui.background import BackgroundTask, run_in_background
from exam_app.ui.components.webcam_panel import WebcamPanel
from exam_app.ui.dialog_helpers import confirm_submit, show_error, show_warning
from exam_app.ui.login_dialog import LoginDialog

logger = logging.getLogger(__name__)


class ExamPage(Enum):
    """Pages of the central stack."""

    STATUS = auto()
    QUESTION = auto()
    RESULT = auto()


def _client_user_agent() -> str:
    return f"{APP_NAME}/{APP_VERSION} ({QSysInfo.prettyProductName()}; {QSysInfo.productType()})"


class ExamWindow(QMainWindow, ExamSessionListener):
    """Main Qt window orchestrating login hand-off, exam and result."""

    def __init__(self, api_client: ExamApiClient, handoff: IdentityHandoff) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(960, 680)

        self._api = api_client
        self._handoff = handoff
        self._session: ExamSession | None = None
        self._tasks: set[BackgroundTask] = set()

        self._build_ui()
        self._configure_timer()
        self.setStyleSheet(Styles.get_main_window_style())
        QGuiApplication.instance().applicationStateChanged.connect(self._handle_application_state)

    # --- UI construction ---

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)
        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        header = QFrame(self)
        header.setObjectName("card")
        header_row = QHBoxLayout()
        header.setLayout(header_row)
        self.user_label = QLabel("", self)
        self.timer_label = QLabel("", self)
        self.timer_label.setStyleSheet(Styles.get_timer_style())
        self.warnings_label = QLabel("", self)
        self.warnings_label.setStyleSheet(Styles.get_warning_style())
        header_row.addWidget(self.user_label)
        header_row.addStretch()
        header_row.addWidget(self.timer_label)
        header_row.addWidget(self.warnings_label)
        root_layout.addWidget(header)

        body_row = QHBoxLayout()
        self.page_stack = QStackedWidget(self)
        self.page_stack.addWidget(self._build_status_page())
        self.page_stack.addWidget(self._build_question_page())
        self.page_stack.addWidget(self._build_result_page())
        body_row.addWidget(self.page_stack, stretch=1)

        self.webcam_panel = WebcamPanel(self)
        self.webcam_panel.setVisible(False)
        self.webcam_panel.ready.connect(self._handle_webcam_ready)
        self.webcam_panel.failed.connect(self._handle_webcam_failed)
        self.webcam_panel.lost.connect(self._handle_webcam_lost)
        body_row.addWidget(self.webcam_panel, alignment=Qt.AlignTop)
        root_layout.addLayout(body_row, stretch=1)

        self._show_page(ExamPage.STATUS)

    def _build_status_page(self) -> QWidget:
        page = QWidget(self)
        layout = QVBoxLayout()
        page.setLayout(layout)
        self.status_label = QLabel(LOADING_MESSAGE, page)
        self.status_label.setWordWrap(True)
        self.status_label.setAlignment(Qt.AlignCenter)
        self.status_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.status_label, stretch=1)

        self.retry_device_button = QPushButton(RETRY_DEVICE_BUTTON, page)
        self.retry_device_button.setVisible(False)
        self.retry_device_button.clicked.connect(self._run_device_check)
        layout.addWidget(self.retry_device_button, alignment=Qt.AlignCenter)
        return page

    def _build_question_page(self) -> QWidget:
        page = QFrame(self)
        page.setObjectName("card")
        layout = QVBoxLayout()
        page.setLayout(layout)

        self.progress_label = QLabel("", page)
        self.progress_label.setStyleSheet(Styles.get_secondary_text_style())
        layout.addWidget(self.progress_label)

        self.question_view = QTextBrowser(page)
        self.question_view.setTextInteractionFlags(Qt.NoTextInteraction)
        self.question_view.setContextMenuPolicy(Qt.NoContextMenu)
        layout.addWidget(self.question_view, stretch=1)

        self.option_group = QButtonGroup(page)
        self.option_buttons: list[QRadioButton] = []
        for option_id, _letter in enumerate(OPTION_LETTERS):
            button = QRadioButton(page)
            self.option_group.addButton(button, option_id)
            self.option_buttons.append(button)
            layout.addWidget(button)
        self.option_group.idClicked.connect(self._handle_option_clicked)

        nav_row = QHBoxLayout()
        self.prev_button = QPushButton(PREV_BUTTON, page)
        self.prev_button.clicked.connect(self._handle_previous)
        nav_row.addWidget(self.prev_button)
        self.next_button = QPushButton(NEXT_BUTTON, page)
        self.next_button.clicked.connect(self._handle_next)
        nav_row.addWidget(self.next_button)
        nav_row.addStretch()
        self.submit_button = QPushButton(SUBMIT_BUTTON, page)
        self.submit_button.setObjectName("primary")
        self.submit_button.clicked.connect(self._handle_submit)
        nav_row.addWidget(self.submit_button)
        layout.addLayout(nav_row)
        return page

    def _build_result_page(self) -> QWidget:
        page = QFrame(self)
        page.setObjectName("card")
        layout = QVBoxLayout()
        page.setLayout(layout)
        self.result_label = QLabel("", page)
        self.result_label.setWordWrap(True)
        self.result_label.setAlignment(Qt.AlignCenter)
        self.result_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.result_label, stretch=1)
        return page

    def _configure_timer(self) -> None:
        self.exam_timer = QTimer(self)
        self.exam_timer.setInterval(TIMER_TICK_MS)
        self.exam_timer.timeout.connect(self._handle_tick)

    def _show_page(self, page: ExamPage) -> None:
        index_map = {
            ExamPage.STATUS: 0,
            ExamPage.QUESTION: 1,
            ExamPage.RESULT: 2,
        }
        self.page_stack.setCurrentIndex(index_map[page])

    def _show_status(self, message: str, *, allow_device_retry: bool = False) -> None:
        self.status_label.setText(message)
        self.retry_device_button.setVisible(allow_device_retry)
        self._show_page(ExamPage.STATUS)

    # --- Exam start-up ---

    def start_exam(self) -> None:
        """Fetch the exam rules, then walk the session through its start-up states."""
        self._show_status(LOADING_MESSAGE)
        self._run_task(self._api.fetch_config, self._handle_config_loaded, self._handle_config_failed)

    def _handle_config_loaded(self, config: ExamConfig) -> None:
        self._session = ExamSession(config, self._handoff, listener=self)
        if not self._session.initialize():
            return
        identity = self._session.identity
        self.user_label.setText(USER_INFO_TEMPLATE.format(name=identity.user_name, email=identity.email))
        self._update_warnings_label()
        self._run_device_check()

    def _handle_config_failed(self, message: str) -> None:
        logger.error("Could not load exam configuration: %s", message)
        show_error(self, "Exam unavailable", LOADING_FAILED_NOTICE)
        self._show_status("The exam server could not be reached.")

    def _run_device_check(self) -> None:
        session = self._session
        if session is None or session.state is not SessionState.DEVICE_CHECK:
            return
        profile = DeviceProfile(
            user_agent=_client_user_agent(),
            viewport_width=self.width(),
            viewport_height=self.height(),
        )
        if not session.check_device(profile):
            self._show_status(DEVICE_BLOCKED_MESSAGE, allow_device_retry=True)
            return
        session.begin_loading()
        self._show_status(LOADING_MESSAGE)
        self._run_task(self._api.fetch_questions, self._handle_questions_loaded, self._handle_questions_failed)

    def _handle_questions_loaded(self, questions: list[SanitizedQuestion]) -> None:
        session = self._session
        if session is None or not session.load_questions(questions):
            return
        if not session.config.webcam_required:
            session.activate(webcam_available=False)
            return
        self.webcam_panel.setVisible(True)
        # The gate resolves when the panel emits ready or failed.
        if not self.webcam_panel.start():
            session.activate(webcam_available=False)

    def _handle_questions_failed(self, message: str) -> None:
        if self._session is not None:
            self._session.fail_loading(message)

    def _handle_webcam_ready(self) -> None:
        if self._session is not None and self._session.state is SessionState.LOADING:
            self._session.activate(webcam_available=True)

    def _handle_webcam_failed(self, message: str) -> None:
        logger.error("Webcam failed to start: %s", message)
        if self._session is not None and self._session.state is SessionState.LOADING:
            self._session.activate(webcam_available=False)

    def _handle_webcam_lost(self, message: str) -> None:
        logger.error("Webcam lost: %s", message)
        if self._session is not None:
            self._session.webcam_lost()

    # --- Session listener hooks ---

    def on_state_changed(self, state: SessionState) -> None:
        if state is SessionState.ACTIVE:
            self._show_page(ExamPage.QUESTION)
            self.exam_timer.start()
        elif state is SessionState.FINISHING:
            self.exam_timer.stop()
            self._set_navigation_enabled(False)
            self._show_status(SUBMITTING_MESSAGE)
            payload = self._session.build_payload()
            self._run_task(
                lambda: self._api.submit(payload),
                self._handle_submit_succeeded,
                self._handle_submit_failed,
            )

    def on_redirect_to_login(self) -> None:
        QTimer.singleShot(0, self._prompt_login)

    def on_notice(self, message: str) -> None:
        self._show_status(message)
        QTimer.singleShot(0, lambda: show_warning(self, "Exam", message))

    def on_timer(self, remaining_seconds: int) -> None:
        self.timer_label.setText(TIMER_TEMPLATE.format(time=format_time(remaining_seconds)))

    def on_warning(self, count: int, maximum: int, reason: str) -> None:
        self._update_warnings_label()
        QTimer.singleShot(0, lambda: show_warning(self, "Warning", f"Warning {count}/{maximum}: {reason}"))

    def on_question_changed(self, index: int, question: SanitizedQuestion, selected: str | None) -> None:
        total = len(self._session.questions)
        self.progress_label.setText(PROGRESS_TEMPLATE.format(number=index + 1, total=total))
        self.question_view.setHtml(renderer.render_question(index, question))

        # Exclusive groups cannot be fully unchecked.
        self.option_group.setExclusive(False)
        for option_id, button in enumerate(self.option_buttons):
            has_option = option_id < len(question.options)
            button.setVisible(has_option)
            if has_option:
                letter = OPTION_LETTERS[option_id]
                button.setText(f"{letter}. {question.options[option_id]}")
                button.setChecked(selected == letter)
            else:
                button.setChecked(False)
        self.option_group.setExclusive(True)

        self.prev_button.setEnabled(index > 0)
        self.next_button.setEnabled(index < total - 1)

    def on_finished(self, outcome: SessionOutcome) -> None:
        self.webcam_panel.stop()
        self.result_label.setText(outcome.message)
        self._show_page(ExamPage.RESULT)
        if not outcome.succeeded:
            QTimer.singleShot(0, lambda: show_error(self, "Submission failed", outcome.message))

    # --- Event handlers ---

    def _handle_tick(self) -> None:
        if self._session is not None:
            self._session.tick()

    def _handle_option_clicked(self, option_id: int) -> None:
        if self._session is not None and self._session.state is SessionState.ACTIVE:
            self._session.select_option(OPTION_LETTERS[option_id])

    def _handle_previous(self) -> None:
        if self._session is not None:
            self._session.go_previous()

    def _handle_next(self) -> None:
        if self._session is not None:
            self._session.go_next()

    def _handle_submit(self) -> None:
        if self._session is not None:
            self._session.request_submit(lambda: confirm_submit(self))

    def _handle_submit_succeeded(self, score: object) -> None:
        self._session.complete_submission(score)

    def _handle_submit_failed(self, message: str) -> None:
        self._session.fail_submission(message)

    def _handle_application_state(self, state: Qt.ApplicationState) -> None:
        if self._session is None:
            return
        if state in (Qt.ApplicationInactive, Qt.ApplicationHidden, Qt.ApplicationSuspended):
            self._session.register_suspicion(BLUR_WARNING_REASON)

    def changeEvent(self, event: QEvent) -> None:
        if event.type() == QEvent.WindowStateChange and self.isMinimized() and self._session is not None:
            self._session.register_suspicion(VISIBILITY_WARNING_REASON)
        super().changeEvent(event)

    def closeEvent(self, event) -> None:
        self.exam_timer.stop()
        self.webcam_panel.stop()
        super().closeEvent(event)

    # --- Helpers ---

    def _prompt_login(self) -> None:
        dialog = LoginDialog(self._handoff, self)
        if dialog.exec():
            self.start_exam()
        else:
            self.close()

    def _set_navigation_enabled(self, enabled: bool) -> None:
        for widget in (self.prev_button, self.next_button, self.submit_button, *self.option_buttons):
            widget.setEnabled(enabled)

    def _update_warnings_label(self) -> None:
        if self._session is None:
            return
        self.warnings_label.setText(
            WARNINGS_TEMPLATE.format(count=self._session.warning_count, maximum=self._session.config.max_warnings)
        )

    def _run_task(self, fn, on_success, on_failure) -> None:
        task: BackgroundTask

        def succeeded(result: object) -> None:
            self._tasks.discard(task)
            on_success(result)

        def failed(message: str) -> None:
            self._tasks.discard(task)
            on_failure(message)

        task = run_in_background(fn, succeeded, failed)
        self._tasks.add(task)
