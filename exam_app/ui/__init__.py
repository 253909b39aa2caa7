"""Qt UI components for the desktop exam client."""

from .dialog_helpers import confirm_submit, show_error, show_warning
from .exam_window import ExamWindow
from .input_guard import InputGuard
from .login_dialog import LoginDialog

__all__ = [
    "ExamWindow",
    "InputGuard",
    "LoginDialog",
    "confirm_submit",
    "show_error",
    "show_warning",
]
