"""Static metadata describing SecureExam."""

APP_NAME = "SecureExam"
APP_VERSION = "0.1"
APP_ABOUT_TEXT = (
    "SecureExam is a proctored multiple-choice exam application built with FastAPI and Qt. "
    "Candidates take a timed exam in the browser or the desktop client while an admin "
    "manages the question bank and reviews results."
)

EXAM_RULES_TEXT = (
    "Stay on this window for the whole exam. Switching tabs, minimising the window or "
    "moving focus to another application counts as a warning. Reaching the warning limit "
    "submits your exam automatically."
)
