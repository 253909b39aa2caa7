"""Qt UI constants used across the exam client widgets."""

WINDOW_TITLE: str = "SecureExam"
LOGIN_DIALOG_TITLE: str = "Sign in to the exam"

PREV_BUTTON: str = "Previous"
NEXT_BUTTON: str = "Next"
SUBMIT_BUTTON: str = "Submit Test"
RETRY_DEVICE_BUTTON: str = "Check Again"

TIMER_TEMPLATE: str = "Time left: {time}"
WARNINGS_TEMPLATE: str = "Warnings: {count} / {maximum}"
PROGRESS_TEMPLATE: str = "Question {number} of {total}"
USER_INFO_TEMPLATE: str = "{name} ({email})"

DEVICE_BLOCKED_MESSAGE: str = (
    "This exam must be taken on a laptop or desktop with a large enough window. "
    "Enlarge the window and press \"Check Again\"."
)
WEBCAM_ACTIVE_MESSAGE: str = "Webcam is active. Stay in frame."
WEBCAM_MISSING_MESSAGE: str = "Webcam not available. Exam cannot start."
WEBCAM_FAILED_MESSAGE: str = "Webcam could not be started. Exam cannot start."
WEBCAM_LOST_MESSAGE: str = "Webcam stopped."
WEBCAM_START_TIMEOUT_MS: int = 5000
LOADING_MESSAGE: str = "Loading questions…"
SUBMITTING_MESSAGE: str = "Submitting your exam…"
CONFIRM_SUBMIT_MESSAGE: str = "Are you sure you want to submit the test now?"
