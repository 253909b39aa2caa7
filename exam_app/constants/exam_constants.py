"""Exam-related constants shared across server, client and UI layers."""

OPTION_LETTERS: tuple[str, ...] = ("A", "B", "C", "D")
OPTION_COUNT: int = len(OPTION_LETTERS)

DEFAULT_DATA_DIR: str = "data"
QUESTIONS_FILENAME: str = "questions.json"
RESULTS_FILENAME: str = "results.json"
DEFAULT_ADMIN_PASSWORD: str = "admin123"

DEFAULT_EXAM_DURATION_MINUTES: int = 15
DEFAULT_MAX_WARNINGS: int = 3
DEFAULT_WARNING_DEBOUNCE_MS: int = 2000
TIMER_TICK_MS: int = 1000

# Device gating thresholds for the exam client.
MIN_VIEWPORT_WIDTH: int = 700
MIN_VIEWPORT_HEIGHT: int = 500
MOBILE_USER_AGENT_PATTERN: str = r"Mobi|Android|iPhone|iPad|iPod"

SAMPLE_QUESTIONS: list[dict[str, object]] = [
    {
        "id": 1,
        "question": "Which HTML tag is used to include JavaScript code?",
        "options": ["<script>", "<js>", "<javascript>", "<code>"],
        "correct": "A",
    },
    {
        "id": 2,
        "question": "Which HTTP method is generally used to create a new resource?",
        "options": ["GET", "POST", "PUT", "DELETE"],
        "correct": "B",
    },
    {
        "id": 3,
        "question": "Which of the following is NOT a JavaScript data type?",
        "options": ["Number", "String", "Float", "Boolean"],
        "correct": "C",
    },
]
