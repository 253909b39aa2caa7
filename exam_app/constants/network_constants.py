"""Network configuration constants for the exam application."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8000
DEFAULT_SERVER_URL: str = "http://127.0.0.1:8000"
CLIENT_TIMEOUT_SECONDS: float = 10.0
ADMIN_COOKIE_NAME: str = "exam_admin_session"
ROBOTS_TAG: str = "noindex, nofollow"
