from pathlib import Path

import pytest

from exam_app.core.settings import ExamSettings


def test_defaults_from_empty_environment():
    settings = ExamSettings.from_env({})

    assert settings.data_dir == Path("data")
    assert settings.admin_password == "admin123"
    assert settings.exam_duration_minutes == 15
    assert settings.max_warnings == 3
    assert settings.warning_debounce_ms == 2000
    assert settings.webcam_required is True
    assert settings.question_limit is None
    assert settings.reveal_answers is False
    assert (settings.host, settings.port) == ("0.0.0.0", 8000)


def test_environment_overrides():
    settings = ExamSettings.from_env(
        {
            "EXAM_DATA_DIR": "/srv/exam",
            "ADMIN_PASSWORD": "hunter2",
            "EXAM_DURATION_MINUTES": "30",
            "EXAM_MAX_WARNINGS": "5",
            "EXAM_WEBCAM_REQUIRED": "no",
            "EXAM_QUESTION_LIMIT": "10",
            "EXAM_REVEAL_ANSWERS": "TRUE",
            "PORT": "9000",
        }
    )

    assert settings.questions_path == Path("/srv/exam/questions.json")
    assert settings.results_path == Path("/srv/exam/results.json")
    assert settings.admin_password == "hunter2"
    assert settings.exam_duration_minutes == 30
    assert settings.max_warnings == 5
    assert settings.webcam_required is False
    assert settings.question_limit == 10
    assert settings.reveal_answers is True
    assert settings.port == 9000


@pytest.mark.parametrize(
    "environ",
    [
        {"EXAM_DURATION_MINUTES": "fifteen"},
        {"EXAM_DURATION_MINUTES": "0"},
        {"EXAM_MAX_WARNINGS": "-1"},
        {"EXAM_QUESTION_LIMIT": "0"},
        {"EXAM_WEBCAM_REQUIRED": "maybe"},
    ],
)
def test_invalid_values_are_rejected(environ):
    with pytest.raises(ValueError):
        ExamSettings.from_env(environ)


def test_exam_config_uses_camel_case_keys():
    config = ExamSettings(exam_duration_minutes=20, question_limit=5).exam_config()

    assert config == {
        "durationMinutes": 20,
        "maxWarnings": 3,
        "warningDebounceMs": 2000,
        "webcamRequired": True,
        "deviceWarning": True,
        "questionLimit": 5,
    }
