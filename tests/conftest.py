import random

import pytest
from fastapi.testclient import TestClient

from exam_app.core.exam_manager import ExamManager
from exam_app.core.settings import ExamSettings
from exam_app.server.api_server import create_api_app


@pytest.fixture
def settings(tmp_path):
    return ExamSettings(data_dir=tmp_path / "data", admin_password="secret")


@pytest.fixture
def manager(settings):
    exam_manager = ExamManager(settings, rng=random.Random(7))
    exam_manager.prepare_storage()
    return exam_manager


@pytest.fixture
def client(manager):
    with TestClient(create_api_app(manager)) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client):
    response = client.post("/api/admin/login", json={"password": "secret"})
    assert response.status_code == 200
    return client
