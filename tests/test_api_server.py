import json

from exam_app.constants.network_constants import ADMIN_COOKIE_NAME

VALID_QUESTION = {"question": "Capital of France?", "options": ["Paris", "Rome", "Oslo", "Bern"], "correct": "a"}


def test_pages_are_served(client):
    for path in ("/", "/exam.html", "/admin.html"):
        response = client.get(path)
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")


def test_robots_txt_and_header(client):
    response = client.get("/robots.txt")

    assert response.text == "User-agent: *\nDisallow: /"
    assert response.headers["X-Robots-Tag"] == "noindex, nofollow"
    assert client.get("/api/questions").headers["X-Robots-Tag"] == "noindex, nofollow"
    assert client.get("/api/admin/results").headers["X-Robots-Tag"] == "noindex, nofollow"


def test_exam_config_reflects_settings(client):
    body = client.get("/api/exam/config").json()

    assert body["durationMinutes"] == 15
    assert body["maxWarnings"] == 3
    assert body["warningDebounceMs"] == 2000
    assert body["webcamRequired"] is True


def test_public_questions_never_include_answers(client):
    questions = client.get("/api/questions").json()["questions"]

    assert [question["id"] for question in questions] == [1, 2, 3]
    assert all("correct" not in question for question in questions)


def test_question_limit_returns_random_subset(client, manager):
    manager.settings.question_limit = 2

    questions = client.get("/api/questions").json()["questions"]

    assert len(questions) == 2


def test_submit_scores_and_stores_result(client, settings):
    response = client.post(
        "/api/submit",
        json={
            "userName": "Ana",
            "email": "ana@example.com",
            "answers": [
                {"questionId": 1, "selectedOption": "A"},
                {"questionId": 2, "selectedOption": "B"},
                {"questionId": 3, "selectedOption": "D"},
            ],
            "warnings": ["Window lost focus (possible tab switch or app change)."],
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert (body["correct"], body["total"], body["percentage"]) == (2, 3, 66.67)
    assert "answers" not in body

    stored = json.loads(settings.results_path.read_text(encoding="utf-8"))
    assert len(stored) == 1
    record = stored[0]
    assert record["id"] == 1
    assert record["userName"] == "Ana"
    assert record["submittedAt"].endswith("Z")
    assert len(record["warnings"]) == 1
    assert len(record["answers"]) == 3


def test_submit_reveals_breakdown_when_enabled(client, manager):
    manager.settings.reveal_answers = True

    body = client.post(
        "/api/submit",
        json={"userName": "Ana", "email": "ana@example.com", "answers": [{"questionId": 1, "selectedOption": "a"}]},
    ).json()

    assert body["correct"] == 1
    assert body["answers"][0]["correctOption"] == "A"
    assert body["answers"][0]["isCorrect"] is True


def test_submit_ignores_entries_without_question_id(client):
    body = client.post(
        "/api/submit",
        json={"userName": "Ana", "email": "ana@example.com", "answers": [{"selectedOption": "A"}]},
    ).json()

    assert body["correct"] == 0
    assert body["total"] == 3


def test_submit_rejects_missing_fields(client, settings):
    missing_answers = client.post("/api/submit", json={"userName": "Ana", "email": "ana@example.com"})
    missing_name = client.post("/api/submit", json={"email": "ana@example.com", "answers": []})
    wrong_type = client.post("/api/submit", json={"userName": "Ana", "email": "a@b.co", "answers": "A"})

    assert missing_answers.status_code == 400
    assert missing_name.status_code == 400
    assert wrong_type.status_code == 400
    assert missing_answers.json() == {"detail": "Invalid payload"}
    assert json.loads(settings.results_path.read_text(encoding="utf-8")) == []


def test_malformed_json_body_is_bad_request(client):
    response = client.post("/api/submit", content="{oops", headers={"content-type": "application/json"})

    assert response.status_code == 400


def test_admin_routes_require_login(client):
    assert client.get("/api/admin/questions").status_code == 401
    assert client.get("/api/admin/results").status_code == 401
    assert client.post("/api/admin/questions", json=VALID_QUESTION).status_code == 401
    assert client.put("/api/admin/questions/1", json=VALID_QUESTION).status_code == 401
    assert client.delete("/api/admin/questions/1").status_code == 401


def test_wrong_password_is_rejected(client):
    response = client.post("/api/admin/login", json={"password": "nope"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid password"
    assert ADMIN_COOKIE_NAME not in response.cookies


def test_forged_cookie_is_rejected(client):
    client.cookies.set(ADMIN_COOKIE_NAME, "true")

    assert client.get("/api/admin/questions").status_code == 401


def test_login_then_logout(admin_client):
    assert admin_client.get("/api/admin/questions").status_code == 200

    assert admin_client.post("/api/admin/logout").json() == {"success": True}
    assert admin_client.get("/api/admin/questions").status_code == 401


def test_admin_question_listing_includes_correct_answers(admin_client):
    questions = admin_client.get("/api/admin/questions").json()["questions"]

    assert [question["correct"] for question in questions] == ["A", "B", "C"]


def test_admin_create_question(admin_client, client):
    response = admin_client.post("/api/admin/questions", json=VALID_QUESTION)

    assert response.status_code == 201
    question = response.json()["question"]
    assert question["id"] == 4
    assert question["correct"] == "A"
    assert len(client.get("/api/questions").json()["questions"]) == 4


def test_admin_create_with_three_options_leaves_bank_unchanged(admin_client):
    payload = dict(VALID_QUESTION, options=["Paris", "Rome", "Oslo"])

    response = admin_client.post("/api/admin/questions", json=payload)

    assert response.status_code == 400
    assert len(admin_client.get("/api/admin/questions").json()["questions"]) == 3


def test_admin_update_question(admin_client):
    response = admin_client.put("/api/admin/questions/2", json=VALID_QUESTION)

    assert response.status_code == 200
    assert response.json()["question"]["id"] == 2
    questions = admin_client.get("/api/admin/questions").json()["questions"]
    assert questions[1]["question"] == "Capital of France?"


def test_admin_update_and_delete_unknown_question(admin_client):
    update = admin_client.put("/api/admin/questions/999", json=VALID_QUESTION)
    delete = admin_client.delete("/api/admin/questions/999")

    assert update.status_code == 404
    assert delete.status_code == 404
    assert delete.json() == {"detail": "Question not found"}
    assert len(admin_client.get("/api/admin/questions").json()["questions"]) == 3


def test_admin_delete_question(admin_client):
    response = admin_client.delete("/api/admin/questions/1")

    assert response.status_code == 200
    assert response.json()["deleted"]["id"] == 1
    ids = [question["id"] for question in admin_client.get("/api/admin/questions").json()["questions"]]
    assert ids == [2, 3]


def test_admin_results_list_submissions(admin_client):
    admin_client.post(
        "/api/submit",
        json={"userName": "Ben", "email": "ben@example.com", "answers": [{"questionId": 1, "selectedOption": "A"}]},
    )

    results = admin_client.get("/api/admin/results").json()["results"]

    assert len(results) == 1
    assert results[0]["email"] == "ben@example.com"
    assert results[0]["correct"] == 1


def test_created_question_is_returned_unchanged_by_admin_listing(admin_client):
    payload = {"question": "  Pick **one**  ", "options": ["x ", " y", "z", "w"], "correct": "d"}
    created = admin_client.post("/api/admin/questions", json=payload).json()["question"]

    listed = admin_client.get("/api/admin/questions").json()["questions"][-1]

    assert listed == created
    assert listed["question"] == payload["question"]
    assert listed["options"] == payload["options"]
    assert listed["correct"] == "D"


def test_update_unknown_id_is_not_found_even_with_invalid_body(admin_client):
    payload = {"question": 7, "options": [1, 2, 3, 4], "correct": ["A"]}

    response = admin_client.put("/api/admin/questions/999", json=payload)

    assert response.status_code == 404
    assert response.json() == {"detail": "Question not found"}


def test_update_existing_id_with_non_text_options_is_bad_request(admin_client):
    payload = dict(VALID_QUESTION, options=[1, 2, 3, 4])

    response = admin_client.put("/api/admin/questions/1", json=payload)

    assert response.status_code == 400
    assert admin_client.get("/api/admin/questions").json()["questions"][0]["options"] == [
        "<script>",
        "<js>",
        "<javascript>",
        "<code>",
    ]


def test_submit_accepts_null_warnings(client, settings):
    response = client.post(
        "/api/submit",
        json={"userName": "Ana", "email": "ana@example.com", "answers": [], "warnings": None},
    )

    assert response.status_code == 200
    stored = json.loads(settings.results_path.read_text(encoding="utf-8"))
    assert stored[0]["warnings"] == []


def test_exam_page_restarts_after_device_check_on_resize(client):
    page = client.get("/exam.html").text

    assert "async function startExam(session)" in page
    assert "if (isDeviceSupported()) startExam(session);" in page
