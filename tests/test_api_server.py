"""Tests for the HTTP API exposed to the hosting UI."""

import pytest
from fastapi.testclient import TestClient

from ballot_quiz.constants.picker_constants import EXPORT_FILE_NAME
from ballot_quiz.constants.quiz_constants import (
    FEEDBACK_CORRECT_MESSAGE,
    NO_ANSWER_SELECTED_MESSAGE,
    QUIZ_COMPLETE_MESSAGE,
)
from ballot_quiz.core.candidate_picker import CandidatePicker
from ballot_quiz.core.models import Candidate
from ballot_quiz.core.quiz_player import QuizPlayer
from ballot_quiz.server.api_server import create_api_app
from conftest import FakeCandidateCatalog, numbered_candidates


@pytest.fixture
def client(quiz_provider):
    candidates = numbered_candidates(20) + [
        Candidate(ballot_number=21, name="Santos", party="PDP"),
    ]
    app = create_api_app(QuizPlayer(quiz_provider), CandidatePicker(FakeCandidateCatalog(candidates)))
    with TestClient(app) as test_client:
        yield test_client


class TestQuizEndpoints:
    def test_catalog_loaded_on_startup(self, client):
        response = client.get("/quizzes")
        assert response.status_code == 200
        assert response.json() == [
            {"id": "geo", "name": "Geography"},
            {"id": "empty", "name": "Empty"},
        ]

    def test_start_without_selection_reports_warning(self, client):
        body = client.post("/quiz/start").json()
        assert body["warning"] is not None
        assert body["question"] is None

    def test_play_through_quiz(self, client):
        client.post("/quiz/select", json={"quiz_id": "geo"})
        body = client.post("/quiz/start").json()
        assert body["title"] == "Geography"
        assert body["question"]["id"] == "q-capital"
        assert "<p>Capital of England?</p>" in body["question"]["prompt_html"]
        assert [option["value"] for option in body["options"]] == ["1", "3"]
        assert body["can_submit"]

        body = client.post("/quiz/submit").json()
        assert body["warning"] == NO_ANSWER_SELECTED_MESSAGE
        assert not body["submitted"]

        client.post("/quiz/answer", json={"value": "1"})
        body = client.post("/quiz/answer", json={"value": "3"}).json()
        assert body["selected_answers"] == ["3"]

        body = client.post("/quiz/submit").json()
        assert body["feedback"] == "correct"
        assert body["feedback_message"] == FEEDBACK_CORRECT_MESSAGE
        assert body["score"] == 1
        statuses = {option["value"]: option["status"] for option in body["options"]}
        assert statuses == {"1": "none", "3": "correct"}

        for _ in range(3):
            body = client.post("/quiz/next").json()
        assert body["finished"]
        assert body["message"] == QUIZ_COMPLETE_MESSAGE
        assert body["score"] == 1

    def test_invalid_answer_value(self, client):
        client.post("/quiz/select", json={"quiz_id": "geo"})
        client.post("/quiz/start")
        response = client.post("/quiz/answer", json={"value": "9"})
        assert response.status_code == 422

    def test_failed_load_surfaces_error(self, client):
        client.post("/quiz/select", json={"quiz_id": "missing"})
        body = client.post("/quiz/start").json()
        assert body["error"] == "Unknown quiz 'missing'"
        assert not body["is_loaded"]


class TestCandidateEndpoints:
    def test_columns_follow_width(self, client):
        body = client.get("/candidates", params={"width": 400}).json()
        assert body["column_size"] == 33
        assert len(body["columns"]) == 1
        assert body["columns"][0][0]["label"] == "1. Candidate 1 (IND)"

        body = client.get("/candidates", params={"width": 1280}).json()
        assert [len(column) for column in body["columns"]] == [14, 7]

    def test_capacity_is_enforced(self, client):
        for number in range(1, 13):
            response = client.post("/candidates/toggle", json={"ballot_number": number, "selected": True})
            assert response.status_code == 200
        response = client.post("/candidates/toggle", json={"ballot_number": 13, "selected": True})
        assert response.status_code == 409
        assert client.get("/candidates").json()["selected_count"] == 12

    def test_unknown_candidate(self, client):
        response = client.post("/candidates/toggle", json={"ballot_number": 404, "selected": True})
        assert response.status_code == 404

    def test_export_download(self, client):
        client.post("/candidates/toggle", json={"ballot_number": 21, "selected": True})
        client.post("/candidates/toggle", json={"ballot_number": 5, "selected": True})

        response = client.get("/candidates/export")

        assert response.status_code == 200
        assert response.text == "5. Candidate 5 (IND)\n21. Santos (PDP)"
        assert response.headers["content-type"].startswith("text/plain")
        assert EXPORT_FILE_NAME in response.headers["content-disposition"]
