"""Shared fixtures: fake providers, sample questions and a Qt core application."""

from __future__ import annotations

import asyncio

import pytest
import requests
from PySide6.QtCore import QCoreApplication

from ballot_quiz.core.models import Candidate, Question, QuizSummary
from ballot_quiz.providers.base import ProviderError


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


def make_question(
    question_id: str,
    slots: dict[int, str],
    correct: str,
    *,
    allow_multiple: bool = False,
    prompt: str = "",
) -> Question:
    return Question(
        id=question_id,
        prompt=prompt or f"Question {question_id}",
        option_slots=tuple(slots.get(slot) for slot in range(1, 6)),
        allow_multiple=allow_multiple,
        correct_answers=correct,
    )


def capitals_question() -> Question:
    return make_question("q-capital", {1: "Paris", 3: "London"}, "3", prompt="Capital of England?")


def sample_questions() -> list[Question]:
    return [
        capitals_question(),
        make_question(
            "q-multi",
            {1: "Madrid", 2: "Sydney", 3: "Lisbon", 5: "Toronto"},
            "1;3",
            allow_multiple=True,
        ),
        make_question("q-last", {2: "Yes", 4: "No"}, "2"),
    ]


class FakeQuizProvider:
    """In-memory quiz backend; ``hold(quiz_id)`` delays that fetch until released."""

    def __init__(
        self,
        quizzes: list[QuizSummary] | None = None,
        questions: dict[str, list[Question]] | None = None,
        *,
        fail_catalog: bool = False,
    ) -> None:
        self.quizzes = quizzes or []
        self.questions = questions or {}
        self.fail_catalog = fail_catalog
        self.calls: list[str] = []
        self._held: dict[str, asyncio.Event] = {}

    def hold(self, quiz_id: str) -> None:
        self._held[quiz_id] = asyncio.Event()

    def release(self, quiz_id: str) -> None:
        self._held[quiz_id].set()

    async def get_quizzes(self) -> list[QuizSummary]:
        if self.fail_catalog:
            raise ProviderError("Quiz catalog unavailable")
        return list(self.quizzes)

    async def get_questions(self, quiz_id: str) -> list[Question]:
        self.calls.append(quiz_id)
        gate = self._held.get(quiz_id)
        if gate is not None:
            await gate.wait()
        if quiz_id not in self.questions:
            raise ProviderError(f"Unknown quiz '{quiz_id}'")
        return list(self.questions[quiz_id])


class FakeCandidateCatalog:
    def __init__(self, candidates: list[Candidate] | None = None, *, fail: bool = False) -> None:
        self.candidates = candidates or []
        self.fail = fail

    async def get_candidates(self) -> list[Candidate]:
        if self.fail:
            raise ProviderError("Catalog unavailable")
        return list(self.candidates)


def numbered_candidates(count: int) -> list[Candidate]:
    # Reverse order so tests notice missing sorting.
    return [
        Candidate(ballot_number=number, name=f"Candidate {number}", party="IND")
        for number in range(count, 0, -1)
    ]


@pytest.fixture
def quiz_provider() -> FakeQuizProvider:
    return FakeQuizProvider(
        quizzes=[QuizSummary(id="geo", name="Geography"), QuizSummary(id="empty", name="Empty")],
        questions={"geo": sample_questions(), "empty": []},
    )


class FakeResponse:
    def __init__(self, payload, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


class FakeHttpSession:
    """Stands in for ``requests``; unknown URLs fail like an unreachable host."""

    def __init__(self, routes: dict[str, FakeResponse]) -> None:
        self.routes = routes
        self.requested: list[str] = []

    def get(self, url: str, timeout: float) -> FakeResponse:
        self.requested.append(url)
        route = self.routes.get(url)
        if route is None:
            raise requests.ConnectionError(f"no route to {url}")
        return route
