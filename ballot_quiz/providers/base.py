"""Interfaces for the remote data sources the widgets depend on."""

from __future__ import annotations

from typing import Protocol

from ballot_quiz.core.models import Candidate, Question, QuizSummary


class ProviderError(Exception):
    """Raised when a remote fetch fails or returns unusable data."""


class QuizDataProvider(Protocol):
    """Backend owning the quiz catalog and question lists."""

    async def get_quizzes(self) -> list[QuizSummary]: ...

    async def get_questions(self, quiz_id: str) -> list[Question]: ...


class CandidateCatalog(Protocol):
    """Static candidate catalog."""

    async def get_candidates(self) -> list[Candidate]: ...
