"""Quiz player state shared between the hosting UI and the API layer."""

from __future__ import annotations

import asyncio
import logging
import random

from PySide6.QtCore import QObject, Signal

from ballot_quiz.constants.quiz_constants import (
    ALREADY_SUBMITTED_MESSAGE,
    DEFAULT_QUIZ_TITLE,
    NO_ANSWER_SELECTED_MESSAGE,
    NO_QUIZ_SELECTED_MESSAGE,
)
from ballot_quiz.core.models import Feedback, Question, QuizSnapshot, QuizSummary
from ballot_quiz.core.services.quiz_session import (
    NoAnswerSelectedError,
    QuizSession,
    QuizStateError,
)
from ballot_quiz.providers.base import ProviderError, QuizDataProvider

log = logging.getLogger(__name__)


class QuizPlayer(QObject):
    """Facade over the quiz catalog, quiz selection and the answer lifecycle.

    Every mutation publishes a fresh ``QuizSnapshot`` through
    ``state_changed``. User mistakes (submitting nothing, starting without a
    quiz) are reported through ``warning_raised`` and leave the state alone.
    """

    state_changed = Signal(object)
    warning_raised = Signal(str)

    def __init__(
        self,
        provider: QuizDataProvider,
        *,
        shuffle_questions: bool = False,
        shuffle_options: bool = False,
        rng: random.Random | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._provider = provider
        self._session = QuizSession(
            rng,
            shuffle_questions=shuffle_questions,
            shuffle_options=shuffle_options,
        )

        self._quiz_options: list[QuizSummary] = []
        self._selected_quiz_id: str | None = None
        self._quiz_id: str | None = None
        self._is_loaded: bool = False
        self._warning: str | None = None
        self._error: str | None = None
        self._load_generation: int = 0

    # --- Quiz catalog ---

    def load_catalog(self) -> asyncio.Future:
        """Fetch the list of available quizzes in the background."""
        return asyncio.ensure_future(self._fetch_catalog())

    async def _fetch_catalog(self) -> None:
        try:
            quizzes = await self._provider.get_quizzes()
        except ProviderError as exc:
            log.error("Error fetching quizzes: %s", exc)
            self._error = str(exc)
        else:
            self._quiz_options = list(quizzes)
        self._publish()

    # --- Selection ---

    def select_quiz(self, quiz_id: str | None) -> None:
        """Remember the chosen quiz without loading it."""
        self._selected_quiz_id = quiz_id or None
        self._warning = None
        self._publish()

    def start_quiz(self) -> asyncio.Future | None:
        """Commit the selected quiz and start loading its questions."""
        if self._selected_quiz_id is None:
            self._warn(NO_QUIZ_SELECTED_MESSAGE)
            return None
        return self.load_quiz(self._selected_quiz_id)

    def load_quiz(self, quiz_id: str) -> asyncio.Future:
        """Fetch and install the questions of ``quiz_id``.

        Only the most recently issued load is applied; results of older
        loads that complete later are dropped.
        """
        self._load_generation += 1
        return asyncio.ensure_future(self._fetch_questions(self._load_generation, quiz_id))

    async def _fetch_questions(self, generation: int, quiz_id: str) -> None:
        try:
            questions = await self._provider.get_questions(quiz_id)
        except ProviderError as exc:
            if generation != self._load_generation:
                return
            log.error("Error loading quiz questions for %s: %s", quiz_id, exc)
            self._error = str(exc)
            self._publish()
            return

        if generation != self._load_generation:
            log.info("Discarding stale questions for quiz %s", quiz_id)
            return

        self._session.load_questions(questions)
        self._quiz_id = quiz_id
        self._is_loaded = True
        self._warning = None
        self._error = None
        log.info("Loaded quiz %s with %d question(s)", quiz_id, len(questions))
        self._publish()

    # --- Answer lifecycle ---

    def set_answer(self, value: str, is_add: bool = True) -> None:
        try:
            self._session.set_answer(value, is_add)
        except QuizStateError as exc:
            self._warn(ALREADY_SUBMITTED_MESSAGE if self._session.is_submitted() else str(exc))
            return
        self._warning = None
        self._publish()

    def submit(self) -> Feedback | None:
        try:
            feedback = self._session.submit()
        except NoAnswerSelectedError:
            self._warn(NO_ANSWER_SELECTED_MESSAGE)
            return None
        except QuizStateError as exc:
            self._warn(ALREADY_SUBMITTED_MESSAGE if self._session.is_submitted() else str(exc))
            return None
        self._warning = None
        self._publish()
        return feedback

    def next_question(self) -> Question | None:
        question = self._session.next_question()
        self._warning = None
        self._publish()
        return question

    # --- Read accessors ---

    @property
    def quiz_options(self) -> list[QuizSummary]:
        return list(self._quiz_options)

    @property
    def selected_quiz_id(self) -> str | None:
        return self._selected_quiz_id

    @property
    def current_question(self) -> Question | None:
        return self._session.get_current_question()

    @property
    def score(self) -> int:
        return self._session.get_score()

    @property
    def title(self) -> str:
        if self._is_loaded:
            for quiz in self._quiz_options:
                if quiz.id == self._quiz_id:
                    return quiz.name
        return DEFAULT_QUIZ_TITLE

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def warning(self) -> str | None:
        return self._warning

    def snapshot(self) -> QuizSnapshot:
        return QuizSnapshot(
            quiz_options=tuple(self._quiz_options),
            selected_quiz_id=self._selected_quiz_id,
            quiz_id=self._quiz_id,
            title=self.title,
            is_loaded=self._is_loaded,
            question=self._session.get_current_question(),
            position=self._session.get_position(),
            question_count=self._session.get_question_count(),
            options=tuple(self._session.get_options()),
            selected_answers=self._session.get_selected_answers(),
            submitted=self._session.is_submitted(),
            feedback=self._session.get_feedback(),
            score=self._session.get_score(),
            warning=self._warning,
            error=self._error,
        )

    def _warn(self, message: str) -> None:
        log.info("Quiz warning: %s", message)
        self._warning = message
        self.warning_raised.emit(message)
        self._publish()

    def _publish(self) -> None:
        self.state_changed.emit(self.snapshot())
