"""Service for managing the answer lifecycle of a single loaded quiz."""

from __future__ import annotations

import random

from ballot_quiz.core.models import Feedback, OptionStatus, Question, QuizOption


class QuizStateError(RuntimeError):
    """Raised when a command does not fit the current question state."""


class NoAnswerSelectedError(QuizStateError):
    """Raised when submitting without any selected answer."""


class QuizSession:
    """Question progression, answer selection, grading and score.

    The session is created empty, filled by ``load_questions`` and walked
    forward with ``next_question``. The position never decreases; once it
    reaches the number of questions there is no current question and the
    score is frozen.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        shuffle_questions: bool = False,
        shuffle_options: bool = False,
    ) -> None:
        self._rng = rng or random.Random()
        self.shuffle_questions = shuffle_questions
        self.shuffle_options = shuffle_options

        self._questions: list[Question] = []
        self._position: int = 0
        self._options: list[QuizOption] = []
        self._selected: set[str] = set()
        self._submitted: bool = False
        self._feedback: Feedback | None = None
        self._score: int = 0

    def load_questions(self, questions: list[Question]) -> None:
        """Replace the quiz and restart at the first question.

        The new question list and its first option list are built before any
        state is touched, so a question that cannot be rendered leaves the
        previous quiz in place.
        """
        ordered = list(questions)
        if self.shuffle_questions:
            self._rng.shuffle(ordered)
        options = self._build_options(ordered[0] if ordered else None)

        self._questions = ordered
        self._position = 0
        self._score = 0
        self._selected = set()
        self._submitted = False
        self._feedback = None
        self._options = options

    def get_questions(self) -> list[Question]:
        return list(self._questions)

    def get_question_count(self) -> int:
        return len(self._questions)

    def get_position(self) -> int:
        return self._position

    def get_current_question(self) -> Question | None:
        if self._position < len(self._questions):
            return self._questions[self._position]
        return None

    def is_finished(self) -> bool:
        return bool(self._questions) and self.get_current_question() is None

    def get_selected_answers(self) -> frozenset[str]:
        return frozenset(self._selected)

    def is_submitted(self) -> bool:
        return self._submitted

    def get_feedback(self) -> Feedback | None:
        return self._feedback

    def get_score(self) -> int:
        return self._score

    def get_options(self) -> list[QuizOption]:
        """Options of the current question, tagged for correctness once submitted."""
        question = self.get_current_question()
        if question is None:
            return []
        if not self._submitted:
            return list(self._options)

        correct = question.correct_answer_set
        tagged: list[QuizOption] = []
        for option in self._options:
            status = OptionStatus.NONE
            if option.value in correct:
                status = OptionStatus.CORRECT
            elif option.value in self._selected:
                status = OptionStatus.WRONG
            tagged.append(
                QuizOption(key=option.key, label=option.label, value=option.value, status=status)
            )
        return tagged

    def set_answer(self, value: str, is_add: bool = True) -> None:
        question = self._require_question()
        if self._submitted:
            raise QuizStateError("Answers cannot change after submission.")
        if value not in {option.value for option in self._options}:
            raise ValueError(f"'{value}' is not an option of the current question.")

        if not question.allow_multiple:
            self._selected = {value}
        elif is_add:
            self._selected.add(value)
        else:
            self._selected.discard(value)

    def submit(self) -> Feedback:
        """Grade the current selection against the correct-answer set."""
        question = self._require_question()
        if self._submitted:
            raise QuizStateError("The current question has already been submitted.")
        if not self._selected:
            raise NoAnswerSelectedError("No answer selected.")

        self._submitted = True
        if sorted(self._selected) == sorted(question.correct_answer_set):
            self._feedback = Feedback.CORRECT
            self._score += 1
        else:
            self._feedback = Feedback.INCORRECT
        return self._feedback

    def next_question(self) -> Question | None:
        """Advance one question; returns the new current question or None at the end."""
        if self._position >= len(self._questions):
            return None
        self._position += 1
        self._reset_question_state()
        return self.get_current_question()

    def _require_question(self) -> Question:
        question = self.get_current_question()
        if question is None:
            raise QuizStateError("There is no current question.")
        return question

    def _reset_question_state(self) -> None:
        self._selected = set()
        self._submitted = False
        self._feedback = None
        self._options = self._build_options(self.get_current_question())

    def _build_options(self, question: Question | None) -> list[QuizOption]:
        if question is None:
            return []
        options = [
            QuizOption(key=f"{question.id}:{value}", label=label, value=value)
            for value, label in question.filled_slots()
        ]
        if self.shuffle_options:
            self._rng.shuffle(options)
        return options
