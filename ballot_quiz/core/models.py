"""Domain models for the quiz player and the candidate picker."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from ballot_quiz.constants.quiz_constants import (
    CORRECT_ANSWER_DELIMITER,
    OPTION_BASE_CLASS,
    OPTION_CORRECT_CLASS,
    OPTION_SLOT_COUNT,
    OPTION_WRONG_CLASS,
)


class RecordFormatError(ValueError):
    """Raised when a backend record is missing required fields."""


class Feedback(Enum):
    """Outcome of grading the current question."""

    CORRECT = "correct"
    INCORRECT = "incorrect"


class OptionStatus(Enum):
    """Correctness tagging applied to an option after submission."""

    NONE = "none"
    CORRECT = "correct"
    WRONG = "wrong"


def _optional_text(value: Any) -> str | None:
    # Backend labels may arrive as JSON numbers; 0 is a label, None is an empty slot.
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True, slots=True)
class QuizSummary:
    """Catalog entry offered in the quiz picker drop-down."""

    id: str
    name: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> QuizSummary:
        quiz_id = record.get("Id")
        if not quiz_id:
            raise RecordFormatError("Quiz record is missing 'Id'.")
        return cls(id=str(quiz_id), name=str(record.get("Name") or quiz_id))


@dataclass(frozen=True, slots=True)
class Question:
    """Question with up to five sparse option slots.

    ``option_slots`` always has five entries; blank entries are empty slots
    that are never rendered. ``correct_answers`` keeps the raw delimited
    string of option values ("1".."5").
    """

    id: str
    prompt: str
    option_slots: tuple[str | None, ...]
    allow_multiple: bool = False
    correct_answers: str = ""

    def __post_init__(self) -> None:
        if len(self.option_slots) != OPTION_SLOT_COUNT:
            raise ValueError(f"A question must have exactly {OPTION_SLOT_COUNT} option slots.")

    @property
    def correct_answer_set(self) -> frozenset[str]:
        tokens = (token.strip() for token in self.correct_answers.split(CORRECT_ANSWER_DELIMITER))
        return frozenset(token for token in tokens if token)

    def filled_slots(self) -> list[tuple[str, str]]:
        """Return ``(value, label)`` for every non-empty slot in slot order."""
        return [
            (str(slot), label)
            for slot, label in enumerate(self.option_slots, start=1)
            if label and label.strip()
        ]

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Question:
        question_id = record.get("Id")
        if not question_id:
            raise RecordFormatError("Question record is missing 'Id'.")
        slots = tuple(
            _optional_text(record.get(f"Option_{slot}__c"))
            for slot in range(1, OPTION_SLOT_COUNT + 1)
        )
        return cls(
            id=str(question_id),
            prompt=str(record.get("Question__c") or ""),
            option_slots=slots,
            allow_multiple=bool(record.get("Allow_Multiple__c")),
            correct_answers=str(record.get("Correct_Answers__c") or ""),
        )


@dataclass(frozen=True, slots=True)
class QuizOption:
    """One rendered answer option of the current question."""

    key: str
    label: str
    value: str
    status: OptionStatus = OptionStatus.NONE

    @property
    def css_class(self) -> str:
        if self.status is OptionStatus.CORRECT:
            return f"{OPTION_BASE_CLASS} {OPTION_CORRECT_CLASS}"
        if self.status is OptionStatus.WRONG:
            return f"{OPTION_BASE_CLASS} {OPTION_WRONG_CLASS}"
        return OPTION_BASE_CLASS


@dataclass(frozen=True, slots=True)
class QuizSnapshot:
    """Immutable view of the quiz player handed to the UI layer."""

    quiz_options: tuple[QuizSummary, ...] = ()
    selected_quiz_id: str | None = None
    quiz_id: str | None = None
    title: str = ""
    is_loaded: bool = False
    question: Question | None = None
    position: int = 0
    question_count: int = 0
    options: tuple[QuizOption, ...] = ()
    selected_answers: frozenset[str] = frozenset()
    submitted: bool = False
    feedback: Feedback | None = None
    score: int = 0
    warning: str | None = None
    error: str | None = None

    @property
    def is_finished(self) -> bool:
        return self.is_loaded and self.question is None and self.question_count > 0

    @property
    def can_submit(self) -> bool:
        return self.question is not None and not self.submitted


@dataclass(frozen=True, slots=True)
class Candidate:
    """Senatorial candidate as published in the static catalog."""

    ballot_number: int
    name: str
    party: str

    @property
    def label(self) -> str:
        return f"{self.ballot_number}. {self.name} ({self.party})"

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Candidate:
        try:
            ballot_number = int(record["ballotNumber"])
        except (KeyError, TypeError, ValueError) as exc:
            raise RecordFormatError("Candidate record needs an integer 'ballotNumber'.") from exc
        return cls(
            ballot_number=ballot_number,
            name=str(record.get("name", "")),
            party=str(record.get("party", "")),
        )


@dataclass(frozen=True, slots=True)
class CandidateView:
    """Candidate row as displayed in a picker column."""

    candidate: Candidate
    comment: str = ""
    checked: bool = False

    @property
    def ballot_number(self) -> int:
        return self.candidate.ballot_number

    @property
    def label(self) -> str:
        return self.candidate.label + self.comment


@dataclass(frozen=True, slots=True)
class PickerSnapshot:
    """Immutable view of the candidate picker."""

    candidates: tuple[CandidateView, ...] = ()
    selected: frozenset[int] = field(default_factory=frozenset)
    column_size: int = 0
    error: str | None = None

    @property
    def selected_count(self) -> int:
        return len(self.selected)

    @property
    def selected_count_label(self) -> str:
        return "candidate" if self.selected_count == 1 else "candidates"
