"""Utilities for importing quizzes from a human-friendly text file.

File format (repeat blocks separated by blank lines or '---'):

    TITLE: Quiz name   (optional, anywhere in the file)
    Q: Question text (supports markdown). Additional lines until the
       next marker are treated as part of the question.
    1: First option text
    2: Second option text
    ...
    5: Fifth option text   (slots may be skipped; at most five)
    CORRECT: 1;3       (option numbers separated by ';')
    MULTIPLE: yes|no   (optional, defaults to no)
    ID: question id    (optional, defaults to <quiz id>-<n>)

Example:

    TITLE: Capitals

    Q: What is the capital of France?
    1: Paris
    3: London
    CORRECT: 1
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ballot_quiz.constants.quiz_constants import CORRECT_ANSWER_DELIMITER, OPTION_VALUES
from ballot_quiz.core.models import Question


class QuizImportError(Exception):
    """Raised when a quiz definition cannot be parsed."""


@dataclass(slots=True)
class ImportedQuiz:
    """Container for imported quiz metadata and questions."""

    quiz_id: str
    title: str
    questions: list[Question]


_TRUE_WORDS = {"yes", "true", "y", "1"}
_FALSE_WORDS = {"no", "false", "n", "0"}


def load_quiz_from_file(file_path: Path, quiz_id: str | None = None) -> ImportedQuiz:
    quiz_id = quiz_id or file_path.stem
    text = file_path.read_text(encoding="utf-8")
    title, questions = parse_quiz_text(text, quiz_id)
    return ImportedQuiz(
        quiz_id=quiz_id,
        title=title or quiz_id,
        questions=questions,
    )


def read_quiz_title(file_path: Path) -> str:
    """Return the TITLE line of a quiz file without parsing the questions."""
    for raw_line in file_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if line.upper().startswith("TITLE:"):
            return line.split(":", 1)[1].strip() or file_path.stem
    return file_path.stem


def parse_quiz_text(text: str, quiz_id: str) -> tuple[str | None, list[Question]]:
    blocks: list[list[str]] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---" or not stripped:
            if current_block:
                blocks.append(current_block)
                current_block = []
            continue
        current_block.append(raw_line)
    if current_block:
        blocks.append(current_block)

    title: str | None = None
    questions: list[Question] = []
    for block in blocks:
        remaining: list[str] = []
        for line in block:
            if line.strip().upper().startswith("TITLE:"):
                title = line.split(":", 1)[1].strip() or None
            else:
                remaining.append(line)
        if remaining:
            default_id = f"{quiz_id}-{len(questions) + 1}"
            questions.append(_parse_block(remaining, default_id))
    return title, questions


def _parse_block(lines: list[str], default_id: str) -> Question:
    question_lines: list[str] = []
    options: dict[str, str] = {}
    correct_raw: str | None = None
    allow_multiple = False
    question_id = default_id
    current_section: str | None = None

    for raw_line in lines:
        line = raw_line.strip()
        upper = line.upper()

        if upper.startswith("Q:"):
            question_lines = [line[2:].strip()]
            current_section = "Q"
            continue

        if upper.startswith("CORRECT:"):
            correct_raw = line.split(":", 1)[1].strip()
            current_section = None
            continue

        if upper.startswith("MULTIPLE:"):
            allow_multiple = _parse_flag(line.split(":", 1)[1])
            current_section = None
            continue

        if upper.startswith("ID:"):
            question_id = line.split(":", 1)[1].strip() or default_id
            current_section = None
            continue

        if len(line) > 2 and line[0] in OPTION_VALUES and line[1] == ":":
            value = line[0]
            if value in options:
                raise QuizImportError(f"Option {value} is defined twice.")
            options[value] = line[2:].strip()
            current_section = value
            continue

        if current_section == "Q":
            question_lines.append(line)
        elif current_section in OPTION_VALUES:
            options[current_section] = options[current_section] + f"\n{line}"
        else:
            raise QuizImportError(f"Encountered text outside of a known section: '{line}'.")

    question_text = "\n".join(question_lines).strip()
    if not question_text:
        raise QuizImportError("Question text missing (Q: ...)")

    if not correct_raw:
        raise QuizImportError("CORRECT must list at least one option number.")
    correct_values = [token.strip() for token in correct_raw.split(CORRECT_ANSWER_DELIMITER)]
    correct_values = [token for token in correct_values if token]
    for value in correct_values:
        if not options.get(value, "").strip():
            raise QuizImportError(f"CORRECT refers to option {value}, which is empty or missing.")
    if len(set(correct_values)) > 1 and not allow_multiple:
        raise QuizImportError("Several correct options require 'MULTIPLE: yes'.")

    return Question(
        id=question_id,
        prompt=question_text,
        option_slots=tuple(options.get(value, "").strip() or None for value in OPTION_VALUES),
        allow_multiple=allow_multiple,
        correct_answers=CORRECT_ANSWER_DELIMITER.join(correct_values),
    )


def _parse_flag(raw_value: str) -> bool:
    word = raw_value.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise QuizImportError(f"MULTIPLE must be yes or no, got '{raw_value.strip()}'.")
