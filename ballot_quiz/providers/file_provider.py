"""Providers backed by local files, used when no remote backend is configured."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from ballot_quiz.core.models import Candidate, Question, QuizSummary, RecordFormatError
from ballot_quiz.core.quiz_importer import QuizImportError, load_quiz_from_file, read_quiz_title
from ballot_quiz.providers.base import ProviderError

log = logging.getLogger(__name__)

_QUIZ_SUFFIX = ".txt"


class FileQuizProvider:
    """Serves every ``*.txt`` quiz file in a directory; the file stem is the quiz id.

    File reads run in a worker thread, like the HTTP providers' requests.
    """

    def __init__(self, quiz_dir: Path) -> None:
        self._quiz_dir = quiz_dir

    async def get_quizzes(self) -> list[QuizSummary]:
        return await asyncio.to_thread(self._read_catalog)

    async def get_questions(self, quiz_id: str) -> list[Question]:
        return await asyncio.to_thread(self._read_questions, quiz_id)

    def _read_catalog(self) -> list[QuizSummary]:
        if not self._quiz_dir.is_dir():
            raise ProviderError(f"Quiz directory {self._quiz_dir} does not exist.")
        quizzes: list[QuizSummary] = []
        for path in sorted(self._quiz_dir.glob(f"*{_QUIZ_SUFFIX}")):
            try:
                title = read_quiz_title(path)
            except (OSError, ValueError) as exc:
                log.error("Could not read quiz title from %s: %s", path, exc)
                raise ProviderError(f"Quiz file {path.name} could not be read: {exc}") from exc
            quizzes.append(QuizSummary(id=path.stem, name=title))
        return quizzes

    def _read_questions(self, quiz_id: str) -> list[Question]:
        path = self._quiz_dir / f"{quiz_id}{_QUIZ_SUFFIX}"
        if path.parent != self._quiz_dir or not path.is_file():
            raise ProviderError(f"Unknown quiz '{quiz_id}'.")
        try:
            return load_quiz_from_file(path, quiz_id=quiz_id).questions
        except (OSError, ValueError, QuizImportError) as exc:
            # ValueError covers UnicodeDecodeError from files that are not UTF-8.
            log.error("Could not import quiz %s: %s", path, exc)
            raise ProviderError(f"Quiz '{quiz_id}' could not be read: {exc}") from exc


class FileCandidateCatalog:
    """Candidate list from a JSON file of ``{ballotNumber, name, party}`` records."""

    def __init__(self, path: Path) -> None:
        self._path = path

    async def get_candidates(self) -> list[Candidate]:
        return await asyncio.to_thread(self._read_candidates)

    def _read_candidates(self) -> list[Candidate]:
        try:
            records = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            log.error("Could not read candidate catalog %s: %s", self._path, exc)
            raise ProviderError(f"Candidate catalog could not be read: {exc}") from exc
        if not isinstance(records, list):
            raise ProviderError("Candidate catalog must be a JSON list.")
        try:
            return [Candidate.from_record(record) for record in records]
        except RecordFormatError as exc:
            raise ProviderError(str(exc)) from exc
