"""Providers that call the remote quiz backend and candidate catalog over HTTP."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, TypeVar
from urllib.parse import quote

import requests

from ballot_quiz.constants.network_constants import REQUEST_TIMEOUT_SECONDS
from ballot_quiz.core.models import Candidate, Question, QuizSummary, RecordFormatError
from ballot_quiz.providers.base import ProviderError

log = logging.getLogger(__name__)

_T = TypeVar("_T")


def _get_json(session: requests.Session | None, url: str, timeout: float) -> list[dict[str, Any]]:
    # Catalog and question fetches can run in parallel worker threads and a
    # requests.Session is not safe to share between them, so without an
    # explicitly injected session every call is a standalone requests.get.
    http = session if session is not None else requests
    try:
        response = http.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as exc:
        log.error("Fetching %s failed: %s", url, exc)
        raise ProviderError(f"Could not load {url}: {exc}") from exc
    if not isinstance(data, list):
        raise ProviderError(f"Expected a JSON list from {url}.")
    return data


def _parse_records(
    records: list[dict[str, Any]], parse: Callable[[Any], _T], url: str
) -> list[_T]:
    try:
        return [parse(record) for record in records]
    except RecordFormatError as exc:
        raise ProviderError(str(exc)) from exc
    except (AttributeError, TypeError) as exc:
        log.error("Malformed record from %s: %s", url, exc)
        raise ProviderError(f"Malformed record from {url}: {exc}") from exc


class HttpQuizProvider:
    """Quiz catalog and questions from ``{base_url}/quizzes`` endpoints.

    Blocking ``requests`` calls run in a worker thread so the event loop that
    drives the widgets never blocks.
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._timeout = timeout

    async def get_quizzes(self) -> list[QuizSummary]:
        url = f"{self._base_url}/quizzes"
        records = await asyncio.to_thread(_get_json, self._session, url, self._timeout)
        return _parse_records(records, QuizSummary.from_record, url)

    async def get_questions(self, quiz_id: str) -> list[Question]:
        url = f"{self._base_url}/quizzes/{quote(quiz_id, safe='')}/questions"
        records = await asyncio.to_thread(_get_json, self._session, url, self._timeout)
        return _parse_records(records, Question.from_record, url)


class HttpCandidateCatalog:
    """Candidate list published as a static JSON resource."""

    def __init__(
        self,
        url: str,
        *,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self._url = url
        self._session = session
        self._timeout = timeout

    async def get_candidates(self) -> list[Candidate]:
        records = await asyncio.to_thread(_get_json, self._session, self._url, self._timeout)
        return _parse_records(records, Candidate.from_record, self._url)
