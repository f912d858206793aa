"""Application entry point for the BallotQuiz widget server."""

from __future__ import annotations

import random

from ballot_quiz.constants.network_constants import (
    BACKEND_URL,
    CANDIDATES_FILE_NAME,
    CANDIDATES_URL,
    DATA_DIR,
    DEFAULT_HOST,
    DEFAULT_PORT,
    QUIZ_DIR_NAME,
    SHUFFLE_OPTIONS,
    SHUFFLE_QUESTIONS,
    SHUFFLE_SEED,
)
from ballot_quiz.core.candidate_picker import CandidatePicker
from ballot_quiz.core.quiz_player import QuizPlayer
from ballot_quiz.providers import (
    CandidateCatalog,
    FileCandidateCatalog,
    FileQuizProvider,
    HttpCandidateCatalog,
    HttpQuizProvider,
    QuizDataProvider,
)
from ballot_quiz.server.api_server import run_api_server
from ballot_quiz.utils.logging_config import configure_logging


def _build_providers() -> tuple[QuizDataProvider, CandidateCatalog]:
    """Use the remote backend when configured, local sample data otherwise."""
    quiz_provider: QuizDataProvider
    if BACKEND_URL:
        quiz_provider = HttpQuizProvider(BACKEND_URL)
    else:
        quiz_provider = FileQuizProvider(DATA_DIR / QUIZ_DIR_NAME)

    catalog: CandidateCatalog
    if CANDIDATES_URL:
        catalog = HttpCandidateCatalog(CANDIDATES_URL)
    else:
        catalog = FileCandidateCatalog(DATA_DIR / CANDIDATES_FILE_NAME)
    return quiz_provider, catalog


def main() -> None:
    """Initialize logging, build both widgets and serve them over HTTP."""
    logger = configure_logging()
    logger.info("Starting BallotQuiz…")

    quiz_provider, catalog = _build_providers()
    quiz_player = QuizPlayer(
        quiz_provider,
        shuffle_questions=SHUFFLE_QUESTIONS,
        shuffle_options=SHUFFLE_OPTIONS,
        rng=random.Random(SHUFFLE_SEED),
    )
    candidate_picker = CandidatePicker(catalog)

    logger.info("Serving widgets at http://%s:%d/", DEFAULT_HOST, DEFAULT_PORT)
    run_api_server(quiz_player, candidate_picker, host=DEFAULT_HOST, port=DEFAULT_PORT)


if __name__ == "__main__":
    main()
