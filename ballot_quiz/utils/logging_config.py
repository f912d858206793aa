"""Logging configuration helpers for BallotQuiz."""

from __future__ import annotations

import logging
from logging import Logger
import os

LOG_LEVEL_ENV = "BALLOT_QUIZ_LOG_LEVEL"


def configure_logging(level: str | None = None) -> Logger:
    """Configure root logging once and return the application logger.

    ``level`` falls back to ``BALLOT_QUIZ_LOG_LEVEL`` and then INFO; unknown
    level names are treated as INFO.
    """
    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    return logging.getLogger("ballot_quiz")
